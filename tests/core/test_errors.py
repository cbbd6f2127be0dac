import pytest

from webdriver_client.core.errors import REMOTE_ERRORS, CommandTimeoutError, MalformedResponseError, \
    NoSuchElementError, RemoteCommandError, StaleElementReferenceError, UnknownCommandError, WebDriverError, \
    remote_error_for, strip_code_prefix


def test_known_codes_map_to_subclasses():
    error = remote_error_for("no such element", "Unable to locate element", status=404)

    assert isinstance(error, NoSuchElementError)
    assert isinstance(error, RemoteCommandError)
    assert error.code == "no such element"
    assert error.status == 404


@pytest.mark.parametrize("code", sorted(REMOTE_ERRORS))
def test_every_registered_code_builds_its_class(code):
    assert type(remote_error_for(code, "boom")) is REMOTE_ERRORS[code]


def test_unknown_code_falls_back_to_base_class():
    error = remote_error_for("something new", "details")

    assert type(error) is RemoteCommandError
    assert error.code == "something new"


def test_message_prefix_is_stripped_once():
    error = remote_error_for("stale element reference", "stale element reference: stale element reference: gone")

    assert isinstance(error, StaleElementReferenceError)
    assert error.message == "stale element reference: gone"


def test_strip_code_prefix_leaves_other_messages_alone():
    assert strip_code_prefix("no such window", "window was closed") == "window was closed"


def test_display_text_is_sentence_cased_code_and_message():
    error = remote_error_for("invalid argument", "invalid argument: bad url")

    assert str(error) == "Invalid argument: bad url"


def test_stacktrace_is_kept():
    error = remote_error_for("javascript error", "x is not defined", stacktrace="at line 1")

    assert error.stacktrace == "at line 1"


def test_local_errors_share_the_base_class():
    assert issubclass(UnknownCommandError, WebDriverError)
    assert issubclass(MalformedResponseError, WebDriverError)


def test_command_timeout_is_a_builtin_timeout():
    error = CommandTimeoutError("GET", "http://localhost:4444/status", 2)

    assert isinstance(error, TimeoutError)
    assert isinstance(error, WebDriverError)
    assert error.timeout == 2
    assert "timed out after 2 seconds" in str(error)


def test_malformed_response_truncates_body():
    error = MalformedResponseError("Bad body", "x" * 500)

    assert error.body == "x" * 500
    assert len(str(error)) < 250
