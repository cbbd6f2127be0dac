import pytest

from webdriver_client import main as main_module
from webdriver_client.config.config import ClientConfig
from webdriver_client.core import session as session_module
from webdriver_client.core import status as status_module
from webdriver_client.core.errors import InvalidSessionIdError, NoSuchWindowError, SessionNotCreatedError


class FakeSession:
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.navigated = []
        self.closed = False
        self.id = "session-1"
        FakeSession.instances.append(self)

    def navigate(self, url):
        self.navigated.append(url)

    def current_url(self):
        return self.navigated[-1]

    def title(self):
        return "Example Domain"

    def status(self):
        return {"ready": True}

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def quiet_setup(monkeypatch):
    FakeSession.instances = []
    monkeypatch.setattr(main_module, "configure_logging", lambda level=None: None)
    monkeypatch.setattr(session_module, "Session", FakeSession)


def _use_config(monkeypatch, config):
    monkeypatch.setattr(main_module, "load_or_default", lambda: config)


def _server_ready(monkeypatch, ready=True):
    calls = []

    def fake_wait(**kwargs):
        calls.append(kwargs)
        return ready

    monkeypatch.setattr(status_module, "wait_for_server_available", fake_wait)
    return calls


def test_main_opens_navigates_and_closes(monkeypatch):
    _use_config(monkeypatch, ClientConfig(browser="chrome", port=4445, start_url="https://example.com/", timeout=10,
                                            server_wait=15))
    waits = _server_ready(monkeypatch)

    assert main_module.main() == 0

    assert waits == [{"timeout": 15, "port": 4445, "host": "localhost", "verbose": False}]
    (opened,) = FakeSession.instances
    assert opened.kwargs["browser"] == "chrome"
    assert opened.kwargs["timeout"] == 10
    assert opened.navigated == ["https://example.com/"]
    assert opened.closed


def test_main_without_start_url_only_reports_status(monkeypatch):
    _use_config(monkeypatch, ClientConfig())
    _server_ready(monkeypatch)

    assert main_module.main() == 0
    assert FakeSession.instances[0].navigated == []
    assert FakeSession.instances[0].closed


def test_main_fails_when_server_not_ready(monkeypatch):
    _use_config(monkeypatch, ClientConfig())
    _server_ready(monkeypatch, ready=False)

    assert main_module.main() == 1
    assert FakeSession.instances == []


def test_main_fails_when_session_cannot_be_created(monkeypatch):
    _use_config(monkeypatch, ClientConfig())
    _server_ready(monkeypatch)

    def refuse(**kwargs):
        raise SessionNotCreatedError("session not created", "no matching capabilities")

    monkeypatch.setattr(session_module, "Session", refuse)

    assert main_module.main() == 1


def test_main_waits_for_server_independently_of_request_timeout(monkeypatch):
    _use_config(monkeypatch, ClientConfig(timeout=5))
    waits = _server_ready(monkeypatch)

    assert main_module.main() == 0
    assert waits[0]["timeout"] == 60
    assert FakeSession.instances[0].kwargs["timeout"] == 5


def test_main_reports_failed_command_and_still_closes(monkeypatch):
    _use_config(monkeypatch, ClientConfig(start_url="https://example.com/"))
    _server_ready(monkeypatch)

    def fail(self, url):
        raise NoSuchWindowError("no such window", "browsing context has been discarded")

    monkeypatch.setattr(FakeSession, "navigate", fail)

    assert main_module.main() == 1
    assert FakeSession.instances[0].closed


def test_main_returns_error_code_when_close_fails(monkeypatch):
    _use_config(monkeypatch, ClientConfig())
    _server_ready(monkeypatch)

    def fail(self):
        raise InvalidSessionIdError("invalid session id", "session deleted")

    monkeypatch.setattr(FakeSession, "close", fail)

    assert main_module.main() == 1
