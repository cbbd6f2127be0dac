import pytest

from tests.fakes import SESSION_ID
from webdriver_client.core.element import ELEMENT_KEY, SHADOW_KEY, By, ShadowRoot, WebElement, locator_body
from webdriver_client.core.errors import MalformedResponseError, NoSuchElementError, remote_error_for
from webdriver_client.core.keys import Keys

ELEMENT_PATH = f"/session/{SESSION_ID}/element/element-1"


@pytest.mark.parametrize(
    "call, method, suffix",
    [
        (lambda e: e.is_selected(), "GET", "/selected"),
        (lambda e: e.is_enabled(), "GET", "/enabled"),
        (lambda e: e.is_displayed(), "GET", "/displayed"),
        (lambda e: e.get_attribute("href"), "GET", "/attribute/href"),
        (lambda e: e.get_property("value"), "GET", "/property/value"),
        (lambda e: e.get_css_value("color"), "GET", "/css/color"),
        (lambda e: e.get_text(), "GET", "/text"),
        (lambda e: e.get_tag_name(), "GET", "/name"),
        (lambda e: e.get_rect(), "GET", "/rect"),
        (lambda e: e.computed_role(), "GET", "/computedrole"),
        (lambda e: e.computed_label(), "GET", "/computedlabel"),
        (lambda e: e.screenshot(), "GET", "/screenshot"),
    ],
)
def test_getters_use_element_paths_and_default_timeout(element, fake_transport, call, method, suffix):
    call(element)

    assert fake_transport.requests == [(method, ELEMENT_PATH + suffix, None, 20)]


def test_getter_returns_response_value(element, fake_transport):
    fake_transport.queue({"value": "Submit"})

    assert element.get_text() == "Submit"


def test_click_and_clear_send_empty_body(element, fake_transport):
    element.click()
    element.clear(timeout=3)

    assert fake_transport.requests == [
        ("POST", ELEMENT_PATH + "/click", {}, 20),
        ("POST", ELEMENT_PATH + "/clear", {}, 3),
    ]


def test_send_keys_joins_text_and_special_keys(element, fake_transport):
    element.send_keys("hello", Keys.ENTER)

    assert fake_transport.requests == [("POST", ELEMENT_PATH + "/value", {"text": "hello" + chr(0xE007)}, 20)]


def test_send_keys_rejects_non_strings(element, fake_transport):
    with pytest.raises(TypeError):
        element.send_keys("a", 1)

    assert fake_transport.requests == []


def test_send_keys_request_body_override(element, fake_transport):
    element.send_keys("ignored", request_body={"text": "x", "value": ["x"]})

    assert fake_transport.last_body == {"text": "x", "value": ["x"]}


def test_negative_timeout_is_rejected(element, fake_transport):
    with pytest.raises(ValueError):
        element.get_text(timeout=-1)

    assert fake_transport.requests == []


def test_find_element_from_element(element, fake_transport):
    fake_transport.queue({"value": {ELEMENT_KEY: "child"}})

    child = element.find_element("span", using=By.TAG_NAME)

    assert child == WebElement(SESSION_ID, fake_transport, "child")
    assert fake_transport.requests == [
        ("POST", ELEMENT_PATH + "/element", {"using": "tag name", "value": "span"}, 20)
    ]


def test_find_elements_from_element(element, fake_transport):
    fake_transport.queue({"value": [{ELEMENT_KEY: "a"}, {ELEMENT_KEY: "b"}]})

    children = element.find_elements("li")

    assert [child.id for child in children] == ["a", "b"]
    assert fake_transport.requests[-1][1] == ELEMENT_PATH + "/elements"


def test_find_element_propagates_no_such_element(element, fake_transport):
    fake_transport.queue(remote_error_for("no such element", "Unable to locate element: .missing", status=404))

    with pytest.raises(NoSuchElementError):
        element.find_element(".missing")


def test_find_element_rejects_malformed_reference(element, fake_transport):
    fake_transport.queue({"value": {"id": "child"}})

    with pytest.raises(MalformedResponseError):
        element.find_element("span")


def test_shadow_root_and_find_inside_it(element, fake_transport):
    fake_transport.queue(
        {"value": {SHADOW_KEY: "root-1"}},
        {"value": {ELEMENT_KEY: "inner"}},
        {"value": []},
    )

    root = element.shadow_root()
    inner = root.find_element("button")
    none_found = root.find_elements("p", using="xpath")

    assert root == ShadowRoot(SESSION_ID, fake_transport, "root-1")
    assert inner.id == "inner"
    assert none_found == []
    assert fake_transport.calls == [
        ("GET", ELEMENT_PATH + "/shadow"),
        ("POST", f"/session/{SESSION_ID}/shadow/root-1/element"),
        ("POST", f"/session/{SESSION_ID}/shadow/root-1/elements"),
    ]


def test_to_json():
    assert WebElement(SESSION_ID, None, "e1").to_json() == {ELEMENT_KEY: "e1"}
    assert ShadowRoot(SESSION_ID, None, "r1").to_json() == {SHADOW_KEY: "r1"}


def test_proxies_compare_by_session_and_id(fake_transport):
    first = WebElement(SESSION_ID, fake_transport, "e1")

    assert first == WebElement(SESSION_ID, None, "e1")
    assert first != WebElement("other-session", fake_transport, "e1")
    assert first != ShadowRoot(SESSION_ID, fake_transport, "e1")
    assert len({first, WebElement(SESSION_ID, fake_transport, "e1")}) == 1


def test_locator_body_validation():
    assert locator_body("//a", "xpath") == {"using": "xpath", "value": "//a"}
    with pytest.raises(ValueError):
        locator_body("a", "id")
    with pytest.raises(TypeError):
        locator_body(None, By.CSS_SELECTOR)
