import pytest

from tests.fakes import SESSION_ID, FakeTransport, new_session_response
from webdriver_client.core.element import WebElement
from webdriver_client.core.session import Session


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def session(fake_transport):
    """An open Session on a FakeTransport, with the New Session request already cleared."""
    fake_transport.queue(new_session_response())
    opened = Session(transport=fake_transport)
    fake_transport.requests.clear()
    return opened


@pytest.fixture
def element(fake_transport):
    return WebElement(SESSION_ID, fake_transport, "element-1")
