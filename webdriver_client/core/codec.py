"""Conversion between proxy objects and WebDriver wire references.

Elements and shadow roots travel over the wire as single-entry objects keyed
by a fixed tag (`ELEMENT_KEY` / `SHADOW_KEY`). `encode` prepares script
arguments and action origins for sending; `decode` turns script results back
into proxies bound to a session.

Only lists (and tuples, on the way out) are walked. Dicts are passed through
as they are, so a reference nested inside a dict result stays a raw dict.
"""

from typing import Any, Protocol

from webdriver_client.core.element import ELEMENT_KEY, SHADOW_KEY, ShadowRoot, WebElement


class ReferenceFactory(Protocol):
    def create_web_element(self, id: str) -> WebElement:
        ...

    def create_shadow_root(self, id: str) -> ShadowRoot:
        ...


def encode(value: Any) -> Any:
    if isinstance(value, (WebElement, ShadowRoot)):
        return value.to_json()
    if isinstance(value, (list, tuple)):
        return [encode(item) for item in value]
    return value


def is_reference(value: Any) -> bool:
    """True for a single-key dict whose key is the element or shadow-root tag.

    A script result that happens to have this shape is indistinguishable
    from a real reference and is always treated as one.
    """
    return isinstance(value, dict) and len(value) == 1 and next(iter(value)) in (ELEMENT_KEY, SHADOW_KEY)


def decode(value: Any, session: ReferenceFactory) -> Any:
    if is_reference(value):
        if ELEMENT_KEY in value:
            return session.create_web_element(value[ELEMENT_KEY])
        return session.create_shadow_root(value[SHADOW_KEY])
    if isinstance(value, list):
        return [decode(item, session) for item in value]
    return value
