"""Input actions and their grouping into per-device sequences.

Build a stream with `actions_stream(...)` and run it with
`Session.perform_actions`:

    stream = actions_stream(
        mouse_move(0, 0, origin=button),
        mouse_down(),
        mouse_up(),
        pause(0.5),
        press("a"),
        release("a"),
    )
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator

from webdriver_client.core.codec import encode
from webdriver_client.core.element import WebElement

NONE = "none"
KEY = "key"
POINTER = "pointer"
WHEEL = "wheel"

POINTER_ORIGINS = ("viewport", "pointer")


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class Action(ABC):
    device_type: ClassVar[str]

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Wire representation of the action."""


@dataclass(frozen=True)
class Pause(Action):
    device_type: ClassVar[str] = NONE
    duration: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": "pause", "duration": self.duration}


@dataclass(frozen=True)
class KeyDown(Action):
    device_type: ClassVar[str] = KEY
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "keyDown", "value": self.value}


@dataclass(frozen=True)
class KeyUp(Action):
    device_type: ClassVar[str] = KEY
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "keyUp", "value": self.value}


@dataclass(frozen=True)
class _PointerButtonAction(Action):
    device_type: ClassVar[str] = POINTER
    wire_type: ClassVar[str]
    button: int = 0
    width: float | None = None
    height: float | None = None
    pressure: float | None = None
    tangential_pressure: float | None = None
    tilt_x: int | None = None
    tilt_y: int | None = None
    twist: int | None = None
    altitude_angle: float | None = None
    azimuth_angle: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "type": self.wire_type,
            "button": self.button,
            "width": self.width,
            "height": self.height,
            "pressure": self.pressure,
            "tangentialPressure": self.tangential_pressure,
            "tiltX": self.tilt_x,
            "tiltY": self.tilt_y,
            "twist": self.twist,
            "altitudeAngle": self.altitude_angle,
            "azimuthAngle": self.azimuth_angle,
        })


@dataclass(frozen=True)
class PointerDown(_PointerButtonAction):
    wire_type: ClassVar[str] = "pointerDown"


@dataclass(frozen=True)
class PointerUp(_PointerButtonAction):
    wire_type: ClassVar[str] = "pointerUp"


@dataclass(frozen=True)
class PointerMove(Action):
    device_type: ClassVar[str] = POINTER
    x: float
    y: float
    duration: int | None = None
    origin: str | WebElement = "viewport"

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "type": "pointerMove",
            "x": self.x,
            "y": self.y,
            "duration": self.duration,
            "origin": encode(self.origin),
        })


@dataclass(frozen=True)
class Scroll(Action):
    device_type: ClassVar[str] = WHEEL
    x: float
    y: float
    delta_x: float
    delta_y: float
    duration: int | None = None
    origin: str | WebElement = "viewport"

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "type": "scroll",
            "x": self.x,
            "y": self.y,
            "duration": self.duration,
            "origin": encode(self.origin),
            "deltaX": self.delta_x,
            "deltaY": self.delta_y,
        })


def _new_sequence_id() -> str:
    # Only needs to be unique within one request.
    return str(random.randint(0, 1_000_000))


@dataclass
class ActionSequence:
    """Actions of a single input source, in the order they are performed."""
    type: str
    id: str = field(default_factory=_new_sequence_id)
    actions: list[Action] = field(default_factory=list)

    def accepts(self, action: Action) -> bool:
        return action.device_type == NONE or self.type in (NONE, action.device_type)

    def add(self, action: Action) -> None:
        if self.type == NONE:
            self.type = action.device_type
        self.actions.append(action)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "id": self.id,
            "actions": [action.to_dict() for action in self.actions],
        }


@dataclass
class ActionsStream:
    sequences: list[ActionSequence] = field(default_factory=list)

    def __iter__(self) -> Iterator[ActionSequence]:
        return iter(self.sequences)

    def __len__(self) -> int:
        return len(self.sequences)

    def __getitem__(self, index: int) -> ActionSequence:
        return self.sequences[index]

    def append(self, action: Action) -> None:
        """Add `action` to the current sequence, or open a new one.

        Pauses always join the current sequence. A sequence that so far only
        holds pauses takes on the type of the first other action added to it.
        Any other type change starts a new sequence.
        """
        if not isinstance(action, Action):
            raise TypeError(f"Expected an action, got: {type(action).__name__}")

        if self.sequences and self.sequences[-1].accepts(action):
            self.sequences[-1].add(action)
            return

        self.sequences.append(ActionSequence(type=action.device_type, actions=[action]))

    def to_list(self) -> list[dict[str, Any]]:
        return [sequence.to_dict() for sequence in self.sequences]


def actions_stream(*actions: Action) -> ActionsStream:
    stream = ActionsStream()
    for action in actions:
        stream.append(action)
    return stream


def _check_key(key: str) -> None:
    # A key may be a grapheme cluster of several code points, e.g. a letter plus a combining accent.
    if not isinstance(key, str) or not key:
        raise ValueError(f"`key` must be a non-empty string, got: {key!r}")


def _check_origin(origin: Any, allowed: tuple[str, ...]) -> None:
    if isinstance(origin, WebElement):
        return
    if origin not in allowed:
        raise ValueError(f"`origin` must be a WebElement or one of {allowed}, got: {origin!r}")


def pause(seconds: float) -> Pause:
    """Wait for `seconds`; sent to the server in milliseconds."""
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)) or seconds < 0:
        raise ValueError(f"`seconds` must be a non-negative number, got: {seconds!r}")
    return Pause(duration=int(round(seconds * 1000)))


def press(key: str) -> KeyDown:
    """Press a key. `key` is one character (one grapheme) or a `Keys` constant."""
    _check_key(key)
    return KeyDown(value=key)


def release(key: str) -> KeyUp:
    _check_key(key)
    return KeyUp(value=key)


def mouse_down(button: int = 0, **parameters: Any) -> PointerDown:
    """Press a pointer button (0 left, 1 middle, 2 right).

    Extra keyword arguments are the optional pointer parameters of
    `PointerDown` (`width`, `pressure`, `tilt_x`, ...).
    """
    return PointerDown(button=button, **parameters)


def mouse_up(button: int = 0, **parameters: Any) -> PointerUp:
    return PointerUp(button=button, **parameters)


def mouse_move(x: float, y: float, duration: int | None = None, origin: str | WebElement = "viewport") -> PointerMove:
    """Move the pointer to (`x`, `y`) relative to `origin`.

    `origin` is "viewport", "pointer" (the current position) or an element,
    in which case the offset is from the element's centre.
    """
    _check_origin(origin, POINTER_ORIGINS)
    return PointerMove(x=x, y=y, duration=duration, origin=origin)


def scroll(
    x: float,
    y: float,
    delta_x: float,
    delta_y: float,
    duration: int | None = None,
    origin: str | WebElement = "viewport",
) -> Scroll:
    _check_origin(origin, ("viewport",))
    return Scroll(x=x, y=y, delta_x=delta_x, delta_y=delta_y, duration=duration, origin=origin)
