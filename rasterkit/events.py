"""Input events, their queue, and per-frame input state."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any, Dict, Optional

from rasterkit.containers import RingBuffer

__all__ = [
    "EventType",
    "WindowEventType",
    "KeyboardEventType",
    "MouseEventType",
    "MouseButton",
    "Key",
    "Event",
    "Button",
    "FrameEvents",
    "post_event",
    "format_event",
    "resolve_frame_events",
]


class EventType(IntEnum):
    NONE = 0
    WINDOW = 1
    PROCESS = 2
    KEYBOARD = 3
    MOUSE = 4


class WindowEventType(IntEnum):
    NONE = 0
    RESIZE = 1
    MOVE = 2


class KeyboardEventType(IntEnum):
    NONE = 0
    PRESS = 1
    RELEASE = 2


class MouseEventType(IntEnum):
    NONE = 0
    PRESS = 1
    RELEASE = 2
    SCROLL = 3
    MOVE = 4
    ENTER = 5
    LEAVE = 6


class MouseButton(IntEnum):
    NONE = 0
    LEFT = 1
    MIDDLE = 2
    RIGHT = 3
    BACK = 4
    FORWARD = 5


class Key(IntEnum):
    NONE = 0
    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8
    I = 9  # noqa: E741
    J = 10
    K = 11
    L = 12
    M = 13
    N = 14
    O = 15  # noqa: E741
    P = 16
    Q = 17
    R = 18
    S = 19
    T = 20
    U = 21
    V = 22
    W = 23
    X = 24
    Y = 25
    Z = 26
    N1 = 27
    N2 = 28
    N3 = 29
    N4 = 30
    N5 = 31
    N6 = 32
    N7 = 33
    N8 = 34
    N9 = 35
    N0 = 36
    F1 = 37
    F2 = 38
    F3 = 39
    F4 = 40
    F5 = 41
    F6 = 42
    F7 = 43
    F8 = 44
    F9 = 45
    F10 = 46
    F11 = 47
    F12 = 48
    LEFT_CONTROL = 49
    RIGHT_CONTROL = 50
    LEFT_SHIFT = 51
    RIGHT_SHIFT = 52
    GRAVE = 53
    ESCAPE = 54


_TRACKED_KEYS = tuple(
    key for key in Key if key not in (Key.NONE, Key.RIGHT_CONTROL, Key.RIGHT_SHIFT)
)
_HANDLED_KEYS = frozenset(_TRACKED_KEYS) - {Key.LEFT_SHIFT}
_TRACKED_BUTTONS = (MouseButton.LEFT, MouseButton.RIGHT, MouseButton.MIDDLE)


@dataclass
class Event:
    """One input event.

    ``action`` holds the window, keyboard or mouse sub-type that matches
    ``type``. ``window`` is the object a window event refers to.
    """

    type: EventType = EventType.NONE
    action: int = 0
    key: Key = Key.NONE
    button: MouseButton = MouseButton.NONE
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    scroll: int = 0
    window: Any = None
    time: int = 0


@dataclass
class Button:
    """State of one key or mouse button, with the times of its changes."""

    pressed: bool = False
    press_time: int = 0
    release_time: int = 0
    action_time: int = 0

    def update(self, time: int, pressed: bool) -> "Button":
        """Record a press or release at ``time``."""
        if pressed and not self.pressed:
            self.press_time = time
        elif self.pressed:
            self.release_time = time
        self.action_time = time
        self.pressed = pressed
        return self


@dataclass
class FrameEvents:
    """Input state gathered for one frame."""

    mouse_move_time: int = 0
    mouse_x: int = 0
    mouse_y: int = 0
    mouse_dx: int = 0
    mouse_dy: int = 0
    window_x: int = 0
    window_y: int = 0
    window_width: int = 0
    window_height: int = 0
    window_resized: bool = False
    window_moved: bool = False
    mouse_scroll: int = 0
    keys: Dict[Key, Button] = field(
        default_factory=lambda: {key: Button() for key in _TRACKED_KEYS}
    )
    mouse: Dict[MouseButton, Button] = field(
        default_factory=lambda: {button: Button() for button in _TRACKED_BUTTONS}
    )
    keep_terminal_open: bool = False
    dt: int = 0
    time: int = 0


def post_event(ring: RingBuffer, event: Event, now: int) -> Event:
    """Stamp ``event`` with ``now`` and queue it; returns the queued event."""
    stamped = replace(event, time=now)
    ring.push(stamped)
    return stamped


def format_event(event: Event, now: int) -> str:
    """A one-line description of ``event`` and its age in microseconds."""
    parts = []
    if event.type == EventType.WINDOW:
        parts.append("Window ")
        if event.action == WindowEventType.RESIZE:
            parts.append(f"Resize ({event.width}, {event.height})")
        if event.action == WindowEventType.MOVE:
            parts.append(f"Move   ({event.x}, {event.y})")
    elif event.type == EventType.KEYBOARD:
        parts.append("Keyboard ")
        if event.action == KeyboardEventType.PRESS:
            parts.append("Press    ")
        if event.action == KeyboardEventType.RELEASE:
            parts.append("Release  ")
        parts.append(f"{int(event.key)}\t")
    elif event.type == EventType.MOUSE:
        parts.append("Mouse ")
        action = event.action
        if action == MouseEventType.ENTER:
            parts.append("Enter   ")
        elif action == MouseEventType.LEAVE:
            parts.append(f"Leave    ({event.x} {event.y})")
        elif action == MouseEventType.MOVE:
            parts.append(f"Move     ({event.x}, {event.y})")
        elif action == MouseEventType.PRESS:
            parts.append(f"Press    {int(event.button)}")
        elif action == MouseEventType.RELEASE:
            parts.append(f"Release  {int(event.button)}")
        elif action == MouseEventType.SCROLL:
            parts.append(f"Scroll   {event.scroll}\t")
    else:
        parts.append("None")
    parts.append(f" ({(now - event.time) // 1000} us)")
    return "".join(parts)


def _apply_window(fe: FrameEvents, event: Event) -> None:
    if event.action == WindowEventType.RESIZE:
        fe.window_resized = True
        if event.window is not None:
            event.window.width = event.width
            event.window.height = event.height
    elif event.action == WindowEventType.MOVE:
        fe.window_moved = True
        if event.window is not None:
            event.window.x = event.x
            event.window.y = event.y


def _apply_key(fe: FrameEvents, event: Event) -> None:
    pressed = event.action == KeyboardEventType.PRESS
    key = event.key
    if key not in _HANDLED_KEYS:
        return
    fe.keys[key].update(fe.time, pressed)
    if key == Key.GRAVE:
        # The grave key also keeps the terminal open and drives the A key.
        fe.keep_terminal_open = True
        fe.keys[Key.A].update(fe.time, pressed)


def _apply_mouse_button(fe: FrameEvents, value: int, pressed: bool) -> None:
    if value in fe.mouse:
        fe.mouse[MouseButton(value)].update(fe.time, pressed)


def _apply_mouse(fe: FrameEvents, event: Event) -> None:
    action = event.action
    if action == MouseEventType.SCROLL:
        fe.mouse_scroll = event.scroll
    elif action == MouseEventType.MOVE:
        fe.mouse_move_time = fe.time
        if fe.mouse_x or fe.mouse_y:
            fe.mouse_dx += event.x - fe.mouse_x
            fe.mouse_dy += event.y - fe.mouse_y
        fe.mouse_x = event.x
        fe.mouse_y = event.y
    elif action in (MouseEventType.PRESS, MouseEventType.RELEASE):
        _apply_mouse_button(fe, int(event.button), action == MouseEventType.PRESS)


def resolve_frame_events(last: FrameEvents, ring: RingBuffer, now: int) -> FrameEvents:
    """Drain ``ring`` into a new frame state built on ``last``.

    Window events update the ``width``/``height`` or ``x``/``y`` attributes
    of the event's ``window`` object.
    """
    fe = copy.deepcopy(last)
    fe.mouse_scroll = 0
    fe.mouse_dx = 0
    fe.mouse_dy = 0
    fe.window_resized = False
    fe.dt = now - fe.time
    fe.time = now
    for event in ring.drain():
        if event.type == EventType.WINDOW:
            _apply_window(fe, event)
        elif event.type == EventType.KEYBOARD:
            _apply_key(fe, event)
            # Keyboard events also pass through mouse handling, which reads the
            # key code as a button number: A, B and C double as the left,
            # middle and right mouse buttons.
            if event.action in (KeyboardEventType.PRESS, KeyboardEventType.RELEASE):
                _apply_mouse_button(
                    fe, int(event.key), event.action == KeyboardEventType.PRESS
                )
        elif event.type == EventType.MOUSE:
            _apply_mouse(fe, event)
    return fe