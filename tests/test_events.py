from types import SimpleNamespace

import pytest

from rasterkit.containers import RingBuffer
from rasterkit.events import (
    Button,
    Event,
    EventType,
    FrameEvents,
    Key,
    KeyboardEventType,
    MouseButton,
    MouseEventType,
    WindowEventType,
    format_event,
    post_event,
    resolve_frame_events,
)


def _key(key, action=KeyboardEventType.PRESS):
    return Event(EventType.KEYBOARD, action, key=key)


def _resolve(events, last=None, now=1000):
    ring = RingBuffer(64)
    for e in events:
        post_event(ring, e, now)
    return resolve_frame_events(last or FrameEvents(), ring, now)


def test_button_press_and_release_times():
    b = Button()
    b.update(10, True)
    assert b.pressed and b.press_time == 10 and b.action_time == 10
    b.update(20, False)
    assert not b.pressed
    assert b.release_time == 20
    assert b.press_time == 10


def test_button_repeat_press_updates_release_time():
    b = Button().update(5, True)
    b.update(7, True)
    assert b.press_time == 5
    assert b.release_time == 7


def test_post_event_stamps_time():
    ring = RingBuffer(4)
    queued = post_event(ring, Event(EventType.MOUSE), 42)
    assert queued.time == 42
    assert ring.pop().time == 42


def test_key_press_sets_button():
    fe = _resolve([_key(Key.Q)], now=500)
    assert fe.keys[Key.Q].pressed
    assert fe.keys[Key.Q].press_time == 500
    assert not fe.keys[Key.W].pressed


def test_key_release_after_press():
    fe = _resolve([_key(Key.ESCAPE)], now=100)
    fe = _resolve([_key(Key.ESCAPE, KeyboardEventType.RELEASE)], last=fe, now=200)
    assert not fe.keys[Key.ESCAPE].pressed
    assert fe.keys[Key.ESCAPE].release_time == 200


def test_keys_a_b_c_alias_mouse_buttons():
    fe = _resolve([_key(Key.A), _key(Key.B), _key(Key.C)])
    assert fe.mouse[MouseButton.LEFT].pressed
    assert fe.mouse[MouseButton.MIDDLE].pressed
    assert fe.mouse[MouseButton.RIGHT].pressed


def test_grave_also_drives_a_and_terminal_flag():
    fe = _resolve([_key(Key.GRAVE)])
    assert fe.keys[Key.GRAVE].pressed
    assert fe.keys[Key.A].pressed
    assert fe.keep_terminal_open


def test_unhandled_key_changes_nothing():
    fe = _resolve([_key(Key.RIGHT_SHIFT)])
    assert Key.RIGHT_SHIFT not in fe.keys
    assert not any(b.pressed for b in fe.keys.values())


def test_mouse_press_and_scroll():
    events = [
        Event(EventType.MOUSE, MouseEventType.PRESS, button=MouseButton.RIGHT),
        Event(EventType.MOUSE, MouseEventType.SCROLL, scroll=-3),
    ]
    fe = _resolve(events)
    assert fe.mouse[MouseButton.RIGHT].pressed
    assert fe.mouse_scroll == -3
    fe = _resolve([], last=fe, now=2000)
    assert fe.mouse_scroll == 0
    assert fe.mouse[MouseButton.RIGHT].pressed


def test_mouse_move_deltas():
    move1 = Event(EventType.MOUSE, MouseEventType.MOVE, x=10, y=20)
    move2 = Event(EventType.MOUSE, MouseEventType.MOVE, x=15, y=18)
    fe = _resolve([move1])
    assert (fe.mouse_dx, fe.mouse_dy) == (0, 0)
    assert (fe.mouse_x, fe.mouse_y) == (10, 20)
    fe = _resolve([move2], last=fe, now=3000)
    assert fe.mouse_dx == 15 - 10
    assert fe.mouse_dy == 18 - 20
    assert fe.mouse_move_time == 3000


def test_window_resize_updates_window():
    window = SimpleNamespace(width=0, height=0)
    ev = Event(EventType.WINDOW, WindowEventType.RESIZE, width=640, height=480, window=window)
    fe = _resolve([ev])
    assert fe.window_resized
    assert (window.width, window.height) == (640, 480)
    fe = _resolve([], last=fe, now=5000)
    assert not fe.window_resized


def test_window_move_updates_window():
    window = SimpleNamespace(x=0, y=0)
    ev = Event(EventType.WINDOW, WindowEventType.MOVE, x=-5, y=7, window=window)
    fe = _resolve([ev])
    assert fe.window_moved
    assert (window.x, window.y) == (-5, 7)


def test_dt_and_time():
    fe = _resolve([], now=1000)
    fe2 = _resolve([], last=fe, now=1750)
    assert fe2.time == 1750
    assert fe2.dt == 1750 - 1000


def test_resolve_does_not_modify_last():
    first = FrameEvents()
    _resolve([_key(Key.Z)], last=first)
    assert not first.keys[Key.Z].pressed
    assert first.time == 0


def test_resolve_drains_ring():
    ring = RingBuffer(8)
    post_event(ring, _key(Key.X), 1)
    resolve_frame_events(FrameEvents(), ring, 10)
    assert len(ring) == 0


def test_format_window_resize():
    ev = Event(EventType.WINDOW, WindowEventType.RESIZE, width=640, height=480, time=0)
    assert format_event(ev, 5000) == "Window Resize (640, 480) (5 us)"


def test_format_keyboard_and_none():
    ev = Event(EventType.KEYBOARD, KeyboardEventType.PRESS, key=Key.A, time=100)
    assert format_event(ev, 100).startswith("Keyboard Press    1\t")
    assert format_event(Event(EventType.NONE), 0).startswith("None")


@pytest.mark.parametrize(
    "action, prefix",
    [
        (MouseEventType.ENTER, "Mouse Enter   "),
        (MouseEventType.MOVE, "Mouse Move     (3, 4)"),
        (MouseEventType.LEAVE, "Mouse Leave    (3 4)"),
    ],
)
def test_format_mouse(action, prefix):
    ev = Event(EventType.MOUSE, action, x=3, y=4)
    assert format_event(ev, 0).startswith(prefix)