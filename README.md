# rasterkit

A small, dependency-free toolkit for software rasterization in pure Python.

## Modules

- `rasterkit.vecmath`: 2D vectors `UVec2` and `SVec2` (which wrap like 32-bit
  unsigned and signed integers) and `FVec2`, plus `FVec3`, `FVec4`, `FMat2`,
  `FMat3` and `FMat4`. `FMat3` has affine helpers: `translate`, `scale`,
  `shear`, `rotate`, `transform`, `affine_inverse` (raises `ValueError` for a
  singular matrix) and `product`, which multiplies matrices left to right.
  Matrices multiply with the `@` operator.
- `rasterkit.formatting`: `format_string` and `print_formatted`, a format
  engine whose escapes name the type of each argument: `%u32`, `%s8`, `%f64`,
  `%v8` (bits), `%str`, `%fvec2`, `%uvec2`, `%fmat3` and so on. `%#u32` prints
  a sequence with its length, `%$u32` takes the element count from the
  arguments, and digits or `*` set left and right precision. `%%` prints a
  percent sign.
- `rasterkit.stringmap`: `StringMap`, a fixed-capacity linear-probing map keyed
  by strings (`insert`, `lookup`, `get`), and `hash_string`.
- `rasterkit.containers`: `Ring`, a fixed set of slots with a wrapping cursor,
  and `RingBuffer`, a power-of-two FIFO with `push`, `pop` and `drain`; also
  `next_power_of_two`, `simple_growth` and `cpython_growth`.
- `rasterkit.events`: `Event`, `Button` and `FrameEvents`, with `post_event`,
  `format_event` and `resolve_frame_events`, which drains a `RingBuffer` of
  events into a new per-frame snapshot of key, mouse and window state.
- `rasterkit.image`: `Image`, `View`, `Color32` and `PixelFormat`. Only
  `PixelFormat.B8G8R8A8` images can be created.
- `rasterkit.draw`: `draw_point`, `draw_line`, `draw_rectangle`,
  `draw_scanline`, `draw_scanline_triangle`, `bresenham_x_buffer`,
  `draw_x_buffer`, `compute_texture_bounds`, `draw_glyph` for a `Glyph`, and an
  `AccumulatorImage` with `draw_line_fast` and `copy_accumulator_to_view`.
- `rasterkit.liacc`: `Liacc`, a grid of 256x256 brightness sections that can
  accumulate random lines and draw itself into a view.
- `rasterkit.riacc`: `Riacc`, which cuts lines into 256x256 buckets with
  `ray`, rasterises them with `efla_line` and draws them into a view.
- `rasterkit.fileio`: `read_binary_file`, which returns a file's bytes.

## Examples

```python
from rasterkit.image import Color32, Image
from rasterkit.draw import draw_line, draw_scanline_triangle

image = Image(64, 64)
view = image.view()
view.clear(Color32(0, 0, 0, 255))
draw_line(view, 2, 2, 60, 30, Color32(255, 255, 255, 255))
draw_scanline_triangle(view, 10, 10, 40, 20, 20, 50, Color32(255, 128, 0, 255))
print(view.get(20, 20))
```

```python
from rasterkit.vecmath import FMat3, FVec2

m = FMat3.product(FMat3.translate(5, 0), FMat3.scale(2, 2))
print(m.transform(FVec2(1, 1)))
print(m.affine_inverse().transform(m.transform(FVec2(3, 4))))
```

```python
from rasterkit.formatting import format_string

print(format_string("%u32 items, %f32 avg", 3, 1.25))
```

```python
from rasterkit.containers import RingBuffer
from rasterkit.events import Event, EventType, FrameEvents, Key, KeyboardEventType
from rasterkit.events import post_event, resolve_frame_events

ring = RingBuffer(16)
post_event(ring, Event(type=EventType.KEYBOARD, action=KeyboardEventType.PRESS, key=Key.ESCAPE), now=100)
frame = resolve_frame_events(FrameEvents(), ring, now=200)
print(frame.keys[Key.ESCAPE].pressed)
```

## What it does not do

rasterkit draws into in-memory `Image` objects only. It opens no windows,
presents nothing on screen, reads no input devices and uses no GPU; events
must be built and posted by the caller. It does not load or render fonts:
a `Glyph` must be supplied with its coverage bytes and metrics already filled in.

## Running the tests

```
pip install -e ".[test]"
pytest
```