import pytest

from rasterkit.image import Color32, Image, PixelFormat


def test_pixel_size_of_format():
    img = Image(3, 1, PixelFormat.B8G8R8A8, line_alignment=4)
    assert img.pixel_size == 4
    assert img.line_size == 12


def test_line_size_is_aligned():
    img = Image(10, 3)
    assert img.line_size % 64 == 0
    assert img.line_size >= 10 * img.pixel_size
    assert img.size == img.line_size * 3
    assert img.stride >= img.width


def test_custom_alignment():
    img = Image(5, 2, line_alignment=4)
    assert img.line_size == 5 * img.pixel_size


def test_unsupported_format_raises():
    with pytest.raises(ValueError):
        Image(4, 4, PixelFormat.R8G8B8A8)


def test_bad_alignment_raises():
    with pytest.raises(ValueError):
        Image(4, 4, line_alignment=0)


def test_saturating_add_caps_channels():
    result = Color32(200, 10, 0, 255).saturating_add(Color32(100, 10, 0, 1))
    assert result == Color32(255, 20, 0, 255)


def test_color_wraps_to_byte():
    assert Color32(256 + 7, 0, 0, 0) == Color32(7, 0, 0, 0)


def test_set_get_round_trip():
    img = Image(8, 8)
    view = img.view()
    color = Color32(1, 2, 3, 4)
    view.set(5, 6, color)
    assert view.get(5, 6) == color
    assert view.get(6, 5) == Color32()


def test_view_offset_maps_to_image():
    img = Image(8, 8)
    sub = img.view(2, 3, 4, 4)
    color = Color32(9, 9, 9, 9)
    sub.set(0, 0, color)
    assert img.view().get(2, 3) == color


def test_clear_touches_only_the_view():
    img = Image(8, 8)
    color = Color32(10, 20, 30, 40)
    img.view(1, 1, 3, 2).clear(color)
    full = img.view()
    painted = [(x, y) for y in range(8) for x in range(8) if full.get(x, y) == color]
    assert painted == [(x, y) for y in (1, 2) for x in (1, 2, 3)]


def test_copy_from_copies_overlap():
    src_img = Image(4, 4)
    src = src_img.view()
    for y in range(4):
        for x in range(4):
            src.set(x, y, Color32(x, y, 0, 0))
    dst_img = Image(2, 6)
    dst = dst_img.view()
    dst.copy_from(src)
    for y in range(4):
        for x in range(2):
            assert dst.get(x, y) == Color32(x, y, 0, 0)
    assert dst.get(0, 5) == Color32()


def test_outside_view_raises():
    view = Image(4, 4).view(0, 0, 2, 2)
    with pytest.raises(IndexError):
        view.get(2, 0)
    with pytest.raises(IndexError):
        view.set(0, -1, Color32())