import pytest

from rasterkit.formatting import (
    bits_to_string,
    float_to_string,
    format_string,
    print_formatted,
    sint_to_string,
    uint_to_string,
)
from rasterkit.vecmath import FMat2, FVec2, SVec2, UVec2


def test_uint_to_string_values():
    assert uint_to_string(0) == "0"
    assert uint_to_string(18446744073709551615) == "18446744073709551615"


def test_uint_to_string_rejects_negative():
    with pytest.raises(ValueError):
        uint_to_string(-1)


@pytest.mark.parametrize("n", [0, 7, -7, 123456, -987654321])
def test_sint_to_string_round_trip(n):
    assert int(sint_to_string(n)) == n


@pytest.mark.parametrize("value", [0, 1, 5, 255, 40000, 65535])
def test_bits_to_string_round_trip(value):
    text = bits_to_string(value, 16)
    assert len(text) == 16
    assert int(text, 2) == value


def test_bits_to_string_keeps_low_bits_only():
    text = bits_to_string(0x1FF, 8)
    assert text == "1" * 8


@pytest.mark.parametrize("value,right", [(3.25, 2), (1.5, 0), (-2.5, 0), (10.125, 3)])
def test_float_to_string_round_trip(value, right):
    assert float(float_to_string(value, 0, right)) == value


def test_float_to_string_left_precision_keeps_integer_part():
    assert float_to_string(123.456, 2, 0) == "123"


def test_float_to_string_negative_sign():
    assert float_to_string(-0.5, 0, 0).startswith("-")


def test_format_unsigned_and_literal_text():
    assert format_string("value %u32 end", 42) == "value 42 end"


def test_format_percent_escape():
    assert format_string("100%%") == "100%"


def test_bare_percent_reuses_previous_type():
    assert format_string("%u32,\t%,\t%", 1, 2, 3) == "1,\t2,\t3"


def test_unmatched_keyword_text_is_reprinted():
    assert format_string("%u32 %u3x", 1, 2) == "1 2u3x"


def test_unsigned_wraps_to_width():
    assert format_string("%u8", 256 + 9) == "9"


def test_signed_wraps_to_width():
    assert format_string("%s8", 255) == "-1"
    assert format_string("%s32", -7) == "-7"


def test_strings():
    assert format_string("%cstr and %str", "left", "right") == "left and right"


def test_vectors():
    assert format_string("%uvec2", UVec2(1, 2)) == "(1, 2)"
    assert format_string("%svec2", SVec2(-3, 4)) == "(-3, 4)"
    text = format_string("%fvec2", FVec2(0.5, 2.0))
    assert text.startswith("(") and text.endswith(")")
    assert [float(part) for part in text[1:-1].split(", ")] == [0.5, 2.0]


def test_matrix_layout():
    assert format_string("%fmat2", FMat2.identity()) == "[1.0, 0.0]\n[0.0, 1.0].\n"


def test_array_with_hidden_count():
    assert format_string("%#u32", [1, 2, 3]) == "[3](1, 2, 3)."


def test_precision_persists_for_same_type():
    text = format_string("%.3f64 %f64", 1.5, 2.25)
    first, second = text.split(" ")
    assert float(first) == 1.5
    assert float(second) == 2.25
    assert len(second.split(".")[1]) == 3


def test_star_precision_from_arguments():
    text = format_string("%.*f64", 2, 3.25)
    assert float(text) == 3.25
    assert len(text.split(".")[1]) == 2


def test_unprintable_type_raises():
    with pytest.raises(ValueError):
        format_string("%b8", 1)


def test_bare_percent_without_type_raises():
    with pytest.raises(ValueError):
        format_string("%", 1)


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        format_string("%u32")


def test_print_formatted_writes_stdout(capsys):
    count = print_formatted("n=%u32\n", 5)
    captured = capsys.readouterr()
    assert captured.out == "n=5\n"
    assert count == len(captured.out)