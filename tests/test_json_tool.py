import pytest

from xengine_apps.json_tool import (
    code_point_to_utf8,
    fix_numeric_locale,
    fix_numeric_locale_input,
    fix_zeros_in_the_end,
    get_decimal_point,
    uint_to_string,
)


def test_decimal_point_is_single_char_or_empty():
    assert len(get_decimal_point()) <= 1


@pytest.mark.parametrize("cp", [0x00, 0x41, 0x7F, 0x80, 0x7FF, 0x800, 0xFFFF, 0x10000, 0x10FFFF])
def test_utf8_matches_codec(cp):
    assert code_point_to_utf8(cp) == chr(cp).encode("utf-8")


def test_utf8_euro_sign():
    assert code_point_to_utf8(0x20AC) == b"\xe2\x82\xac"


@pytest.mark.parametrize("cp,length", [(0x7F, 1), (0x80, 2), (0x7FF, 2), (0x800, 3), (0xFFFF, 3), (0x10000, 4)])
def test_utf8_lengths(cp, length):
    assert len(code_point_to_utf8(cp)) == length


def test_utf8_surrogate_encoded_as_three_bytes():
    assert code_point_to_utf8(0xD800) == bytes([0xED, 0xA0, 0x80])


def test_utf8_out_of_range_is_empty():
    assert code_point_to_utf8(0x110000) == b""


def test_utf8_negative_rejected():
    with pytest.raises(ValueError):
        code_point_to_utf8(-1)


@pytest.mark.parametrize("value", [0, 7, 10, 12345, 2**64 - 1])
def test_uint_to_string_round_trip(value):
    assert int(uint_to_string(value)) == value
    assert uint_to_string(value) == str(value)


def test_uint_to_string_negative_rejected():
    with pytest.raises(ValueError):
        uint_to_string(-5)


def test_fix_numeric_locale():
    result = fix_numeric_locale("1,5,2")
    assert "," not in result
    assert result == "1.5.2"


def test_fix_numeric_locale_input_replaces_dot():
    assert fix_numeric_locale_input("3.25", ",") == "3,25"


@pytest.mark.parametrize("point", ["", "."])
def test_fix_numeric_locale_input_unchanged(point):
    assert fix_numeric_locale_input("3.25", point) == "3.25"


def test_fix_numeric_locale_round_trip():
    assert fix_numeric_locale(fix_numeric_locale_input("12.5", ",")) == "12.5"


def test_fix_zeros_strips_trailing_zeros():
    assert fix_zeros_in_the_end("1.500", 0) == "1.5"


def test_fix_zeros_keeps_last_zero_with_precision():
    assert fix_zeros_in_the_end("2.000", 3) == "2.0"


def test_fix_zeros_drops_point_without_precision():
    assert fix_zeros_in_the_end("2.000", 0) == "2"


def test_fix_zeros_no_zeros_unchanged():
    assert fix_zeros_in_the_end("3.14", 0) == "3.14"


def test_fix_zeros_result_is_prefix():
    for text in ["0.0", "10.10", "5.00000", "7"]:
        result = fix_zeros_in_the_end(text, 1)
        assert text.startswith(result)