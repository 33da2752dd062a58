"""String helpers used when reading and writing JSON numbers and text."""

from __future__ import annotations

import locale


def get_decimal_point() -> str:
    """Return the decimal point of the current locale, or '' if it has none."""
    try:
        conventions = locale.localeconv()
    except (locale.Error, ValueError):
        return ""
    point = conventions.get("decimal_point") or ""
    return point[:1]


def code_point_to_utf8(cp: int) -> bytes:
    """Encode a code point as UTF-8.

    Code points above U+10FFFF give an empty result. Surrogate code points
    are encoded like any other three-byte value.
    """
    if cp < 0:
        raise ValueError(f"code point must not be negative: {cp}")
    if cp <= 0x7F:
        return bytes([cp])
    if cp <= 0x7FF:
        return bytes([0xC0 | (0x1F & (cp >> 6)), 0x80 | (0x3F & cp)])
    if cp <= 0xFFFF:
        return bytes(
            [
                0xE0 | (0xF & (cp >> 12)),
                0x80 | (0x3F & (cp >> 6)),
                0x80 | (0x3F & cp),
            ]
        )
    if cp <= 0x10FFFF:
        return bytes(
            [
                0xF0 | (0x7 & (cp >> 18)),
                0x80 | (0x3F & (cp >> 12)),
                0x80 | (0x3F & (cp >> 6)),
                0x80 | (0x3F & cp),
            ]
        )
    return b""


def uint_to_string(value: int) -> str:
    """Render an unsigned integer in decimal."""
    if value < 0:
        raise ValueError(f"value must not be negative: {value}")
    digits = []
    while True:
        value, digit = divmod(value, 10)
        digits.append(chr(ord("0") + digit))
        if value == 0:
            break
    return "".join(reversed(digits))


def fix_numeric_locale(text: str) -> str:
    """Replace every ',' with '.'."""
    return text.replace(",", ".")


def fix_numeric_locale_input(text: str, decimal_point: str | None = None) -> str:
    """Replace every '.' with the locale's decimal point.

    When no decimal point is given the current locale's is used. Nothing
    changes when that point is empty or already '.'.
    """
    if decimal_point is None:
        decimal_point = get_decimal_point()
    if decimal_point in ("", "."):
        return text
    return text.replace(".", decimal_point)


def fix_zeros_in_the_end(text: str, precision: int) -> str:
    """Drop trailing zeros, keeping the last zero right after a '.'.

    With a precision of zero, a trailing '.0' is dropped as well.
    """
    end = len(text)
    while end > 0:
        if text[end - 1] != "0":
            return text[:end]
        if end >= 3 and text[end - 2] == ".":
            if precision:
                return text[:end]
            return text[: end - 2]
        end -= 1
    return text[:end]