from string import digits
from typing import Dict, Tuple

from humanfriendly import disk_size_units

from .errors import SizeParseError

DIGITS = digits
WHITESPACE = " \t"
BYTE = "b"
BINARY = "i"

DECIMAL_MULTIPLIERS: Dict[str, int] = {unit.decimal.symbol[0].lower(): unit.decimal.divider for unit in disk_size_units}
BINARY_MULTIPLIERS: Dict[str, int] = {unit.binary.symbol[0].lower(): unit.binary.divider for unit in disk_size_units}
PREFIXES = "".join(DECIMAL_MULTIPLIERS)

GIB = 1024**3


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in WHITESPACE:
        pos += 1
    return pos


def _skip_digits(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in DIGITS:
        pos += 1
    return pos


def _expect_end_of_unit(text: str, pos: int, expected: str) -> None:
    if pos < len(text) and text[pos] not in WHITESPACE:
        raise SizeParseError(text, pos, text[pos], expected)


def _parse_unit(text: str, pos: int) -> Tuple[int, int]:
    """Parses an optional unit at `pos` and returns a `(multiplier, end position)` tuple."""

    if pos == len(text):
        return 1, pos

    char = text[pos].lower()
    if char == BYTE:
        pos += 1
        _expect_end_of_unit(text, pos, "")
        return 1, pos

    if char not in PREFIXES:
        raise SizeParseError(text, pos, text[pos], BYTE + PREFIXES)
    prefix = char
    pos += 1

    if pos < len(text) and text[pos].lower() == BINARY:
        pos += 1
        if pos < len(text) and text[pos].lower() == BYTE:
            pos += 1
            _expect_end_of_unit(text, pos, "")
        else:
            _expect_end_of_unit(text, pos, BYTE)
        return BINARY_MULTIPLIERS[prefix], pos

    if pos < len(text) and text[pos].lower() == BYTE:
        pos += 1
        _expect_end_of_unit(text, pos, "")
    else:
        _expect_end_of_unit(text, pos, BINARY + BYTE)
    return DECIMAL_MULTIPLIERS[prefix], pos


def parse_size(text: str) -> int:
    """Convert a human-readable size like `5kib`, `1 GB` or `300` to a number of bytes.

    Units are case-insensitive. Decimal units (`KB`, `MB`, ...) and bare prefixes (`K`, `M`, ...)
    use powers of 1000, binary units (`KiB`, `MiB`, ...) use powers of 1024 and a missing unit
    means bytes. Fractional values are multiplied exactly and then truncated toward zero.
    """

    pos = _skip_whitespace(text, 0)
    if pos == len(text):
        raise SizeParseError(text, pos, None, DIGITS)

    start = pos
    pos = _skip_digits(text, pos)
    integer_part = text[start:pos]
    fraction_part = ""
    if pos < len(text) and text[pos] == ".":
        frac_start = pos + 1
        pos = _skip_digits(text, frac_start)
        fraction_part = text[frac_start:pos]

    if not integer_part and not fraction_part:
        errpos = pos if pos < len(text) else start
        raise SizeParseError(text, errpos, text[errpos], DIGITS)

    pos = _skip_whitespace(text, pos)
    multiplier, pos = _parse_unit(text, pos)
    pos = _skip_whitespace(text, pos)
    if pos < len(text):
        raise SizeParseError(text, pos, text[pos], "")

    scale = 10 ** len(fraction_part)
    numerator = int(integer_part or "0") * scale + int(fraction_part or "0")
    return numerator * multiplier // scale


def format_gib(size: int) -> str:
    return f"{size / GIB:.2f}"
