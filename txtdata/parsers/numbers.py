"""
Number parsing primitives for txtdata.

Two pure, exception-free parsers that the field accessor builds on:

- ``parse_int``: locale-independent integer parsing with type and range
  bounds. Accepts an optional leading ``-`` (signed types only) followed by
  ASCII digits. No ``+``, no whitespace, no thousands separators. The
  longest valid prefix is consumed and the end position reported, so
  composite parsers can detect trailing garbage.

- ``parse_fixed6_fraction``: converts the digits after a decimal point to a
  numerator over 64 (6-bit fixed point), rounding to the nearest step with
  ties going up.

Both operate on ``(text, start, end)`` so cell text is never copied out of
the owning buffer before it is needed.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

FIXED6_FRACTION_BITS = 6
FIXED6_SCALE = 1 << FIXED6_FRACTION_BITS

# Seven decimal digits are enough to round exactly to 1/64 steps:
# 10**7 / 64 = 156250, and half a step is 78125.
_FRACTION_DIGITS = 7
_FRACTION_STEP = 10**_FRACTION_DIGITS // FIXED6_SCALE
_FRACTION_HALF_STEP = _FRACTION_STEP // 2


@dataclass(frozen=True)
class IntType:
    """A fixed-width integer type: name, bounds and signedness."""

    name: str
    min: int
    max: int

    @property
    def signed(self) -> bool:
        return self.min < 0

    @classmethod
    def of_width(cls, bits: int, signed: bool) -> IntType:
        if signed:
            return cls(f"int{bits}", -(1 << (bits - 1)), (1 << (bits - 1)) - 1)
        return cls(f"uint{bits}", 0, (1 << bits) - 1)


INT8 = IntType.of_width(8, signed=True)
UINT8 = IntType.of_width(8, signed=False)
INT16 = IntType.of_width(16, signed=True)
UINT16 = IntType.of_width(16, signed=False)
INT32 = IntType.of_width(32, signed=True)
UINT32 = IntType.of_width(32, signed=False)
INT64 = IntType.of_width(64, signed=True)
UINT64 = IntType.of_width(64, signed=False)


class ParseIntError(enum.Enum):
    PARSE_FAILURE = "parse_failure"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class ParseIntResult:
    """Outcome of ``parse_int``.

    Attributes:
        value: The parsed integer, or ``None`` on failure.
        error: ``None`` on success, otherwise the ``ParseIntError``.
        end: Position just after the last consumed character. Equal to the
            start position when nothing was consumed.
    """

    value: int | None
    error: ParseIntError | None
    end: int

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _scan_digits(text: str, pos: int, end: int) -> int:
    while pos < end and _is_digit(text[pos]):
        pos += 1
    return pos


def _max_digits(int_type: IntType) -> int:
    """Decimal digits in the largest magnitude ``int_type`` can hold."""
    return len(str(max(-int_type.min, int_type.max)))


def parse_int(
    text: str,
    min_value: int | None = None,
    max_value: int | None = None,
    *,
    int_type: IntType = INT32,
    start: int = 0,
    end: int | None = None,
) -> ParseIntResult:
    """Parse a bounded integer from ``text[start:end]``.

    Args:
        text: Buffer holding the number.
        min_value: Inclusive lower bound. Defaults to ``int_type.min``.
        max_value: Inclusive upper bound. Defaults to ``int_type.max``.
        int_type: Target integer type. Unsigned types reject a minus sign.
        start: Index of the first character to parse.
        end: Index one past the last character available. Defaults to
            ``len(text)``.

    Returns:
        A ``ParseIntResult``. ``PARSE_FAILURE`` when no digits could be
        consumed, ``OUT_OF_RANGE`` when the value does not fit the type or
        the requested bounds.
    """
    if end is None:
        end = len(text)
    if min_value is None:
        min_value = int_type.min
    if max_value is None:
        max_value = int_type.max

    pos = start
    negative = False
    if int_type.signed and pos < end and text[pos] == "-":
        negative = True
        pos += 1

    digits_end = _scan_digits(text, pos, end)
    if digits_end == pos:
        return ParseIntResult(None, ParseIntError.PARSE_FAILURE, start)

    # skip leading zeros so the width check below only counts significant digits
    while pos < digits_end - 1 and text[pos] == "0":
        pos += 1
    if digits_end - pos > _max_digits(int_type):
        return ParseIntResult(None, ParseIntError.OUT_OF_RANGE, digits_end)

    value = int(text[pos:digits_end])
    if negative:
        value = -value

    if value < int_type.min or value > int_type.max:
        return ParseIntResult(None, ParseIntError.OUT_OF_RANGE, digits_end)
    if value < min_value or value > max_value:
        return ParseIntResult(None, ParseIntError.OUT_OF_RANGE, digits_end)
    return ParseIntResult(value, None, digits_end)


def parse_fixed6_fraction(
    text: str,
    start: int = 0,
    end: int | None = None,
) -> tuple[int, int]:
    """Convert fractional digits to a numerator over 64.

    ``text[start:end]`` holds the digits after the decimal point. At most
    seven digits take part in rounding; further digits are still consumed
    so the reported end position covers the whole numeric token, but they
    never change the result.

    The digits are scaled to seven places (``"5"`` -> 5000000) and rounded
    as ``(d + 78125) // 156250``, which is round-half-up to the nearest 1/64
    without floating point. Values that are exact multiples of 1/64 come
    out exact.

    Returns:
        ``(numerator, end_position)`` with ``numerator`` in ``[0, 64]``.
        A ``numerator`` of 64 only happens when the digits round up to a
        whole unit (e.g. ``"999"``). Empty or non-digit input yields
        ``(0, start)``.
    """
    if end is None:
        end = len(text)

    pos = start
    decimal_fraction = 0
    num_digits = 0
    while pos < end and num_digits < _FRACTION_DIGITS and _is_digit(text[pos]):
        decimal_fraction = decimal_fraction * 10 + (ord(text[pos]) - ord("0"))
        num_digits += 1
        pos += 1

    # overly precise values: consume the rest of the digit run
    pos = _scan_digits(text, pos, end)

    if num_digits == 0:
        return 0, start

    decimal_fraction *= 10 ** (_FRACTION_DIGITS - num_digits)
    return (decimal_fraction + _FRACTION_HALF_STEP) // _FRACTION_STEP, pos


@dataclass(frozen=True, order=True)
class Fixed6:
    """A real number stored as an integer count of 1/64 steps."""

    raw: int

    @classmethod
    def from_int(cls, value: int) -> Fixed6:
        return cls(value * FIXED6_SCALE)

    @property
    def integer_part(self) -> int:
        """Whole units, truncated toward zero."""
        return int(self)

    @property
    def fraction_steps(self) -> int:
        """Magnitude of the fractional part in 1/64 steps."""
        return abs(self.raw) % FIXED6_SCALE

    def __int__(self) -> int:
        if self.raw < 0:
            return -(-self.raw // FIXED6_SCALE)
        return self.raw // FIXED6_SCALE

    def __float__(self) -> float:
        return self.raw / FIXED6_SCALE

    def __add__(self, other: Fixed6) -> Fixed6:
        if not isinstance(other, Fixed6):
            return NotImplemented
        return Fixed6(self.raw + other.raw)

    def __sub__(self, other: Fixed6) -> Fixed6:
        if not isinstance(other, Fixed6):
            return NotImplemented
        return Fixed6(self.raw - other.raw)

    def __neg__(self) -> Fixed6:
        return Fixed6(-self.raw)

    def __repr__(self) -> str:
        return f"Fixed6({float(self)!r})"
