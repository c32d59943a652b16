# ============================================================================
# ConvertKit - Numeric and Boolean Conversion
#
# Purpose: Parse and format base-10 integers, floats, and boolean literals
# Inputs: Text or Python numbers/booleans
# Outputs: Python numbers/booleans or canonical text
# Dependencies: re, math, decimal (stdlib)
# Usage: n = to_int64("9876543210"); s = from_float64(2.71828)
#
# Changelog:
#   2026-03-02: Initial integer, float and bool conversions
#   2026-03-04: to_float64 accepts hexadecimal float literals and inf/nan;
#               overflow is reported as "value out of range"
#   2026-03-05: from_float64 renders non-finite values as +Inf/-Inf/NaN
# ============================================================================

import math
import re
import sys
from decimal import Decimal

from ConvertKit.errors import ParseError

# Width of the platform's native signed integer (64 on 64-bit builds)
INT_BITS = sys.maxsize.bit_length() + 1

INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

TRUE_LITERALS = frozenset({"1", "t", "T", "true", "TRUE", "True"})
FALSE_LITERALS = frozenset({"0", "f", "F", "false", "FALSE", "False"})

# ASCII digits only; str.isdigit() and int() would also accept other scripts
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_DECIMAL_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)


def _syntax_error(func: str, text: str) -> ParseError:
    return ParseError(f"{func}: parsing {text!r}: invalid syntax")


def _range_error(func: str, text: str) -> ParseError:
    return ParseError(f"{func}: parsing {text!r}: value out of range")


def _parse_integer(func: str, text: str, pattern: "re.Pattern[str]", low: int, high: int) -> int:
    if not isinstance(text, str) or pattern.fullmatch(text) is None:
        raise _syntax_error(func, text)
    value = int(text)
    if value < low or value > high:
        raise _range_error(func, text)
    return value


def to_int(text: str) -> int:
    """
    Parse a base-10 signed integer of native machine-word width.

    Raises:
        ParseError: If the text is empty, malformed, or out of range
    """
    return _parse_integer("to_int", text, _SIGNED_RE, INT_MIN, INT_MAX)


def from_int(value: int) -> str:
    """Format an integer in base 10."""
    return str(int(value))


def to_int64(text: str) -> int:
    """
    Parse a base-10 signed 64-bit integer.

    Raises:
        ParseError: If the text is empty, malformed, or out of range
    """
    return _parse_integer("to_int64", text, _SIGNED_RE, INT64_MIN, INT64_MAX)


def from_int64(value: int) -> str:
    """Format a 64-bit integer in base 10."""
    return str(int(value))


def to_uint64(text: str) -> int:
    """
    Parse a base-10 unsigned 64-bit integer.

    A sign of any kind is rejected.

    Raises:
        ParseError: If the text is empty, signed, malformed, or out of range
    """
    return _parse_integer("to_uint64", text, _UNSIGNED_RE, 0, UINT64_MAX)


def from_uint64(value: int) -> str:
    """Format an unsigned 64-bit integer in base 10."""
    return str(int(value))


def to_float64(text: str) -> float:
    """
    Parse a floating-point literal.

    Accepts decimal literals with optional exponent, hexadecimal float
    literals (e.g. "0x1.8p3"), and the case-insensitive special values
    "inf", "infinity" (optionally signed) and "nan".

    Args:
        text: Literal to parse

    Returns:
        Parsed value as a binary64 float

    Raises:
        ParseError: If the text is malformed or its magnitude overflows binary64
    """
    if not isinstance(text, str):
        raise _syntax_error("to_float64", text)

    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)

    if _HEX_FLOAT_RE.fullmatch(text):
        try:
            return float.fromhex(text)
        except OverflowError as e:
            raise _range_error("to_float64", text) from e

    if _DECIMAL_FLOAT_RE.fullmatch(text) is None:
        raise _syntax_error("to_float64", text)

    value = float(text)
    if math.isinf(value):
        raise _range_error("to_float64", text)
    return value


def from_float64(value: float) -> str:
    """
    Format a float in fixed-point notation.

    Uses the shortest digit string that round-trips to the same float and
    never switches to exponential notation. Integral values carry no
    fractional part.

    Examples:
        2.71828 -> "2.71828"
        1e20    -> "100000000000000000000"
        2.0     -> "2"
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_bool(text: str) -> bool:
    """
    Parse a boolean literal.

    Accepts "1", "t", "T", "true", "TRUE", "True" -> True and
    "0", "f", "F", "false", "FALSE", "False" -> False.

    Raises:
        ParseError: For any other input
    """
    if text in TRUE_LITERALS:
        return True
    if text in FALSE_LITERALS:
        return False
    raise _syntax_error("to_bool", text)


def from_bool(value: bool) -> str:
    """Format a boolean as "true" or "false"."""
    return "true" if value else "false"
