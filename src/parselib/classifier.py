"""Heuristic type inference for configuration values.

Values are classified by a single scan over their characters rather than by a
strict numeric grammar. A token such as ``1.2.3`` becomes a string, while a
bare ``-`` or ``.`` is still classified as numeric and only fails later, when
:func:`convert` tries to parse it.
"""

from __future__ import annotations

from enum import Enum
import math
import re

from .errors import NumericConversionError

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_INT_PREFIX = re.compile(r"[+-]?[0-9]+")
_FLOAT_PREFIX = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ValueKind(str, Enum):
    """Namespace a value is stored under."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"


def classify(token: str) -> ValueKind | None:
    """Classify ``token`` as int, float or string.

    Returns ``None`` when the token holds nothing storable (empty, or only
    ``+`` signs and spaces).
    """

    numeric = False
    fraction = False
    exponential = False
    for char in token:
        if char == " ":
            continue
        if "0" <= char <= "9" or char == "-":
            numeric = True
        elif char == ".":
            # A second decimal point, or one after an exponent, is never a number.
            if fraction:
                return ValueKind.STRING
            fraction = True
        elif char in "eE":
            if exponential:
                return ValueKind.STRING
            exponential = True
            fraction = True
        elif char != "+":
            return ValueKind.STRING
    if fraction:
        return ValueKind.FLOAT
    if numeric:
        return ValueKind.INT
    return None


def convert(
    token: str,
    kind: ValueKind,
    source: str | None = None,
    line: int | None = None,
    strict: bool = False,
) -> int | float | str:
    """Parse ``token`` into the Python type for ``kind``.

    By default the longest numeric prefix is used, so ``1-2`` reads as ``1``
    and ``1.5e`` as ``1.5``; only a token with no numeric prefix at all fails.
    With ``strict`` the whole token must be a number.
    """

    if kind is ValueKind.STRING:
        return token
    text = token.replace(" ", "")
    pattern = _INT_PREFIX if kind is ValueKind.INT else _FLOAT_PREFIX
    match = pattern.fullmatch(text) if strict else pattern.match(text)
    if match is None:
        reason = "not an integer" if kind is ValueKind.INT else "not a number"
        raise NumericConversionError(token, kind.value, reason, source=source, line=line)
    if kind is ValueKind.INT:
        value = int(match.group(0), 10)
        if not INT_MIN <= value <= INT_MAX:
            raise NumericConversionError(token, kind.value, "out of range", source=source, line=line)
        return value
    number = float(match.group(0))
    if math.isinf(number):
        raise NumericConversionError(token, kind.value, "out of range", source=source, line=line)
    return number
