"""Classification of values into filter types and lenient scalar conversions."""

from __future__ import annotations

import dataclasses
import enum
import math
import numbers
import re
import types
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_DEC_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT_RE = re.compile(r"([+-]?)(inf|infinity|nan)", re.IGNORECASE)


class FilterType(enum.IntEnum):
    """The broad kind of a value as seen by the filter operations."""

    STRING = 0
    NUMBER = 1
    BOOL = 2
    HASH = 3
    ARRAY = 4
    STRUCT = 5
    NULL = 6
    UNKNOWN = 7

    def __str__(self) -> str:
        return self.name


def _is_struct(obj: Any) -> bool:
    if isinstance(obj, type) or isinstance(obj, types.ModuleType):
        return False
    if dataclasses.is_dataclass(obj):
        return True
    if callable(obj):
        return False
    return hasattr(obj, "__dict__") or hasattr(type(obj), "__slots__")


def get_filter_type(obj: Any) -> FilterType:
    """Return the filter type of ``obj``."""
    if obj is None:
        return FilterType.NULL
    if isinstance(obj, bool):
        return FilterType.BOOL
    if isinstance(obj, numbers.Real):
        return FilterType.NUMBER
    if isinstance(obj, str):
        return FilterType.STRING
    if isinstance(obj, Mapping):
        return FilterType.HASH
    if isinstance(obj, (list, tuple, bytes, bytearray)):
        return FilterType.ARRAY
    if _is_struct(obj):
        return FilterType.STRUCT
    return FilterType.UNKNOWN


def _wrap_int64(value: int) -> int:
    value &= _UINT64_MAX
    return value - (1 << 64) if value > _INT64_MAX else value


def _parse_int64(text: str) -> int | None:
    """Parse a base-10 signed 64-bit integer; None when invalid or out of range."""
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _parse_uint64(text: str) -> int | None:
    if not _UINT_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _UINT64_MAX else None


def _parse_float(text: str) -> float | None:
    special = _SPECIAL_FLOAT_RE.fullmatch(text)
    if special:
        sign = -1.0 if special.group(1) == "-" else 1.0
        if special.group(2).lower() == "nan":
            return math.nan
        return sign * math.inf
    if _DEC_FLOAT_RE.fullmatch(text):
        value = float(text)
    elif _HEX_FLOAT_RE.fullmatch(text):
        value = float.fromhex(text)
    else:
        return None
    if math.isinf(value):
        return None
    return value


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def get_bool(obj: Any) -> bool:
    """Truthiness: positive numbers, non-empty strings and True."""
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, numbers.Real):
        return obj > 0
    if isinstance(obj, str):
        return obj != ""
    return False


def get_float(obj: Any) -> float:
    """Convert to float, falling back to 0.0 for anything unconvertible."""
    if isinstance(obj, bool):
        return 1.0 if obj else 0.0
    if isinstance(obj, numbers.Real):
        return float(obj)
    if isinstance(obj, str):
        if obj == "":
            return 0.0
        parsed = _parse_float(obj)
        return 0.0 if parsed is None else parsed
    return 0.0


def get_int(obj: Any) -> int:
    """Convert to a signed 64-bit integer, falling back to 0."""
    if isinstance(obj, bool):
        return 1 if obj else 0
    if isinstance(obj, numbers.Integral):
        return _wrap_int64(int(obj))
    if isinstance(obj, numbers.Real):
        as_float = float(obj)
        if not math.isfinite(as_float):
            return 0
        return _wrap_int64(int(as_float))
    if isinstance(obj, str):
        parsed = _parse_int64(obj) if obj else None
        return 0 if parsed is None else parsed
    return 0


def get_uint(obj: Any) -> int:
    """Convert to an unsigned 64-bit integer, falling back to 0."""
    if isinstance(obj, bool):
        return 1 if obj else 0
    if isinstance(obj, numbers.Integral):
        return int(obj) & _UINT64_MAX
    if isinstance(obj, numbers.Real):
        as_float = float(obj)
        if not math.isfinite(as_float):
            return 0
        return int(as_float) & _UINT64_MAX
    if isinstance(obj, str):
        parsed = _parse_uint64(obj) if obj else None
        return 0 if parsed is None else parsed
    return 0


def get_string(obj: Any) -> str:
    """Convert to a string; True becomes "1", False and non-scalars ""."""
    if isinstance(obj, bool):
        return "1" if obj else ""
    if isinstance(obj, numbers.Integral):
        return str(int(obj))
    if isinstance(obj, numbers.Real):
        return _format_float(float(obj))
    if isinstance(obj, str):
        return obj
    return ""


def is_hash(obj: Any) -> bool:
    return get_filter_type(obj) is FilterType.HASH


def is_array(obj: Any) -> bool:
    return get_filter_type(obj) is FilterType.ARRAY


def is_string(obj: Any) -> bool:
    return get_filter_type(obj) is FilterType.STRING


def is_number(obj: Any) -> bool:
    return get_filter_type(obj) is FilterType.NUMBER


def is_bool(obj: Any) -> bool:
    return get_filter_type(obj) is FilterType.BOOL


def is_struct(obj: Any) -> bool:
    return get_filter_type(obj) is FilterType.STRUCT


def is_scalar(obj: Any) -> bool:
    """True for numbers, strings, booleans and None."""
    return get_filter_type(obj) in (
        FilterType.NUMBER,
        FilterType.STRING,
        FilterType.BOOL,
        FilterType.NULL,
    )