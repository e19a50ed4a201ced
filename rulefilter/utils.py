"""Value lookup, comparison, version and IPv4 range helpers."""

from __future__ import annotations

import copy
import dataclasses
import ipaddress
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable

from rulefilter.kinds import (
    FilterType,
    _parse_int64,
    get_filter_type,
    get_float,
    get_string,
    is_scalar,
)

EPSILON = 0.00000001


def float_equals(a: float, b: float) -> bool:
    """True when ``a`` and ``b`` differ by less than EPSILON."""
    return (a - b) < EPSILON and (b - a) < EPSILON


_MISSING = object()


def _struct_field(obj: Any, name: str) -> Any:
    if dataclasses.is_dataclass(obj):
        fields = dataclasses.fields(obj)
        if any(f.name == name for f in fields):
            return getattr(obj, name)
        for f in fields:
            if f.metadata.get("json") == name:
                return getattr(obj, f.name)
        return _MISSING
    attributes = getattr(obj, "__dict__", None)
    if attributes is not None and name in attributes:
        return attributes[name]
    slots = getattr(type(obj), "__slots__", ())
    if name in slots and hasattr(obj, name):
        return getattr(obj, name)
    return _MISSING


def get_object_value_by_key(data: Any, key: str) -> Any:
    """Follow a dotted path through mappings, sequences and objects.

    An empty key or "." returns ``data`` itself. Raises KeyError when any
    step of the path cannot be followed.
    """
    key = key.strip()
    if key in (".", ""):
        return data

    for segment in key.split("."):
        if data is None:
            raise KeyError(key)
        segment = segment.strip()
        kind = get_filter_type(data)
        if kind is FilterType.HASH:
            if segment not in data:
                raise KeyError(key)
            data = data[segment]
        elif kind is FilterType.ARRAY:
            index = _parse_int64(segment)
            if index is None or not 0 <= index < len(data):
                raise KeyError(key)
            data = data[index]
        elif kind is FilterType.STRUCT:
            value = _struct_field(data, segment)
            if value is _MISSING:
                raise KeyError(key)
            data = value
        else:
            raise KeyError(key)
    return data


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def parse_target_array_value(value: Any) -> list[Any]:
    """Turn a JSON array, a comma-separated string, a sequence or a scalar into a list."""
    kind = get_filter_type(value)
    if kind is FilterType.STRING:
        try:
            parsed = json.loads(value, parse_int=float, parse_constant=_reject_constant)
        except ValueError:
            parsed = _MISSING
        if parsed is None:
            return []
        if isinstance(parsed, list):
            return parsed
        return [part.strip() for part in value.split(",")]
    if kind is FilterType.ARRAY:
        return list(value)
    return [value]


def number_compare(a: Any, b: Any) -> int:
    """Compare two values numerically, returning -1, 0 or 1."""
    fa = get_float(a)
    fb = get_float(b)
    if float_equals(fa, fb):
        return 0
    return 1 if fa - fb > 0 else -1


def _deep_equal(a: Any, b: Any) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, Mapping):
        return a.keys() == b.keys() and all(_deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    return a == b


def object_compare(compare: Any, compared: Any) -> int:
    """Compare two values: 0 when equal, 1 when greater, -1 when less.

    Numbers and booleans compare numerically, strings lexically; anything
    else is 0 when deeply equal and 1 otherwise.
    """
    if compare is None and compared is None:
        return 0
    compare_type = get_filter_type(compare)
    compared_type = get_filter_type(compared)
    numeric = (FilterType.NUMBER, FilterType.BOOL)
    if compare_type in numeric or compared_type in numeric:
        return number_compare(compare, compared)
    if FilterType.STRING in (compare_type, compared_type):
        left, right = get_string(compare), get_string(compared)
        return (left > right) - (left < right)
    return 0 if _deep_equal(compare, compared) else 1


def clone(obj: Any) -> Any:
    """Deep-copy non-scalar values; scalars are returned as they are."""
    if obj is None or is_scalar(obj):
        return obj
    return copy.deepcopy(obj)


def _strip_version(version: str) -> str:
    version = version.lower()
    return version[1:] if version.startswith("v") else version


def version_compare(compare: str, compared: str) -> int:
    """Compare dotted version strings, ignoring a leading "v"; missing parts count as 0."""
    compare = _strip_version(compare)
    compared = _strip_version(compared)
    if compare == compared:
        return 0
    if compare == "":
        return -1
    if compared == "":
        return 1

    left_parts = compare.split(".")
    right_parts = compared.split(".")
    width = max(len(left_parts), len(right_parts))
    left_parts += ["0"] * (width - len(left_parts))
    right_parts += ["0"] * (width - len(right_parts))

    for left, right in zip(left_parts, right_parts):
        if left == right:
            continue
        left_number = _parse_int64(left)
        if left_number is None:
            return -1
        right_number = _parse_int64(right)
        if right_number is None:
            return 1
        if left_number < right_number:
            return -1
        if left_number > right_number:
            return 1
    return 0


@dataclass(frozen=True)
class IPRange:
    """An inclusive range of IPv4 addresses held as integers."""

    start: int
    end: int

    def __str__(self) -> str:
        return f"{int_to_ip(self.start)}-{int_to_ip(self.end)}"


def to_int(address: Any) -> int:
    """Return an IPv4 address as an integer; 0 for anything that is not IPv4."""
    if address is None:
        return 0
    if isinstance(address, str):
        try:
            address = ipaddress.ip_address(address)
        except ValueError:
            return 0
    if isinstance(address, ipaddress.IPv6Address):
        address = address.ipv4_mapped
        if address is None:
            return 0
    if isinstance(address, ipaddress.IPv4Address):
        return int(address)
    return 0


def int_to_ip(value: int) -> ipaddress.IPv4Address:
    """Return the IPv4 address for the low 32 bits of ``value``."""
    return ipaddress.IPv4Address(value & 0xFFFFFFFF)


def _parse_cidr(cidr: str) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
    _, slash, prefix = cidr.partition("/")
    if not slash or not prefix.isascii() or not prefix.isdigit():
        raise ValueError(f"invalid CIDR address: {cidr}")
    try:
        return ipaddress.ip_network(cidr, strict=False)
    except ValueError:
        raise ValueError(f"invalid CIDR address: {cidr}") from None


def ip_ranges(*args: str) -> list[IPRange]:
    """Parse CIDR strings into IP ranges; raises ValueError on a bad CIDR."""
    ranges = []
    for cidr in args:
        network = _parse_cidr(cidr)
        ranges.append(
            IPRange(
                start=to_int(network.network_address),
                end=to_int(network.broadcast_address),
            )
        )
    return ranges


def in_ip_range(ranges: Iterable[IPRange], address: Any) -> bool:
    """True when ``address`` falls inside any of ``ranges``."""
    value = to_int(address)
    return any(r.start <= value <= r.end for r in ranges)


def bytes_or(a: bytes, b: bytes) -> bytes:
    """OR two byte strings, aligning the shorter one to the right."""
    if len(a) < len(b):
        a, b = b, a
    padded = bytes(len(a) - len(b)) + bytes(b)
    return bytes(x | y for x, y in zip(a, padded))


def bytes_not(a: bytes) -> bytes:
    """Invert every bit of a byte string."""
    return bytes(~x & 0xFF for x in a)