"""Equality, ordering and version comparison operations."""

from __future__ import annotations

from typing import Any

from rulefilter.kinds import get_string
from rulefilter.registry import OriginValue, register
from rulefilter.utils import object_compare, version_compare


class _NamedComparison(OriginValue):
    def __init__(self, name: str) -> None:
        self.name = name


class Equal(_NamedComparison):
    """True when the variable value equals the operation value."""

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        return object_compare(value, operation_value) == 0


class NotEqual(_NamedComparison):
    """True when the variable value differs from the operation value."""

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        return object_compare(value, operation_value) != 0


class GreaterThan(_NamedComparison):
    """True when the variable value is greater than the operation value."""

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        return object_compare(value, operation_value) == 1


class GreaterThanEqual(_NamedComparison):
    """True when the variable value is at least the operation value."""

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        return object_compare(value, operation_value) >= 0


class LessThan(_NamedComparison):
    """True when the variable value is less than the operation value."""

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        return object_compare(value, operation_value) == -1


class LessThanEqual(_NamedComparison):
    """True when the variable value is at most the operation value."""

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        return object_compare(value, operation_value) <= 0


def _version_order(operation: OriginValue, variable: Any, operation_value: Any,
                   data: Any, cache: Any) -> int:
    value = operation._variable_value(variable, data, cache)
    return version_compare(get_string(value), get_string(operation_value))


class VersionGreaterThan(OriginValue):
    """True when the variable's version is newer than the operation value."""

    name = "vgt"

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        return _version_order(self, variable, operation_value, data, cache) == 1


class VersionGreaterThanEqual(OriginValue):
    """True when the variable's version is the operation value or newer."""

    name = "vgte"

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        return _version_order(self, variable, operation_value, data, cache) >= 0


class VersionLessThan(OriginValue):
    """True when the variable's version is older than the operation value."""

    name = "vlt"

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        return _version_order(self, variable, operation_value, data, cache) < 0


class VersionLessThanEqual(OriginValue):
    """True when the variable's version is the operation value or older."""

    name = "vlte"

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        return _version_order(self, variable, operation_value, data, cache) <= 0


for _operation in (
    Equal("="),
    Equal("eq"),
    NotEqual("!="),
    NotEqual("<>"),
    NotEqual("ne"),
    GreaterThan(">"),
    GreaterThan("gt"),
    GreaterThanEqual(">="),
    GreaterThanEqual("gte"),
    LessThan("<"),
    LessThan("lt"),
    LessThanEqual("<="),
    LessThanEqual("lte"),
    VersionGreaterThan(),
    VersionGreaterThanEqual(),
    VersionLessThan(),
    VersionLessThanEqual(),
):
    register(_operation)