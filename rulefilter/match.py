"""Substring and regular-expression matching operations."""

from __future__ import annotations

import re
from typing import Any, Union

from rulefilter.registry import Operation, OperationError, register
from rulefilter.utils import parse_target_array_value

_Element = Union[str, "re.Pattern[str]"]


def _is_delimited(text: str) -> bool:
    return text.startswith("/") and text.endswith("/")


def _strip_delimiters(text: str) -> str:
    return text.removeprefix("/").removesuffix("/")


def _matches(element: _Element, text: str) -> bool:
    if isinstance(element, re.Pattern):
        return element.search(text) is not None
    return element in text


def _prepare_single(name: str, value: Any) -> _Element:
    if not isinstance(value, str):
        raise OperationError(f"[{name}] operation value must be string")
    if not _is_delimited(value):
        return value
    pattern = _strip_delimiters(value)
    invalid = OperationError(f"[{name}] operation value is not a valid regexp [{value}]")
    if not pattern:
        raise invalid
    try:
        return re.compile(pattern)
    except re.error:
        raise invalid from None


def _run_single(operation: Operation, variable: Any, operation_value: Any,
                data: Any, cache: Any) -> bool:
    value = operation._variable_value(variable, data, cache)
    if not isinstance(value, str):
        raise OperationError(f"[{operation.name}] variable value must be string")
    if not isinstance(operation_value, (str, re.Pattern)):
        raise OperationError(f"[{operation.name}] operation value must be string")
    return _matches(operation_value, value)


def _prepare_many(name: str, value: Any) -> list[_Element]:
    values = parse_target_array_value(value)
    if not values:
        raise OperationError(f"[{name}] operation value must be string")
    elements: list[_Element] = []
    for item in values:
        if not isinstance(item, str):
            raise OperationError(f"[{name}] operation value item must be string")
        if not _is_delimited(item):
            elements.append(item)
            continue
        pattern = _strip_delimiters(item)
        if not pattern:
            raise OperationError(f"[{name}] operation value can not be empty")
        try:
            elements.append(re.compile(pattern))
        except re.error:
            raise OperationError(
                f"[{name}] operation value invalid regexp [{pattern}]"
            ) from None
    return elements


def _any_matches(operation: Operation, variable: Any, operation_value: Any,
                 data: Any, cache: Any) -> bool:
    if not isinstance(operation_value, list):
        raise OperationError(f"[{operation.name}] operation value must be string")
    value = operation._variable_value(variable, data, cache)
    if not isinstance(value, str):
        raise OperationError(f"[{operation.name}] variable value must be string")
    return any(
        _matches(element, value)
        for element in operation_value
        if isinstance(element, (str, re.Pattern))
    )


class Match(Operation):
    """True when the variable contains the text, or matches the /regexp/."""

    name = "~"

    def prepare_value(self, value: Any) -> _Element:
        return _prepare_single(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        return _run_single(self, variable, operation_value, data, cache)


class NotMatch(Operation):
    """True when the variable neither contains the text nor matches the /regexp/."""

    name = "!~"

    def prepare_value(self, value: Any) -> _Element:
        return _prepare_single(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        return not _run_single(self, variable, operation_value, data, cache)


class MatchAny(Operation):
    """True when the variable contains or matches any of the given elements."""

    name = "~*"

    def prepare_value(self, value: Any) -> list[_Element]:
        return _prepare_many(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        return _any_matches(self, variable, operation_value, data, cache)


class MatchNone(Operation):
    """True when the variable contains or matches none of the given elements."""

    name = "!~*"

    def prepare_value(self, value: Any) -> list[_Element]:
        return _prepare_many(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        return not _any_matches(self, variable, operation_value, data, cache)


for _operation in (Match(), NotMatch(), MatchAny(), MatchNone()):
    register(_operation)