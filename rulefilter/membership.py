"""Operations that test a variable's value against a list of values."""

from __future__ import annotations

from typing import Any

from rulefilter.registry import Operation, OperationError, register
from rulefilter.utils import object_compare, parse_target_array_value


def _non_empty_list(name: str, value: Any) -> list[Any]:
    elements = parse_target_array_value(value)
    if not elements:
        raise OperationError(f"[{name}] operation value must be greater than one element")
    return elements


def _require_list(name: str, operation_value: Any) -> list[Any]:
    if not isinstance(operation_value, list):
        raise OperationError(f"[{name}] operation value must be greater than one element")
    return operation_value


def _contains(elements: list[Any], candidate: Any) -> bool:
    return any(object_compare(candidate, element) == 0 for element in elements)


class AnyOf(Operation):
    """True when any element of the variable value is among the operation values."""

    name = "any"

    def prepare_value(self, value: Any) -> list[Any]:
        return _non_empty_list(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        variable_elements = parse_target_array_value(value)
        targets = _require_list(self.name, operation_value)
        return any(_contains(variable_elements, target) for target in targets)


class Between(Operation):
    """True when the variable value lies within an inclusive [start, end] pair."""

    name = "between"

    def _invalid(self) -> OperationError:
        return OperationError(f"[{self.name}] operation value must have two element")

    def prepare_value(self, value: Any) -> list[Any]:
        elements = parse_target_array_value(value)
        if len(elements) != 2:
            raise self._invalid()
        return elements

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        if not isinstance(operation_value, list) or len(operation_value) != 2:
            raise self._invalid()
        start, end = operation_value
        return object_compare(value, start) >= 0 and object_compare(value, end) <= 0


class Has(Operation):
    """True when the variable value contains every operation value."""

    name = "has"

    def prepare_value(self, value: Any) -> list[Any]:
        return _non_empty_list(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        targets = _require_list(self.name, operation_value)
        variable_elements = parse_target_array_value(value)
        return all(_contains(variable_elements, target) for target in targets)


class In(Operation):
    """True when every element of the variable value is among the operation values."""

    name = "in"

    def prepare_value(self, value: Any) -> list[Any]:
        return _non_empty_list(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        variable_elements = parse_target_array_value(value)
        if not isinstance(operation_value, list):
            return False
        return all(
            any(object_compare(element, target) == 0 for target in operation_value)
            for element in variable_elements
        )


class Not(Operation):
    """True when no element of the variable value is among the operation values."""

    name = "not"

    def prepare_value(self, value: Any) -> list[Any]:
        return _non_empty_list(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        variable_elements = parse_target_array_value(value)
        targets = _require_list(self.name, operation_value)
        return not any(
            object_compare(element, target) == 0
            for element in variable_elements
            for target in targets
        )


class NotIn(Operation):
    """True when the variable value as a whole equals none of the operation values."""

    name = "nin"

    def prepare_value(self, value: Any) -> list[Any]:
        return _non_empty_list(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        value = self._variable_value(variable, data, cache)
        if not isinstance(operation_value, list):
            return True
        return not any(object_compare(value, target) == 0 for target in operation_value)


for _operation in (AnyOf(), Between(), Has(), In(), Not(), NotIn()):
    register(_operation)