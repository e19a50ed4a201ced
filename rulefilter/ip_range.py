"""Operations that test whether an IPv4 address falls inside CIDR ranges."""

from __future__ import annotations

from typing import Any

from rulefilter.registry import Operation, OperationError, register
from rulefilter.utils import IPRange, in_ip_range, ip_ranges, parse_target_array_value


def _prepare_ranges(name: str, value: Any) -> list[IPRange]:
    elements = parse_target_array_value(value)
    if not elements:
        raise OperationError(f"[{name}] operation value must be a list of string")
    cidrs = []
    for element in elements:
        if not isinstance(element, str):
            raise OperationError(f"[{name}] variable value must be string")
        element = element.strip()
        if not element:
            raise OperationError(f"[{name}] variable value must be not empty string")
        cidrs.append(element)
    try:
        return ip_ranges(*cidrs)
    except ValueError as exc:
        raise OperationError(str(exc)) from exc


def _address_in_ranges(name: str, address: Any, operation_value: Any) -> bool:
    if not isinstance(address, str):
        raise OperationError(f"[{name}] variable value must be string")
    if not isinstance(operation_value, list) or not all(
        isinstance(r, IPRange) for r in operation_value
    ):
        raise OperationError(f"[{name}] operation value must be a list of string")
    return in_ip_range(operation_value, address)


class InIPRange(Operation):
    """True when the variable's address lies in any of the given CIDR ranges."""

    name = "iir"

    def prepare_value(self, value: Any) -> list[IPRange]:
        return _prepare_ranges(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        address = self._variable_value(variable, data, cache)
        return _address_in_ranges(self.name, address, operation_value)


class NotInIPRange(Operation):
    """True when the variable's address lies in none of the given CIDR ranges."""

    name = "niir"

    def prepare_value(self, value: Any) -> list[IPRange]:
        return _prepare_ranges(self.name, value)

    def run(self, variable: Any, operation_value: Any, data: Any, cache: Any) -> bool:
        address = self._variable_value(variable, data, cache)
        return not _address_in_ranges(self.name, address, operation_value)


for _operation in (InIPRange(), NotInIPRange()):
    register(_operation)