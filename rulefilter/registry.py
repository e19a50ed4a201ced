"""Operation base classes and the registry that maps names to operations."""

from __future__ import annotations

import abc
import threading
from typing import Any, Protocol


class OperationError(ValueError):
    """Raised when an operation value or a variable value cannot be used."""


class _Variable(Protocol):
    def value(self, data: Any, cache: Any) -> Any: ...


class Operation(abc.ABC):
    """A named predicate that checks a variable's value against an operation value."""

    name: str = ""

    @abc.abstractmethod
    def prepare_value(self, value: Any) -> Any:
        """Validate the configured operation value and return its prepared form."""

    @abc.abstractmethod
    def run(self, variable: _Variable, operation_value: Any, data: Any, cache: Any) -> bool:
        """Evaluate the operation for ``data``; errors from the variable propagate."""

    @staticmethod
    def _variable_value(variable: _Variable, data: Any, cache: Any) -> Any:
        return variable.value(data, cache)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class OriginValue(Operation):
    """Base for operations that use the operation value exactly as given."""

    def prepare_value(self, value: Any) -> Any:
        return value


class Registry:
    """A thread-safe mapping from operation names to operations."""

    def __init__(self) -> None:
        self._operations: dict[str, Operation] = {}
        self._lock = threading.Lock()

    def register(self, operation: Operation | None) -> None:
        """Add ``operation``; raises ValueError for None, an empty name or a duplicate."""
        if operation is None:
            raise ValueError("cannot register a None operation")
        name = operation.name
        if not name:
            raise ValueError("cannot register an operation with an empty name")
        with self._lock:
            if name in self._operations:
                raise ValueError(f"{name} operation already exists")
            self._operations[name] = operation

    def get(self, name: str) -> Operation | None:
        """Return the operation registered under ``name``, or None."""
        with self._lock:
            return self._operations.get(name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._operations

    def __len__(self) -> int:
        with self._lock:
            return len(self._operations)


_default = Registry()


def register(operation: Operation | None) -> None:
    """Register ``operation`` in the default registry."""
    _default.register(operation)


def get(name: str) -> Operation | None:
    """Look up ``name`` in the default registry."""
    return _default.get(name)


def print_operations() -> None:
    """Print every registered operation name with its class name."""
    with _default._lock:
        entries = list(_default._operations.items())
    for name, operation in entries:
        print("Operations: ")
        print(name, type(operation).__name__)
        print("\n")