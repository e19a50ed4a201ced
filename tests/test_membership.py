import re

import pytest

from rulefilter import registry
from rulefilter.membership import AnyOf, Between, Has, In, Not, NotIn
from rulefilter.registry import OperationError


class FakeVariable:
    def __init__(self, result=None, error=None):
        self.name = "mock"
        self._result = result
        self._error = error

    def value(self, data, cache):
        if self._error is not None:
            raise self._error
        return self._result


def _run(op, result, operation_value):
    return op.run(FakeVariable(result), operation_value, None, {})


def _elements_error(name):
    return re.escape(f"[{name}] operation value must be greater than one element")


@pytest.mark.parametrize(
    "name, cls",
    [("any", AnyOf), ("between", Between), ("has", Has), ("in", In), ("not", Not), ("nin", NotIn)],
)
def test_registered(name, cls):
    op = registry.get(name)
    assert isinstance(op, cls)
    assert op.name == name


# ---- any ----

ANY_CASES = [
    (["1", "2"], '["1","2"]', ["1", "2"], True),
    (1, "[1,2]", [1.0, 2.0], True),
    ([1], "[1,2]", [1.0, 2.0], True),
    ([2], "[1,2]", [1.0, 2.0], True),
    ([3], "[1,2]", [1.0, 2.0], False),
    (["1"], "[1,2]", [1.0, 2.0], True),
    (["2"], "[1,2]", [1.0, 2.0], True),
    (["3"], "[1,2]", [1.0, 2.0], False),
    (["1.1"], "[1.1,2.2]", [1.1, 2.2], True),
    (["2.2"], "[1.1,2.2]", [1.1, 2.2], True),
    (["2.2"], '["1.1","2.2"]', ["1.1", "2.2"], True),
    (["3.3"], '["1.1","2.2"]', ["1.1", "2.2"], False),
    ([["1.1"]], '[["1.1"],"2.2"]', [["1.1"], "2.2"], True),
    ("2.2", '[["1.1"],"2.2"]', [["1.1"], "2.2"], True),
    ("3.3", '[["1.1"],"2.2"]', [["1.1"], "2.2"], False),
]


@pytest.mark.parametrize("variable_value, operation_value, parsed, expected", ANY_CASES)
def test_any(variable_value, operation_value, parsed, expected):
    op = registry.get("any")
    prepared = op.prepare_value(operation_value)
    assert prepared == parsed
    assert _run(op, variable_value, prepared) is expected


def test_any_variable_error_propagates():
    op = registry.get("any")
    prepared = op.prepare_value('["1","2"]')
    assert prepared == ["1", "2"]
    with pytest.raises(LookupError, match="value not found"):
        op.run(FakeVariable(["1", "2"], LookupError("value not found")), prepared, None, {})


def test_any_empty_operation_value():
    op = registry.get("any")
    with pytest.raises(OperationError, match=_elements_error("any")):
        op.prepare_value("[]")
    with pytest.raises(OperationError, match=_elements_error("any")):
        _run(op, 1, None)


# ---- between ----

BETWEEN_CASES = [
    (3, "[1,4]", [1.0, 4.0]),
    (0, "[-1,4]", [-1.0, 4.0]),
    (-1, "[-2,0]", [-2.0, 0.0]),
    (-2, "[-3,-1]", [-3.0, -1.0]),
    (-2.0, "[-3,-1]", [-3.0, -1.0]),
    (-2.0, "[-3.0,-1.0]", [-3.0, -1.0]),
    (3, '["1","4"]', ["1", "4"]),
    (0, '["-1","4"]', ["-1", "4"]),
    (-1, '["-2","0"]', ["-2", "0"]),
    (-2, '["-3","-1"]', ["-3", "-1"]),
    (-2.0, '["-3","-1"]', ["-3", "-1"]),
    (-2.0, '["-3.0","-1.0"]', ["-3.0", "-1.0"]),
]


@pytest.mark.parametrize("variable_value, operation_value, parsed", BETWEEN_CASES)
def test_between(variable_value, operation_value, parsed):
    op = registry.get("between")
    prepared = op.prepare_value(operation_value)
    assert prepared == parsed
    assert _run(op, variable_value, prepared) is True


def test_between_outside_range():
    op = registry.get("between")
    prepared = op.prepare_value("[1,4]")
    assert _run(op, 5, prepared) is False
    assert _run(op, 0, prepared) is False
    assert _run(op, 4, prepared) is True


def test_between_variable_error_propagates():
    op = registry.get("between")
    prepared = op.prepare_value("[1,4]")
    assert prepared == [1.0, 4.0]
    with pytest.raises(LookupError, match="value not found"):
        op.run(FakeVariable(1, LookupError("value not found")), prepared, None, {})


@pytest.mark.parametrize("operation_value", ["[]", "[1]", "[1,2,3]"])
def test_between_requires_two_elements(operation_value):
    op = registry.get("between")
    message = re.escape("[between] operation value must have two element")
    with pytest.raises(OperationError, match=message):
        op.prepare_value(operation_value)
    with pytest.raises(OperationError, match=message):
        _run(op, 1, None)


# ---- has ----

HAS_CASES = [
    ([1.0, 2.0], "[1,2]", [1.0, 2.0], True),
    ([1.0, 2.0], "[1]", [1.0], True),
    ([1.0, 2.0], "[2]", [2.0], True),
    (["1", "2"], '["1","2"]', ["1", "2"], True),
    (["1", "2"], '["1"]', ["1"], True),
    (["1", "2"], '["2"]', ["2"], True),
    (["1", "2"], '["3"]', ["3"], False),
    (["1", "2", "3"], '["3"]', ["3"], True),
    (["1", "2", "3"], '["2"]', ["2"], True),
    (["1", "2", "3"], '["1"]', ["1"], True),
    (["1", "2", "3"], '["1","2"]', ["1", "2"], True),
    (["1", "2", "3"], '["1","2","3"]', ["1", "2", "3"], True),
    (["1", "2", "3"], '["2","3"]', ["2", "3"], True),
    (["1", "2", "3"], '["1","3"]', ["1", "3"], True),
    (["1.1"], "[1.1,2.2]", [1.1, 2.2], False),
]


@pytest.mark.parametrize("variable_value, operation_value, parsed, expected", HAS_CASES)
def test_has(variable_value, operation_value, parsed, expected):
    op = registry.get("has")
    prepared = op.prepare_value(operation_value)
    assert prepared == parsed
    assert _run(op, variable_value, prepared) is expected


def test_has_empty_operation_value():
    op = registry.get("has")
    with pytest.raises(OperationError, match=_elements_error("has")):
        op.prepare_value("[]")
    with pytest.raises(OperationError, match=_elements_error("has")):
        _run(op, 1, None)


def test_has_variable_error_propagates():
    op = registry.get("has")
    prepared = op.prepare_value('["1","2"]')
    with pytest.raises(LookupError, match="value not found"):
        op.run(FakeVariable(["1", "2"], LookupError("value not found")), prepared, None, {})


# ---- in ----

IN_CASES = [
    (1, "[1,2]", [1.0, 2.0], True),
    ("1", '["1","2"]', ["1", "2"], True),
    ("2", '["1","2"]', ["1", "2"], True),
    ("3", '["1","2"]', ["1", "2"], False),
    ("1", "1,2", ["1", "2"], True),
    ("2", "1,2", ["1", "2"], True),
    ("3", "1,2", ["1", "2"], False),
    (["1", "2"], '["1","2"]', ["1", "2"], True),
]


@pytest.mark.parametrize("variable_value, operation_value, parsed, expected", IN_CASES)
def test_in(variable_value, operation_value, parsed, expected):
    op = registry.get("in")
    prepared = op.prepare_value(operation_value)
    assert prepared == parsed
    assert _run(op, variable_value, prepared) is expected


def test_in_variable_error_propagates():
    op = registry.get("in")
    prepared = op.prepare_value("[1,2]")
    assert prepared == [1.0, 2.0]
    with pytest.raises(LookupError, match="value not found"):
        op.run(FakeVariable(1, LookupError("value not found")), prepared, None, {})


def test_in_empty_operation_value():
    op = registry.get("in")
    with pytest.raises(OperationError, match=_elements_error("in")):
        op.prepare_value("[]")
    assert _run(op, "2", None) is False


# ---- not ----

NOT_CASES = [
    (["1", "2"], '["1","2"]', ["1", "2"], False),
    (1, "[1,2]", [1.0, 2.0], False),
    ([1], "[1,2]", [1.0, 2.0], False),
    ([2], "[1,2]", [1.0, 2.0], False),
    ([3], "[1,2]", [1.0, 2.0], True),
    (["1"], "[1,2]", [1.0, 2.0], False),
    (["2"], "[1,2]", [1.0, 2.0], False),
    (["3"], "[1,2]", [1.0, 2.0], True),
    (["1.1"], "[1.1,2.2]", [1.1, 2.2], False),
    (["2.2"], "[1.1,2.2]", [1.1, 2.2], False),
    (["2.2"], '["1.1","2.2"]', ["1.1", "2.2"], False),
    (["3.3"], '["1.1","2.2"]', ["1.1", "2.2"], True),
    ([["1.1"]], '[["1.1"],"2.2"]', [["1.1"], "2.2"], False),
    ("2.2", '[["1.1"],"2.2"]', [["1.1"], "2.2"], False),
    ("3.3", '[["1.1"],"2.2"]', [["1.1"], "2.2"], True),
]


@pytest.mark.parametrize("variable_value, operation_value, parsed, expected", NOT_CASES)
def test_not(variable_value, operation_value, parsed, expected):
    op = registry.get("not")
    prepared = op.prepare_value(operation_value)
    assert prepared == parsed
    assert _run(op, variable_value, prepared) is expected


def test_not_variable_error_propagates():
    op = registry.get("not")
    prepared = op.prepare_value('["1","2"]')
    with pytest.raises(LookupError, match="value not found"):
        op.run(FakeVariable(["1", "2"], LookupError("value not found")), prepared, None, {})


def test_not_empty_operation_value():
    op = registry.get("not")
    with pytest.raises(OperationError, match=_elements_error("not")):
        op.prepare_value("[]")
    with pytest.raises(OperationError, match=_elements_error("not")):
        _run(op, 1, None)


# ---- nin ----

NOT_IN_CASES = [
    (1, "[1,2]", [1.0, 2.0], False),
    ("1", '["1","2"]', ["1", "2"], False),
    ("2", '["1","2"]', ["1", "2"], False),
    ("3", '["1","2"]', ["1", "2"], True),
    ("1", "1,2", ["1", "2"], False),
    ("2", "1,2", ["1", "2"], False),
    ("3", "1,2", ["1", "2"], True),
    (["1", "2"], '[["1","2"]]', [["1", "2"]], False),
    (["2", "2"], '[["1","2"]]', [["1", "2"]], True),
]


@pytest.mark.parametrize("variable_value, operation_value, parsed, expected", NOT_IN_CASES)
def test_not_in(variable_value, operation_value, parsed, expected):
    op = registry.get("nin")
    prepared = op.prepare_value(operation_value)
    assert prepared == parsed
    assert _run(op, variable_value, prepared) is expected


def test_not_in_variable_error_propagates():
    op = registry.get("nin")
    prepared = op.prepare_value("[1,2]")
    with pytest.raises(LookupError, match="value not found"):
        op.run(FakeVariable(1, LookupError("value not found")), prepared, None, {})


def test_not_in_empty_operation_value():
    op = registry.get("nin")
    with pytest.raises(OperationError, match=_elements_error("nin")):
        op.prepare_value("[]")
    assert _run(op, "2", None) is True