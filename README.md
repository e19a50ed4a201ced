# rulefilter

`rulefilter` provides building blocks for rule-based filtering of structured data. A rule
pairs a *variable* with an *operation* and an *operation value*. The variable
extracts a value from the data. The operation tests that value against the
operation value and returns a `bool`.

## Operations

When a module is imported, it registers its operations in a default registry.
Look an operation up by name with `rulefilter.registry.get`, which returns
`None` for an unknown name.

| Names             | Class (module)                          | True when                                             |
|-------------------|-----------------------------------------|-------------------------------------------------------|
| `=`, `eq`         | `Equal` (`comparison`)                  | the value compares equal                              |
| `!=`, `<>`, `ne`  | `NotEqual` (`comparison`)               | the value compares unequal                            |
| `>`, `gt`         | `GreaterThan` (`comparison`)            | the value is greater                                  |
| `>=`, `gte`       | `GreaterThanEqual` (`comparison`)       | the value is greater or equal                         |
| `<`, `lt`         | `LessThan` (`comparison`)               | the value is less                                     |
| `<=`, `lte`       | `LessThanEqual` (`comparison`)          | the value is less or equal                            |
| `vgt`             | `VersionGreaterThan` (`comparison`)     | the dotted version is newer                           |
| `vgte`            | `VersionGreaterThanEqual` (`comparison`)| the dotted version is the same or newer               |
| `vlt`             | `VersionLessThan` (`comparison`)        | the dotted version is older                           |
| `vlte`            | `VersionLessThanEqual` (`comparison`)   | the dotted version is the same or older               |
| `any`             | `AnyOf` (`membership`)                  | some element of the value is among the targets        |
| `between`         | `Between` (`membership`)                | the value lies in an inclusive `[start, end]` pair    |
| `has`             | `Has` (`membership`)                    | the value contains every target                       |
| `in`              | `In` (`membership`)                     | every element of the value is among the targets       |
| `not`             | `Not` (`membership`)                    | no element of the value is among the targets          |
| `nin`             | `NotIn` (`membership`)                  | the value as a whole equals none of the targets       |
| `iir`             | `InIPRange` (`ip_range`)                | the IPv4 address lies in one of the CIDR blocks       |
| `niir`            | `NotInIPRange` (`ip_range`)             | the IPv4 address lies in none of the CIDR blocks      |
| `~`               | `Match` (`match`)                       | the string contains the text or matches `/regex/`     |
| `!~`              | `NotMatch` (`match`)                    | the negation of `~`                                   |
| `~*`              | `MatchAny` (`match`)                    | any of several texts or `/regex/` patterns matches    |
| `!~*`             | `MatchNone` (`match`)                   | none of them matches                                  |

List-valued operations accept any of these forms:

- a Python list;
- a JSON array string such as `'[1,"a"]'`, where JSON integers become floats;
- a comma-separated string such as `"a,b"`.

A regular expression is written between slashes and compiled with Python's `re`. It
matches anywhere in the string.

## Usage

```python
from rulefilter import registry, comparison, membership, ip_range, match  # registers operations


class Field:
    def __init__(self, key):
        self.key = key

    def value(self, data, cache):
        return data[self.key]


op = registry.get("in")
prepared = op.prepare_value("1,2")
print(op.run(Field("code"), prepared, {"code": "2"}, None))  # True
```

`prepare_value` checks the operation value, normalises it, and returns it for
use with `run`. An unusable value raises `rulefilter.registry.OperationError`,
which is a subclass of `ValueError`. `run` can raise `OperationError` as well,
for example when a match operation receives a variable value that is not a
string. Any exception raised by the variable's `value(data, cache)` method
propagates unchanged.

### Custom operations

Subclass `registry.Operation` and set a `name`. Implement `prepare_value` and
`run`, or subclass `registry.OriginValue` if the operation value should be
used exactly as given. Pass an instance to `registry.register`. Registration
raises `ValueError` when the instance is `None`, when its name is empty, or when
the name is already taken. A separate `registry.Registry` instance holds
operations apart from the default one. `registry.print_operations()` lists
every registered name together with its class.

## Helpers

`rulefilter.kinds` classifies values and converts them:

- `FilterType` and `get_filter_type`
- `is_scalar`, `is_number`, `is_string`, …
- lenient converters: `get_bool`, `get_float`, `get_int`, `get_uint`,
  `get_string`

`rulefilter.utils` provides:

- `object_compare`: numeric comparison for numbers and booleans, lexical
  comparison for strings, deep equality for anything else;
- `number_compare` and `float_equals`, which compare within `EPSILON`;
- `version_compare`: dotted versions, a leading `v` ignored, missing parts
  counted as 0;
- `get_object_value_by_key`: reads dotted paths such as `"user.works.0.name"`
  through mappings, sequences and objects, and raises `KeyError` when a step
  is missing;
- `parse_target_array_value` and `clone`;
- IPv4 helpers: `IPRange`, `ip_ranges`, `in_ip_range`, `to_int`, `int_to_ip`,
  `bytes_or` and `bytes_not`.

## What this package does not do

The package contains the operations and helpers only. It has no variable
implementations, no cache, and no parser or engine that reads rule
definitions and evaluates them. You supply the variable object and whatever
`cache` it expects. IP-range operations handle IPv4 addresses only.

## Tests

```
pip install -e .[test]
pytest
```