# tfproto5

Building blocks for Terraform provider plugins that speak protocol version 5.
The package covers five areas:

- the Terraform type system;
- values that may be null or unknown;
- attribute paths that point into nested values;
- msgpack encoding of values;
- the data structures that describe provider schemas.

The only runtime dependency is `msgpack`. The `test` extra adds `pytest`.

## Types (`tfproto5.types`)

The primitive types are the constants `STRING`, `NUMBER`, `BOOL` and `DYNAMIC_PSEUDO_TYPE`. Each one is a `Primitive`.

The aggregate types are:

- `List(element_type)`
- `Set(element_type)`
- `Map(attribute_type)`
- `Object(attribute_types)`, where `attribute_types` is a mapping of attribute name to type
- `Tuple(element_types)`, where `element_types` is a sequence of types

Compare types with `is_type`, not with `==`. If you leave out the inner types of an aggregate, it matches any type of the same kind. For example, `some_type.is_type(List())` asks whether `some_type` is a list at all.

`to_json()` writes a type's JSON signature. Object attributes come out in sorted order. `parse_json_type` reads a signature back from `str` or `bytes`. It raises `TypeParseError`, a subclass of `ValueError`, when the description is malformed.

```python
from tfproto5.types import parse_json_type, List, STRING, TypeParseError

typ = parse_json_type('["object",{"name":"string","tags":["list","string"]}]')
print(typ.to_json())   # ["object",{"name":"string","tags":["list","string"]}]
print(List(STRING).is_type(List()))  # True

try:
    parse_json_type('"text"')
except TypeParseError as err:
    print(err)  # invalid primitive type name 'text'
```

## Values (`tfproto5.value`)

A `Value(typ, data)` pairs a type with data. The data is held in one of these forms:

| Type | Data |
| --- | --- |
| String | `str` |
| Number | `decimal.Decimal` (`int` and `float` are accepted and converted exactly; NaN is rejected) |
| Bool | `bool` |
| Map and Object | `dict` of `str` to `Value` |
| List, Set and Tuple | `list` of `Value` |

`None` means the value is null. `UNKNOWN_VALUE` means it is not yet known.

You can pass an object with a `to_terraform5_value()` method in place of the data. Its result is then used as the data.

The methods on a `Value` are:

- `is_known()` checks only the top level.
- `is_fully_known()` also checks every nested element and attribute.
- `is_null()` reports a null value.
- `==` compares the type (with `is_type`) and the data.
- `as_(target, nullable=False)` converts a known value into one of `str`, `Decimal`, `bool`, `dict` or `list`.

For `as_`, a null value gives `None` when `nullable` is true, and the target's empty value otherwise. A target with a `from_terraform5_value(value)` method is handed the value to convert itself. `as_` raises `ValueConversionError` for unknown values and for data that does not fit the target.

`type_from_elements(values)` returns the type shared by all the values. It returns `DYNAMIC_PSEUDO_TYPE` for an empty collection and raises `ValueError` when the types differ.

```python
from tfproto5.types import STRING
from tfproto5.value import Value, UNKNOWN_VALUE

print(Value(STRING, "hello").as_(str))                 # hello
print(Value(STRING, None).as_(str, nullable=True))     # None
print(Value(STRING, UNKNOWN_VALUE).is_known())         # False
```

## Encoding (`tfproto5.value_msgpack`)

`marshal_msgpack(value, typ)` produces the msgpack bytes Terraform expects inside a dynamic value. The encoding follows these rules:

- Unknown values become extension type 0.
- Object attributes are written in sorted order, and each one must have a value.
- Numbers are written in the first form that holds them exactly: a 64-bit integer, then a double, then a decimal string.
- When the target type is the dynamic pseudo-type, the value is sent as a pair: its JSON type signature, then its data.

When data does not fit the type, the function raises `AttributePathError`. The error's `path` points at the offending nested value.

```python
from tfproto5.types import Object, STRING
from tfproto5.value import Value
from tfproto5.value_msgpack import marshal_msgpack

obj = Object({"name": STRING})
data = marshal_msgpack(Value(obj, {"name": Value(STRING, "web")}), obj)
```

## Attribute paths (`tfproto5.attribute_path`)

An `AttributePath` is a list of steps. The step types are:

- `AttributeName`
- `ElementKeyString`
- `ElementKeyInt`
- `ElementKeyValue`

To build a path, add steps with `with_attribute_name`, `with_element_key_string`, `with_element_key_int` and `with_element_key_value`. `without_last_step` removes the last step.

`new_error(message)` returns an `AttributePathError` tied to the path.

`walk_attribute_path(value, path)` follows a path through mappings, lists and tuples. It also steps into any object with an `apply_attribute_path_step(step)` method (see `AttributePathStepper`). It raises two errors:

- `NotAttributePathStepperError` when it meets something it cannot step into.
- `InvalidStepError` when a step does not fit the value it is applied to.

The error's `path` holds the remaining steps, starting with the one that failed.

```python
from tfproto5.attribute_path import AttributePath, AttributeName, ElementKeyInt, walk_attribute_path

path = AttributePath([AttributeName("colors"), ElementKeyInt(0)])
print(walk_attribute_path({"colors": ["green"]}, path))  # green
```

## Schemas (`tfproto5.schema`, `tfproto5.string_kind`)

`Schema`, `SchemaBlock`, `SchemaAttribute` and `SchemaNestedBlock` are dataclasses. They describe the shape of resources, data sources and provider configuration.

`SchemaNestedBlockNestingMode` lists the nesting modes: `INVALID`, `SINGLE`, `LIST`, `SET`, `MAP` and `GROUP`.

`StringKind` (`PLAIN`, `MARKDOWN`) says how a description is formatted. Both enums print as their member names.

## What this package does not do

- It has no plugin server. Nothing here accepts gRPC connections from Terraform or performs the plugin handshake.
- It defines no request or response types for provider calls.
- It encodes values to msgpack but does not decode msgpack or JSON state back into values.