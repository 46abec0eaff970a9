"""MessagePack encoding of Terraform values, as used for dynamic values on the wire."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List as ListT

import msgpack

from .attribute_path import AttributePath, AttributePathError
from .types import (
    BOOL,
    DYNAMIC_PSEUDO_TYPE,
    NUMBER,
    STRING,
    List,
    Map,
    Object,
    Set,
    Tuple,
    Type,
)
from .value import Value

__all__ = ["marshal_msgpack"]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# An unknown value travels as a fixext1 of extension type 0 holding a zero byte.
_UNKNOWN_EXT = msgpack.ExtType(0, b"\x00")


class _Encoder:
    """Collects msgpack chunks while walking a value."""

    def __init__(self) -> None:
        self._packer = msgpack.Packer(use_bin_type=True, use_single_float=False)
        self._chunks: ListT[bytes] = []

    def pack(self, obj: Any) -> None:
        self._chunks.append(self._packer.pack(obj))

    def array_header(self, length: int) -> None:
        self._chunks.append(self._packer.pack_array_header(length))

    def map_header(self, length: int) -> None:
        self._chunks.append(self._packer.pack_map_header(length))

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)


def marshal_msgpack(value: Value, typ: Type) -> bytes:
    """Encode ``value`` as msgpack, interpreting it as type ``typ``.

    Raises :class:`~tfproto5.attribute_path.AttributePathError` pointing at the
    offending nested value when the data does not fit the type.
    """
    encoder = _Encoder()
    _marshal(value, typ, AttributePath(), encoder)
    return encoder.getvalue()


def _unexpected(path: AttributePath, expected: str, got: Any, typ: Type) -> AttributePathError:
    return path.new_error(
        f"unexpected value type {type(got).__name__}, {typ} values must be of type {expected}"
    )


def _marshal(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    if typ.is_type(DYNAMIC_PSEUDO_TYPE) and not val.typ.is_type(DYNAMIC_PSEUDO_TYPE):
        _marshal_dynamic(val, path, enc)
        return
    if not val.is_known():
        enc.pack(_UNKNOWN_EXT)
        return
    if val.is_null():
        enc.pack(None)
        return
    handlers: ListT[tuple[Type, Callable[[Value, Type, AttributePath, _Encoder], None]]] = [
        (STRING, _marshal_string),
        (NUMBER, _marshal_number),
        (BOOL, _marshal_bool),
        (List(), _marshal_list),
        (Set(), _marshal_set),
        (Map(), _marshal_map),
        (Tuple(), _marshal_tuple),
        (Object(), _marshal_object),
    ]
    for kind, handler in handlers:
        if typ.is_type(kind):
            handler(val, typ, path, enc)
            return
    raise path.new_error(f"unknown type {typ}")


def _marshal_dynamic(val: Value, path: AttributePath, enc: _Encoder) -> None:
    try:
        type_json = val.typ.to_json()
    except ValueError as err:
        raise path.new_error(f"error generating JSON for type {val.typ}: {err}") from err
    enc.array_header(2)
    enc.pack(type_json.encode("utf-8"))
    try:
        _marshal(val, val.typ, path, enc)
    except AttributePathError as err:
        raise path.new_error(f"error marshaling DynamicPseudoType value: {err}") from err


def _marshal_string(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    raw = val.value
    if not isinstance(raw, str):
        raise _unexpected(path, "str", raw, typ)
    enc.pack(raw)


def _marshal_number(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    raw = val.value
    if not isinstance(raw, Decimal):
        raise _unexpected(path, "Decimal", raw, typ)
    if raw.is_nan():
        raise path.new_error("error encoding number: NaN is not a number value")
    if raw.is_infinite():
        enc.pack(-math.inf if raw.is_signed() else math.inf)
        return
    if raw == raw.to_integral_value():
        as_int = int(raw)
        if _INT64_MIN <= as_int <= _INT64_MAX:
            enc.pack(as_int)
            return
    try:
        as_float = float(raw)
        exact = math.isfinite(as_float) and Decimal(as_float) == raw
    except (OverflowError, InvalidOperation):
        exact = False
    if exact:
        enc.pack(as_float)
        return
    enc.pack(format(raw.normalize(), "f"))


def _marshal_bool(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    raw = val.value
    if not isinstance(raw, bool):
        raise _unexpected(path, "bool", raw, typ)
    enc.pack(raw)


def _inner_type(inner: Any, typ: Type, path: AttributePath) -> Type:
    if inner is None:
        raise path.new_error(f"{typ} has no element type set")
    return inner


def _marshal_list(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    raw = val.value
    if not isinstance(raw, list):
        raise _unexpected(path, "list[Value]", raw, typ)
    element_type = _inner_type(typ.element_type, typ, path)  # type: ignore[attr-defined]
    enc.array_header(len(raw))
    for pos, item in enumerate(raw):
        path.with_element_key_int(pos)
        _marshal(item, element_type, path, enc)
        path.without_last_step()


def _marshal_set(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    raw = val.value
    if not isinstance(raw, list):
        raise _unexpected(path, "list[Value]", raw, typ)
    element_type = _inner_type(typ.element_type, typ, path)  # type: ignore[attr-defined]
    enc.array_header(len(raw))
    for item in raw:
        path.with_element_key_value(item)
        _marshal(item, element_type, path, enc)
        path.without_last_step()


def _marshal_map(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    raw = val.value
    if not isinstance(raw, dict):
        raise _unexpected(path, "dict[str, Value]", raw, typ)
    attribute_type = _inner_type(typ.attribute_type, typ, path)  # type: ignore[attr-defined]
    enc.map_header(len(raw))
    for key, item in raw.items():
        path.with_element_key_string(key)
        try:
            _marshal(Value(STRING, key), STRING, path, enc)
        except AttributePathError as err:
            raise path.new_error(f"error encoding map key: {err}") from err
        _marshal(item, attribute_type, path, enc)
        path.without_last_step()


def _marshal_tuple(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    raw = val.value
    if not isinstance(raw, list):
        raise _unexpected(path, "list[Value]", raw, typ)
    types = typ.element_types or ()  # type: ignore[attr-defined]
    if len(raw) != len(types):
        raise path.new_error(
            f"tuple has {len(raw)} elements but its type declares {len(types)}"
        )
    enc.array_header(len(types))
    for pos, (item, element_type) in enumerate(zip(raw, types)):
        path.with_element_key_int(pos)
        _marshal(item, element_type, path, enc)
        path.without_last_step()


def _marshal_object(val: Value, typ: Type, path: AttributePath, enc: _Encoder) -> None:
    raw = val.value
    if not isinstance(raw, dict):
        raise _unexpected(path, "dict[str, Value]", raw, typ)
    types = typ.attribute_types or {}  # type: ignore[attr-defined]
    keys = sorted(types)
    enc.map_header(len(keys))
    for key in keys:
        path.with_attribute_name(key)
        if key not in raw:
            raise path.new_error("no value set")
        _marshal(Value(STRING, key), STRING, path, enc)
        _marshal(raw[key], types[key], path, enc)
        path.without_last_step()