"""Terraform values: typed data that may be null or not yet known.

A :class:`Value` pairs a :class:`~tfproto5.types.Type` with its data. The data
is held in one of these built-in representations:

* String: ``str``
* Number: ``decimal.Decimal`` (``int`` and ``float`` are accepted and converted
  exactly)
* Bool: ``bool``
* Map and Object: ``dict`` of ``str`` to :class:`Value`
* List, Set and Tuple: ``list`` of :class:`Value`

``None`` means the value is null and :data:`UNKNOWN_VALUE` means it is not
known yet. Objects with a ``to_terraform5_value()`` method may be passed in
place of data, and objects with a ``from_terraform5_value(value)`` method may
be used as conversion targets of :meth:`Value.as_`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Tuple as TupleT

from .types import DYNAMIC_PSEUDO_TYPE, List, Map, Object, Primitive, Set, Tuple, Type

__all__ = [
    "UNKNOWN_VALUE",
    "Value",
    "ValueConversionError",
    "type_from_elements",
]


class _Unknown:
    """Marker for a value that is not yet known."""

    _instance = None

    def __new__(cls) -> "_Unknown":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN_VALUE"

    def __reduce__(self) -> str:
        return "UNKNOWN_VALUE"


UNKNOWN_VALUE = _Unknown()
"""A value that is not yet known. It can be the value of any type."""


class ValueConversionError(ValueError):
    """Raised when a value cannot be converted to the requested target."""


def _normalize(val: Any) -> Any:
    if val is None or val is UNKNOWN_VALUE:
        return val
    creator = getattr(val, "to_terraform5_value", None)
    if callable(creator):
        val = creator()
        if val is None or val is UNKNOWN_VALUE:
            return val
    if isinstance(val, (str, bool, Decimal)):
        return val
    if isinstance(val, int):
        return Decimal(val)
    if isinstance(val, float):
        if math.isnan(val):
            raise ValueError("NaN cannot be used as a number value")
        return Decimal(val)
    if isinstance(val, Mapping):
        for key, item in val.items():
            if not isinstance(key, str) or not isinstance(item, Value):
                raise TypeError("map values must map str keys to Value items")
        return dict(val)
    if isinstance(val, (list, tuple)):
        if not all(isinstance(item, Value) for item in val):
            raise TypeError("sequence values must contain only Value items")
        return list(val)
    raise TypeError(f"unknown type {type(val).__name__} passed to Value")


# target -> (predicate on the held data, description, zero-value factory)
_CONVERSIONS: Dict[type, TupleT[Callable[[Any], bool], str, Callable[[], Any]]] = {
    str: (lambda raw: isinstance(raw, str), "string", str),
    Decimal: (lambda raw: isinstance(raw, Decimal), "Decimal", Decimal),
    bool: (lambda raw: isinstance(raw, bool), "boolean", bool),
    dict: (lambda raw: isinstance(raw, dict), "dict[str, Value]", dict),
    list: (lambda raw: isinstance(raw, list), "list[Value]", list),
}


def _raw_equal(a: Any, b: Any) -> bool:
    if a is None or b is None or a is UNKNOWN_VALUE or b is UNKNOWN_VALUE:
        return a is b
    if type(a) is not type(b):
        return False
    return a == b


class Value:
    """A piece of Terraform data together with its type."""

    __slots__ = ("_typ", "_value")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, typ: Type, value: Any = None) -> None:
        if not isinstance(typ, Type):
            raise TypeError(f"expected a Type, got {type(typ).__name__}")
        self._typ = typ
        self._value = _normalize(value)

    @property
    def typ(self) -> Type:
        """The type of the value."""
        return self._typ

    @property
    def value(self) -> Any:
        """The data held, in its built-in representation."""
        return self._value

    def as_(self, target: Any, nullable: bool = False) -> Any:
        """Convert the value into ``target`` and return the result.

        ``target`` is one of ``str``, ``Decimal``, ``bool``, ``dict`` or
        ``list``, or an object with a ``from_terraform5_value`` method, which
        is called with this value; the object itself is returned unless the
        method returns something else.

        A null value becomes ``None`` when ``nullable`` is true and the
        target's empty value otherwise.
        """
        converter = getattr(target, "from_terraform5_value", None)
        if callable(converter):
            result = converter(self)
            return target if result is None else result
        if not self.is_known():
            raise ValueConversionError("unmarshaling unknown values is not supported")
        if not isinstance(target, type) or target not in _CONVERSIONS:
            raise ValueConversionError(
                f"can't unmarshal into {target!r}, needs from_terraform5_value method"
            )
        accepts, description, zero = _CONVERSIONS[target]
        if self.is_null():
            return None if nullable else zero()
        if not accepts(self._value):
            raise ValueConversionError(
                f"can't unmarshal {self._typ} into {target.__name__}, expected {description}"
            )
        if isinstance(self._value, (dict, list)):
            return target(self._value)
        return self._value

    def is_known(self) -> bool:
        """Whether the value is known; nested values are not checked."""
        return self._value is not UNKNOWN_VALUE

    def is_fully_known(self) -> bool:
        """Whether the value and every value nested inside it are known."""
        if not self.is_known():
            return False
        if isinstance(self._typ, Primitive):
            return True
        if isinstance(self._typ, (List, Set, Tuple, Map, Object)):
            if self._value is None:
                return True
            items: Iterable[Value] = (
                self._value.values() if isinstance(self._value, dict) else self._value
            )
            return all(item.is_fully_known() for item in items)
        raise TypeError(f"unknown type {type(self._typ).__name__}")

    def is_null(self) -> bool:
        """Whether the value is null."""
        return self._value is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._typ.is_type(other._typ) and _raw_equal(self._value, other._value)

    def __repr__(self) -> str:
        return f"Value({self._typ}, {self._value!r})"


def type_from_elements(elements: Iterable[Value]) -> Type:
    """Return the type all ``elements`` share.

    An empty collection gives the dynamic pseudo-type; elements of differing
    types raise :class:`ValueError`.
    """
    typ = None
    for element in elements:
        if typ is None:
            typ = element.typ
        elif not typ.is_type(element.typ):
            raise ValueError("elements do not all have the same types")
    return DYNAMIC_PSEUDO_TYPE if typ is None else typ