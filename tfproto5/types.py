"""Terraform type system: primitive and aggregate types and their JSON signatures."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

__all__ = [
    "Type",
    "Primitive",
    "List",
    "Map",
    "Set",
    "Object",
    "Tuple",
    "TypeParseError",
    "DYNAMIC_PSEUDO_TYPE",
    "STRING",
    "NUMBER",
    "BOOL",
    "parse_json_type",
]


class TypeParseError(ValueError):
    """Raised when a JSON type description cannot be parsed."""


class Type(ABC):
    """A Terraform type.

    Use :meth:`is_type` rather than ``==`` to decide whether two types match:
    an aggregate type without its inner types matches any type of that kind.
    """

    @abstractmethod
    def is_type(self, other: "Type") -> bool:
        """Return whether ``other`` is considered the same type as this one."""

    @abstractmethod
    def to_json(self) -> str:
        """Return the JSON representation of the full type signature."""


def _inner_json(kind: str, inner: Optional[Type]) -> str:
    if inner is None:
        raise ValueError(f"cannot marshal tftypes.{kind} to JSON: inner type is not set")
    try:
        inner_json = inner.to_json()
    except ValueError as err:
        raise ValueError(
            f"error marshaling tftypes.{kind}'s inner type {type(inner).__name__} to JSON: {err}"
        ) from err
    return f'["{kind.lower()}",{inner_json}]'


_PRIMITIVE_JSON = {
    "String": "string",
    "Number": "number",
    "Bool": "bool",
    "DynamicPseudoType": "dynamic",
}


@dataclass(frozen=True)
class Primitive(Type):
    """A primitive type: String, Number, Bool or DynamicPseudoType."""

    name: str

    def is_type(self, other: Type) -> bool:
        return isinstance(other, Primitive) and self.name == other.name

    def to_json(self) -> str:
        try:
            return json.dumps(_PRIMITIVE_JSON[self.name])
        except KeyError:
            raise ValueError(f"unknown primitive type {str(self)!r}") from None

    def __str__(self) -> str:
        return "tftypes." + self.name


DYNAMIC_PSEUDO_TYPE = Primitive("DynamicPseudoType")
STRING = Primitive("String")
NUMBER = Primitive("Number")
BOOL = Primitive("Bool")


@dataclass(frozen=True)
class List(Type):
    """An ordered collection of elements, all of the same type."""

    element_type: Optional[Type] = None

    def is_type(self, other: Type) -> bool:
        if not isinstance(other, List):
            return False
        if other.element_type is None:
            return True
        if self.element_type is None:
            return False
        return self.element_type.is_type(other.element_type)

    def to_json(self) -> str:
        return _inner_json("List", self.element_type)

    def __str__(self) -> str:
        return "tftypes.List"


@dataclass(frozen=True)
class Set(Type):
    """An unordered collection of unique elements, all of the same type."""

    element_type: Optional[Type] = None

    def is_type(self, other: Type) -> bool:
        if not isinstance(other, Set):
            return False
        if other.element_type is None:
            return True
        if self.element_type is None:
            return False
        return self.element_type.is_type(other.element_type)

    def to_json(self) -> str:
        return _inner_json("Set", self.element_type)

    def __str__(self) -> str:
        return "tftypes.Set"


@dataclass(frozen=True)
class Map(Type):
    """An unordered collection of same-typed elements keyed by unique strings."""

    attribute_type: Optional[Type] = None

    def is_type(self, other: Type) -> bool:
        if not isinstance(other, Map):
            return False
        if other.attribute_type is None:
            return True
        if self.attribute_type is None:
            return False
        return self.attribute_type.is_type(other.attribute_type)

    def to_json(self) -> str:
        return _inner_json("Map", self.attribute_type)

    def __str__(self) -> str:
        return "tftypes.Map"


@dataclass(frozen=True)
class Object(Type):
    """A collection of named attributes, each with its own type."""

    attribute_types: Optional[Mapping[str, Type]] = None

    def __post_init__(self) -> None:
        if self.attribute_types is not None:
            object.__setattr__(self, "attribute_types", dict(self.attribute_types))

    def is_type(self, other: Type) -> bool:
        if not isinstance(other, Object):
            return False
        if other.attribute_types is None:
            return True
        mine = self.attribute_types or {}
        theirs = other.attribute_types
        if len(mine) != len(theirs):
            return False
        return all(k in theirs and typ.is_type(theirs[k]) for k, typ in mine.items())

    def to_json(self) -> str:
        if self.attribute_types is None:
            attrs = "null"
        else:
            attrs = "{" + ",".join(
                json.dumps(name, ensure_ascii=False) + ":" + typ.to_json()
                for name, typ in sorted(self.attribute_types.items())
            ) + "}"
        return f'["object",{attrs}]'

    def __str__(self) -> str:
        return "tftypes.Object"


@dataclass(frozen=True)
class Tuple(Type):
    """An ordered, fixed-length collection of elements of possibly differing types."""

    element_types: Optional[Sequence[Type]] = None

    def __post_init__(self) -> None:
        if self.element_types is not None:
            object.__setattr__(self, "element_types", tuple(self.element_types))

    def is_type(self, other: Type) -> bool:
        if not isinstance(other, Tuple):
            return False
        if other.element_types is None:
            return True
        mine = self.element_types or ()
        if len(mine) != len(other.element_types):
            return False
        return all(a.is_type(b) for a, b in zip(mine, other.element_types))

    def to_json(self) -> str:
        if self.element_types is None:
            elements = "null"
        else:
            elements = "[" + ",".join(t.to_json() for t in self.element_types) + "]"
        return f'["tuple",{elements}]'

    def __str__(self) -> str:
        return "tftypes.Tuple"


_PRIMITIVES_BY_JSON = {
    "bool": BOOL,
    "number": NUMBER,
    "string": STRING,
    "dynamic": DYNAMIC_PSEUDO_TYPE,
}


def _type_from_json(data: Any) -> Type:
    if isinstance(data, str):
        try:
            return _PRIMITIVES_BY_JSON[data]
        except KeyError:
            raise TypeParseError(f"invalid primitive type name {data!r}") from None
    if isinstance(data, dict):
        raise TypeParseError("invalid complex type description")
    if not isinstance(data, list):
        raise TypeParseError("invalid type description")
    if not data or not isinstance(data[0], str):
        raise TypeParseError("invalid complex type kind name")
    kind = data[0]
    if len(data) < 2:
        raise TypeParseError(f"missing type information for {kind!r}")
    inner = data[1]
    if kind == "list":
        result: Type = List(_type_from_json(inner))
    elif kind == "map":
        result = Map(_type_from_json(inner))
    elif kind == "set":
        result = Set(_type_from_json(inner))
    elif kind == "object":
        if not isinstance(inner, dict):
            raise TypeParseError("object attribute types must be a JSON object")
        result = Object({name: _type_from_json(v) for name, v in inner.items()})
    elif kind == "tuple":
        if not isinstance(inner, list):
            raise TypeParseError("tuple element types must be a JSON array")
        result = Tuple([_type_from_json(v) for v in inner])
    else:
        raise TypeParseError("invalid complex type kind name")
    if len(data) > 2:
        raise TypeParseError("unexpected extra data in type description")
    return result


def parse_json_type(buf: Union[bytes, bytearray, str]) -> Type:
    """Parse a type from its JSON representation."""
    try:
        data = json.loads(buf)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise TypeParseError(f"invalid JSON type description: {err}") from err
    return _type_from_json(data)