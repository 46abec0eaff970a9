"""Schemas describing the shape of resources, data sources and provider configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from .string_kind import StringKind
from .types import Type

__all__ = [
    "SchemaNestedBlockNestingMode",
    "Schema",
    "SchemaBlock",
    "SchemaAttribute",
    "SchemaNestedBlock",
]


class SchemaNestedBlockNestingMode(IntEnum):
    """How a nested block is repeated and represented in values.

    SINGLE and GROUP appear as an Object (GROUP is never null), LIST and SET
    as a List or Set of Objects, and MAP as a Map of Objects keyed by label.
    """

    INVALID = 0
    SINGLE = 1
    LIST = 2
    SET = 3
    MAP = 4
    GROUP = 5

    def __str__(self) -> str:
        return self.name


@dataclass
class SchemaAttribute:
    """A single attribute within a schema block."""

    name: str
    type: Type
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    description_kind: StringKind = StringKind.PLAIN
    deprecated: bool = False


@dataclass
class SchemaBlock:
    """A block of attributes and nested blocks; it appears in values as an Object."""

    version: int = 0
    attributes: List[SchemaAttribute] = field(default_factory=list)
    block_types: List["SchemaNestedBlock"] = field(default_factory=list)
    description: str = ""
    description_kind: StringKind = StringKind.PLAIN
    deprecated: bool = False


@dataclass
class SchemaNestedBlock:
    """A block nested within another block."""

    type_name: str
    block: Optional[SchemaBlock] = None
    nesting: SchemaNestedBlockNestingMode = SchemaNestedBlockNestingMode.INVALID
    min_items: int = 0
    max_items: int = 0


@dataclass
class Schema:
    """A versioned schema with its root block."""

    version: int = 0
    block: Optional[SchemaBlock] = None