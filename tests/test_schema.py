import pytest

from tfproto5.schema import (
    Schema,
    SchemaAttribute,
    SchemaBlock,
    SchemaNestedBlock,
    SchemaNestedBlockNestingMode,
)
from tfproto5.string_kind import StringKind
from tfproto5.types import STRING


@pytest.mark.parametrize(
    "number, name",
    [
        (0, "INVALID"),
        (1, "SINGLE"),
        (2, "LIST"),
        (3, "SET"),
        (4, "MAP"),
        (5, "GROUP"),
    ],
)
def test_nesting_mode_values_and_names(number, name):
    mode = SchemaNestedBlockNestingMode(number)
    assert str(mode) == name
    assert int(mode) == number


def test_nesting_mode_out_of_range_raises():
    with pytest.raises(ValueError):
        SchemaNestedBlockNestingMode(6)


def test_block_defaults_are_independent_lists():
    first = SchemaBlock()
    second = SchemaBlock()
    first.attributes.append(SchemaAttribute(name="id", type=STRING))
    assert second.attributes == []
    assert first.description_kind is StringKind.PLAIN


def test_attribute_defaults():
    attr = SchemaAttribute(name="id", type=STRING, computed=True)
    assert attr.computed is True
    assert attr.required is False
    assert attr.optional is False
    assert attr.description_kind is StringKind.PLAIN


def test_nested_block_defaults():
    nested = SchemaNestedBlock(type_name="rule")
    assert nested.nesting is SchemaNestedBlockNestingMode.INVALID
    assert nested.min_items == 0
    assert nested.max_items == 0


def test_schema_holds_nested_structure():
    inner = SchemaBlock(attributes=[SchemaAttribute(name="port", type=STRING)])
    root = SchemaBlock(
        version=2,
        block_types=[
            SchemaNestedBlock(
                type_name="rule",
                block=inner,
                nesting=SchemaNestedBlockNestingMode.LIST,
                min_items=1,
            )
        ],
    )
    schema = Schema(version=2, block=root)
    assert schema.block.block_types[0].block.attributes[0].name == "port"
    assert schema.block.block_types[0].nesting == SchemaNestedBlockNestingMode.LIST
    assert schema == Schema(version=2, block=root)