from decimal import Decimal

import msgpack
import pytest

from tfproto5.attribute_path import AttributeName, AttributePathError, ElementKeyInt
from tfproto5.types import BOOL, DYNAMIC_PSEUDO_TYPE, NUMBER, STRING, List, Map, Object, Set, Tuple
from tfproto5.value import UNKNOWN_VALUE, Value
from tfproto5.value_msgpack import marshal_msgpack


def unpack(data):
    return msgpack.unpackb(data, raw=False, strict_map_key=False)


def test_unknown_value_wire_bytes():
    assert marshal_msgpack(Value(STRING, UNKNOWN_VALUE), STRING) == bytes([0xD4, 0, 0])


def test_unknown_decodes_as_ext_type_zero():
    result = unpack(marshal_msgpack(Value(List(STRING), UNKNOWN_VALUE), List(STRING)))
    assert result == msgpack.ExtType(0, b"\x00")


def test_null_value():
    assert unpack(marshal_msgpack(Value(STRING, None), STRING)) is None


def test_string_round_trip():
    assert unpack(marshal_msgpack(Value(STRING, "hello"), STRING)) == "hello"


def test_bool_round_trip():
    assert unpack(marshal_msgpack(Value(BOOL, True), BOOL)) is True
    assert unpack(marshal_msgpack(Value(BOOL, False), BOOL)) is False


def test_integer_number_encoded_as_int():
    result = unpack(marshal_msgpack(Value(NUMBER, 123), NUMBER))
    assert result == 123
    assert isinstance(result, int)


def test_int64_boundaries_stay_ints():
    top = 2**63 - 1
    bottom = -(2**63)
    assert unpack(marshal_msgpack(Value(NUMBER, top), NUMBER)) == top
    assert unpack(marshal_msgpack(Value(NUMBER, bottom), NUMBER)) == bottom


def test_large_integer_falls_back_to_float():
    result = unpack(marshal_msgpack(Value(NUMBER, 2**70), NUMBER))
    assert isinstance(result, float)
    assert result == float(2**70)


def test_exact_float_encoded_as_float():
    result = unpack(marshal_msgpack(Value(NUMBER, 0.125), NUMBER))
    assert result == 0.125
    assert isinstance(result, float)


def test_inexact_number_encoded_as_string():
    result = unpack(marshal_msgpack(Value(NUMBER, Decimal("0.1")), NUMBER))
    assert result == "0.1"


def test_infinities():
    assert unpack(marshal_msgpack(Value(NUMBER, Decimal("Infinity")), NUMBER)) == float("inf")
    assert unpack(marshal_msgpack(Value(NUMBER, Decimal("-Infinity")), NUMBER)) == float("-inf")


def test_list_round_trip():
    typ = List(STRING)
    val = Value(typ, [Value(STRING, "a"), Value(STRING, "b")])
    assert unpack(marshal_msgpack(val, typ)) == ["a", "b"]


def test_set_round_trip():
    typ = Set(NUMBER)
    val = Value(typ, [Value(NUMBER, 1), Value(NUMBER, 2)])
    assert sorted(unpack(marshal_msgpack(val, typ))) == [1, 2]


def test_map_round_trip():
    typ = Map(STRING)
    val = Value(typ, {"hello": Value(STRING, "world"), "x": Value(STRING, None)})
    assert unpack(marshal_msgpack(val, typ)) == {"hello": "world", "x": None}


def test_tuple_round_trip():
    typ = Tuple([STRING, NUMBER, BOOL])
    val = Value(typ, [Value(STRING, "hello"), Value(NUMBER, 123), Value(BOOL, True)])
    assert unpack(marshal_msgpack(val, typ)) == ["hello", 123, True]


def test_object_keys_are_sorted():
    typ = Object({"foo": STRING, "bar": NUMBER, "baz": BOOL})
    val = Value(
        typ,
        {
            "foo": Value(STRING, "hello"),
            "bar": Value(NUMBER, 123),
            "baz": Value(BOOL, True),
        },
    )
    pairs = msgpack.unpackb(marshal_msgpack(val, typ), raw=False, object_pairs_hook=list)
    assert [k for k, _ in pairs] == sorted(["foo", "bar", "baz"])
    assert dict(pairs) == {"foo": "hello", "bar": 123, "baz": True}


def test_object_missing_attribute_reports_path():
    typ = Object({"a": STRING, "b": STRING})
    val = Value(typ, {"a": Value(STRING, "x")})
    with pytest.raises(AttributePathError) as info:
        marshal_msgpack(val, typ)
    assert info.value.path.steps == [AttributeName("b")]
    assert "no value set" in str(info.value)


def test_wrong_value_type_raises():
    with pytest.raises(AttributePathError):
        marshal_msgpack(Value(STRING, 5), STRING)


def test_nested_error_reports_element_path():
    typ = List(STRING)
    val = Value(typ, [Value(STRING, "ok"), Value(STRING, True)])
    with pytest.raises(AttributePathError) as info:
        marshal_msgpack(val, typ)
    assert info.value.path.steps == [ElementKeyInt(1)]


def test_dynamic_pseudo_type_wraps_type_json():
    result = unpack(marshal_msgpack(Value(STRING, "hi"), DYNAMIC_PSEUDO_TYPE))
    assert result == [b'"string"', "hi"]


def test_dynamic_pseudo_type_with_aggregate():
    typ = List(STRING)
    val = Value(typ, [Value(STRING, "a")])
    type_json, data = unpack(marshal_msgpack(val, DYNAMIC_PSEUDO_TYPE))
    assert type_json == typ.to_json().encode()
    assert data == ["a"]


def test_tuple_length_mismatch_raises():
    typ = Tuple([STRING, STRING])
    val = Value(typ, [Value(STRING, "only")])
    with pytest.raises(AttributePathError):
        marshal_msgpack(val, typ)