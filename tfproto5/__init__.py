"""Terraform plugin protocol 5 types, values, attribute paths, msgpack encoding and schemas."""

__version__ = "0.1.0"

__all__ = [
    "attribute_path",
    "schema",
    "string_kind",
    "types",
    "value",
    "value_msgpack",
]