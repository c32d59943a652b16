# ============================================================================
# ConvertKit - JSON Serialization
#
# Purpose: Serialize structured values to JSON text and decode JSON text
#          into target types or mutable instances
# Inputs: Models, dataclasses, dicts, lists, scalars / JSON text
# Outputs: JSON text / validated values
# Dependencies: json, pydantic, pydantic_core
# Usage: text = to_json(item); item = from_json(text, Item)
#
# Changelog:
#   2026-03-03: Initial JSON codec (compact output by default)
#   2026-03-07: from_json populates dict/list/model/dataclass instances in place
#   2026-03-16: bytes use the standard Base64 alphabet both ways (pydantic's
#               base64 bytes mode is URL-safe); bytes-typed fields decoded back
# ============================================================================

import dataclasses
import json
from typing import Any, Optional

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ConvertKit.encoding import from_base64, to_base64
from ConvertKit.errors import EncodingError, SerializationError
from ConvertKit.serialization.targets import (
    field_tags,
    is_instance_target,
    mapping_value,
    populate,
    sequence_item,
    unwrap_optional,
    validate_into,
)

_BYTES_TYPES = (bytes, bytearray)


def _encode_bytes(value: Any) -> Any:
    """Replace bytes anywhere in value with standard Base64 text."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return to_base64(value)
    if isinstance(value, BaseModel):
        return _encode_bytes(value.model_dump(by_alias=True))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode_bytes(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {key: _encode_bytes(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_encode_bytes(item) for item in value]
    return value


def _decode_bytes(data: Any, annotation: Any) -> Any:
    """Turn Base64 text back into bytes wherever annotation expects bytes."""
    annotation = unwrap_optional(annotation)

    if annotation in _BYTES_TYPES:
        if not isinstance(data, str):
            return data
        try:
            return from_base64(data)
        except EncodingError as e:
            raise SerializationError("from_json: bytes field is not valid Base64", details=str(e)) from e

    fields = field_tags(annotation)
    if fields is not None:
        if not isinstance(data, dict):
            return data
        return {key: _decode_bytes(item, fields[key][1]) if key in fields else item for key, item in data.items()}

    item_annotation = sequence_item(annotation)
    if item_annotation is not None:
        if not isinstance(data, list):
            return data
        return [_decode_bytes(item, item_annotation) for item in data]

    value_annotation = mapping_value(annotation)
    if value_annotation is not None and isinstance(data, dict):
        return {key: _decode_bytes(item, value_annotation) for key, item in data.items()}
    return data


def to_json(value: Any, indent: Optional[int] = None) -> str:
    """
    Serialize a value to JSON text.

    Models and dataclasses are serialized by field alias; bytes become
    standard Base64 strings; mapping keys keep the source's iteration order.

    Args:
        value: Value to serialize
        indent: JSON indentation (None for compact, 2 for pretty-print)

    Returns:
        JSON text

    Raises:
        SerializationError: If the value (or a nested value) is not serializable, or is NaN/Infinity
    """
    try:
        data = to_jsonable_python(_encode_bytes(value), by_alias=True)
        if indent is None:
            return json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return json.dumps(data, indent=indent, ensure_ascii=False, allow_nan=False)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SerializationError(f"to_json: cannot serialize {type(value).__name__}", details=str(e)) from e


def from_json(text: str, target: Any) -> Any:
    """
    Decode JSON text into a target.

    Fields typed as bytes expect standard Base64 strings, as written by
    to_json.

    Args:
        text: JSON text
        target: Either a type / typing form (``dict[str, int]``, ``Item``),
            whose validated value is returned, or a mutable instance
            (model, dataclass, dict, list) that is populated in place

    Returns:
        The decoded value, or the populated target instance

    Raises:
        SerializationError: On malformed JSON or a mismatch with the target's shape
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise SerializationError("from_json: malformed JSON", details=str(e)) from e

    if not is_instance_target(target):
        return validate_into("from_json", _decode_bytes(data, target), target)

    if isinstance(target, list):
        if not isinstance(data, list):
            raise SerializationError(f"from_json: cannot decode {type(data).__name__} into list")
        target[:] = data
        return target

    if isinstance(target, dict):
        return populate("from_json", data, target)
    return populate("from_json", _decode_bytes(data, type(target)), target)
