# ============================================================================
# ConvertKit - Deserialization Targets
#
# Purpose: Validate decoded data against a target type, or merge it into a
#          caller-supplied mutable instance
# Inputs: Decoded Python data (dicts/lists/scalars), target type or instance
# Outputs: Validated values; mutated target instances
# Dependencies: pydantic, dataclasses, typing
# Usage: value = validate_into(data, target)
#
# Changelog:
#   2026-03-03: Initial target handling shared by the JSON and XML codecs
#   2026-03-07: Refuse frozen models/dataclasses before decoding anything
#   2026-03-16: Annotation helpers (optional/sequence/mapping/fields) shared
#               by both codecs
# ============================================================================

import dataclasses
import inspect
import types
import typing
from collections import abc
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError

from ConvertKit.errors import SerializationError

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, abc.Sequence, abc.MutableSequence, abc.Set, abc.MutableSet)
_MAPPING_ORIGINS = (dict, abc.Mapping, abc.MutableMapping)


def unwrap_optional(annotation: Any) -> Any:
    """``Optional[X]`` -> ``X``; anything else unchanged."""
    origin = typing.get_origin(annotation)
    if origin is Union or origin is getattr(types, "UnionType", None):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def sequence_item(annotation: Any) -> Optional[Any]:
    """Item type when annotation is a sequence/set type, else None."""
    if annotation in (list, tuple, set, frozenset):
        return Any
    origin = typing.get_origin(annotation)
    if origin in _SEQUENCE_ORIGINS:
        args = typing.get_args(annotation)
        return args[0] if args else Any
    return None


def mapping_value(annotation: Any) -> Optional[Any]:
    """Value type when annotation is a mapping type, else None."""
    if annotation is dict:
        return Any
    if typing.get_origin(annotation) in _MAPPING_ORIGINS:
        args = typing.get_args(annotation)
        return args[1] if len(args) == 2 else Any
    return None


def field_tags(annotation: Any) -> Optional[Dict[str, Tuple[str, Any]]]:
    """Map serialized key (alias or name) -> (field name, field annotation) for models and dataclasses."""
    if not inspect.isclass(annotation):
        return None
    if issubclass(annotation, BaseModel):
        return {(field.alias or name): (name, field.annotation) for name, field in annotation.model_fields.items()}
    if dataclasses.is_dataclass(annotation):
        hints = typing.get_type_hints(annotation)
        return {f.name: (f.name, hints.get(f.name, Any)) for f in dataclasses.fields(annotation)}
    return None


def is_instance_target(target: Any) -> bool:
    """True when target is a mutable instance to populate rather than a type to build."""
    if isinstance(target, (BaseModel, dict, list)):
        return True
    return dataclasses.is_dataclass(target) and not isinstance(target, type)


def field_names(target: Any) -> List[str]:
    """Attribute names of a model or dataclass instance."""
    if isinstance(target, BaseModel):
        return list(type(target).model_fields)
    return [f.name for f in dataclasses.fields(target)]


def _is_frozen(target: Any) -> bool:
    if isinstance(target, BaseModel):
        return bool(type(target).model_config.get("frozen"))
    return bool(target.__dataclass_params__.frozen)


def get_adapter(func: str, target: Any) -> TypeAdapter:
    """Build a TypeAdapter, reporting unsupported targets as SerializationError."""
    try:
        return TypeAdapter(target)
    except PydanticUserError as e:
        raise SerializationError(f"{func}: unsupported target {target!r}", details=str(e)) from e


def validate_into(func: str, data: Any, target: Any) -> Any:
    """
    Validate decoded data against a target type.

    Args:
        func: Calling operation, used in error messages
        data: Decoded data
        target: Type or typing form (e.g. ``dict[str, int]``)

    Returns:
        Validated value

    Raises:
        SerializationError: If data does not match the target's shape
    """
    adapter = get_adapter(func, target)
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise SerializationError(f"{func}: cannot decode into {target!r}", details=str(e)) from e


def populate(func: str, data: Any, target: Any) -> Any:
    """
    Merge decoded object data into a model, dataclass or dict instance.

    Decoded keys override current values; keys absent from the data keep
    their current values. The merged result is validated before the target
    is touched, so a failure leaves it unchanged.

    Returns:
        The same target instance
    """
    if not isinstance(data, dict):
        raise SerializationError(f"{func}: cannot decode {type(data).__name__} into {type(target).__name__}")

    if isinstance(target, dict):
        target.update(data)
        return target

    if _is_frozen(target):
        raise SerializationError(f"{func}: target {type(target).__name__} is frozen")

    adapter = get_adapter(func, type(target))
    current: Dict[str, Any] = adapter.dump_python(target, by_alias=True)
    try:
        merged = adapter.validate_python({**current, **data})
    except ValidationError as e:
        raise SerializationError(f"{func}: cannot decode into {type(target).__name__}", details=str(e)) from e

    for name in field_names(target):
        setattr(target, name, getattr(merged, name))
    return target
