"""
Resolve a table schema into a ``validate(raw) -> dict`` callable
"""

from typing import Any, Callable, Dict, Mapping
from pydantic import BaseModel, TypeAdapter
from core.exceptions import ConfigError

Validator = Callable[[Mapping[str, Any]], Dict[str, Any]]


def _prune(value: Any, dumped: Any) -> Any:
    """Drop fields a record never set whose schema default is None"""
    if isinstance(value, BaseModel) and isinstance(dumped, dict):
        result: Dict[str, Any] = {}
        for name, info in type(value).model_fields.items():
            key = info.serialization_alias or info.alias or name
            if key not in dumped:
                continue
            if name not in value.model_fields_set and info.default is None:
                continue
            result[key] = _prune(getattr(value, name), dumped[key])
        for key in value.model_extra or {}:
            if key in dumped:
                result[key] = dumped[key]
        return result
    if isinstance(value, (list, tuple)) and isinstance(dumped, list):
        return [_prune(item, out) for item, out in zip(value, dumped)]
    if isinstance(value, Mapping) and isinstance(dumped, dict):
        return {key: _prune(value.get(key), out) for key, out in dumped.items()}
    return dumped


def _dump_model(model: BaseModel) -> Dict[str, Any]:
    return _prune(model, model.model_dump(by_alias=True))


def _as_dict(value: Any) -> Dict[str, Any]:
    if isinstance(value, BaseModel):
        return _dump_model(value)
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Schema returned {type(value).__name__}, expected a mapping")


def resolve_validator(schema: Any) -> Validator:
    """
    Build a validator from a schema.

    Supported schemas:
    - Pydantic model classes (validated with ``model_validate``)
    - Pydantic ``TypeAdapter`` instances
    - Objects exposing ``validate(raw)``
    - Plain callables ``raw -> mapping``

    Model output keeps every field the record set plus every default the
    schema fills in. Optional fields that default to None and are absent
    from the record stay absent rather than showing up as ``None``.
    """
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        def validate_model(raw: Mapping[str, Any]) -> Dict[str, Any]:
            return _as_dict(schema.model_validate(raw))
        return validate_model

    if isinstance(schema, TypeAdapter):
        def validate_adapter(raw: Mapping[str, Any]) -> Dict[str, Any]:
            value = schema.validate_python(raw)
            if isinstance(value, BaseModel):
                return _as_dict(value)
            return _as_dict(schema.dump_python(value, by_alias=True))
        return validate_adapter

    validate = getattr(schema, "validate", None)
    if callable(validate):
        return lambda raw: _as_dict(validate(raw))

    if callable(schema):
        return lambda raw: _as_dict(schema(raw))

    raise ConfigError(
        "Table schema must be a pydantic model, a TypeAdapter or a callable",
        context={"schema_type": type(schema).__name__}
    )
