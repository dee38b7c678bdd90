"""Common types and helpers shared across the API models."""

from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

import pydantic
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from backend.company_service.errors import ValidationError

M = TypeVar("M", bound=BaseModel)


def _require_non_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("should not be empty")
    return value


NonBlankStr = Annotated[str, AfterValidator(_require_non_blank)]


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON keys with snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def normalize_keys(model: type[BaseModel], payload: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the writable fields of ``model``, keyed by their JSON alias.

    Accepts either the camelCase alias or the attribute name. Unknown keys
    (``id``, ``userId``, timestamps, ...) are dropped.
    """
    by_key: dict[str, str] = {}
    for name, field in model.model_fields.items():
        alias = field.alias or name
        by_key[name] = alias
        by_key[alias] = alias

    return {by_key[key]: value for key, value in payload.items() if key in by_key}


def validate_fields(
    model: type[M],
    payload: Mapping[str, Any],
    current: Mapping[str, Any] | None = None,
) -> M:
    """Validate a (possibly partial) payload merged over ``current``.

    Shallow merge: keys present in ``payload`` overwrite ``current``, all
    other keys keep their prior value.

    Raises:
        ValidationError: With every violated field, not just the first.
    """
    merged = {**normalize_keys(model, current or {}), **normalize_keys(model, payload)}

    try:
        return model.model_validate(merged)
    except pydantic.ValidationError as e:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
            }
            for error in e.errors()
        ]
        raise ValidationError(errors) from e


def current_values(model: type[BaseModel], record: object) -> dict[str, Any]:
    """Read the writable fields of ``model`` from an ORM record."""
    return {name: getattr(record, name) for name in model.model_fields}
