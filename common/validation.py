"""Validation primitives for settings and read options."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel


class ValidationError(ValueError):
    """Raised when validation fails."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict, immutable base model for option validation."""

    model_config = pydantic.ConfigDict(extra="forbid", frozen=True)


TModel = TypeVar("TModel", bound=SchemaModel)


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    payload = payload or {}
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid {model.__name__} options", details=exc.errors()) from exc


__all__ = [
    "ValidationError",
    "SchemaModel",
    "parse_model",
]
