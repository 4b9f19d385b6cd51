# -*- coding: utf-8 -*-
"""Field-level validation of providers and models before they are saved.

Validators never raise: they return a :class:`ValidationResult` listing
every failing field. ``validate_model`` also returns an amended copy of
the model with a blank name filled in from the id.
"""

from __future__ import annotations

import re
from typing import List, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, Field

from .errors import ValidationFailedError
from .models import Model, Provider

MAX_PROVIDER_NAME_LENGTH = 100
MAX_MODEL_ID_LENGTH = 200
MAX_MODEL_NAME_LENGTH = 200

_NAME_SEPARATORS = re.compile(r"[-_/]+")


class FieldError(BaseModel):
    """A single validation failure."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationResult(BaseModel):
    valid: bool = True
    errors: List[FieldError] = Field(default_factory=list)

    def add(self, field: str, message: str) -> None:
        self.valid = False
        self.errors.append(FieldError(field=field, message=message))

    def message(self) -> str:
        """All errors joined as ``field: message; ...``."""
        return "; ".join(str(e) for e in self.errors)

    def raise_for_errors(self) -> None:
        if not self.valid:
            raise ValidationFailedError(self)


def format_model_name(model_id: str) -> str:
    """Turn ``gpt-4-turbo`` into ``Gpt 4 Turbo``.

    Splits on ``-``, ``_`` and ``/``, upper-cases the first character of
    each segment, joins with single spaces.
    """
    parts = [p for p in _NAME_SEPARATORS.split(model_id) if p]
    return " ".join(p[0].upper() + p[1:] for p in parts)


def is_valid_url(value: str) -> bool:
    """True for http(s) URLs that carry a host."""
    if not value:
        return False
    try:
        parsed = urlsplit(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_provider(provider: Provider) -> ValidationResult:
    result = ValidationResult()

    name = provider.name.strip()
    if not name:
        result.add("name", "Provider name is required")
    elif len(name) > MAX_PROVIDER_NAME_LENGTH:
        result.add(
            "name",
            f"Provider name exceeds {MAX_PROVIDER_NAME_LENGTH} characters",
        )

    # Absent endpoints are fine; present ones must parse.
    openai = provider.endpoints.openai
    if openai and not is_valid_url(openai):
        result.add("endpoints.openai", "Invalid OpenAI endpoint URL")

    anthropic = provider.endpoints.anthropic
    if anthropic and not is_valid_url(anthropic):
        result.add("endpoints.anthropic", "Invalid Anthropic endpoint URL")

    return result


def validate_model(model: Model) -> Tuple[Model, ValidationResult]:
    """Validate *model*; returns ``(amended_copy, result)``.

    The input is left untouched. The copy has its name auto-filled from
    the id when the name is blank.
    """
    result = ValidationResult()
    amended = model.model_copy(deep=True)

    model_id = amended.id.strip()
    if not model_id:
        result.add("id", "Model ID is required")
    elif len(model_id) > MAX_MODEL_ID_LENGTH:
        result.add(
            "id",
            f"Model ID exceeds {MAX_MODEL_ID_LENGTH} characters",
        )

    if not amended.name.strip() and model_id:
        amended.name = format_model_name(model_id)

    if len(amended.name) > MAX_MODEL_NAME_LENGTH:
        result.add(
            "name",
            f"Model name exceeds {MAX_MODEL_NAME_LENGTH} characters",
        )

    pricing = amended.pricing
    if pricing.input < 0:
        result.add("pricing.input", "Input pricing cannot be negative")
    if pricing.output < 0:
        result.add("pricing.output", "Output pricing cannot be negative")
    if pricing.cached is not None and pricing.cached < 0:
        result.add("pricing.cached", "Cached pricing cannot be negative")

    context = amended.context
    if context.max_input <= 0:
        result.add("context.maxInput", "Max input context must be positive")
    if context.max_output is not None and context.max_output <= 0:
        result.add(
            "context.maxOutput",
            "Max output context must be positive if specified",
        )

    return amended, result
