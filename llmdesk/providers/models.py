# -*- coding: utf-8 -*-
"""Pydantic data models for providers, models and the export envelope.

Attributes are snake_case; the JSON documents use the camelCase names
(``apiKeys``, ``maxInput`` ...), so dump with ``by_alias=True``.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, Field


class _WireModel(BaseModel):
    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def _none_as_empty(value):
    return [] if value is None else value


T = TypeVar("T")

# Older documents serialise empty lists as null.
NullableList = Annotated[List[T], BeforeValidator(_none_as_empty)]


class Pricing(_WireModel):
    """Cost per million tokens."""

    input: float = 0.0
    output: float = 0.0
    cached: Optional[float] = None
    currency: str = "USD"


class Limit(_WireModel):
    """Rate limit: ``limit`` requests or tokens per ``window`` seconds."""

    type: str = Field(default="requests", description="requests or tokens")
    limit: int = 0
    window: int = 0


class Context(_WireModel):
    max_input: int = Field(default=0, alias="maxInput")
    max_output: Optional[int] = Field(default=None, alias="maxOutput")


class ModelFeatures(_WireModel):
    tool_calling: Optional[bool] = Field(default=None, alias="toolCalling")
    reasoning: Optional[bool] = None
    search: Optional[bool] = None
    code_execution: Optional[bool] = Field(
        default=None,
        alias="codeExecution",
    )
    vision: Optional[bool] = None


class ProviderFeatures(_WireModel):
    streaming: Optional[bool] = None
    tool_calling: Optional[bool] = Field(default=None, alias="toolCalling")
    json_mode: Optional[bool] = Field(default=None, alias="jsonMode")


class Endpoints(_WireModel):
    openai: str = Field(default="", description="OpenAI-compatible base URL")
    anthropic: Optional[str] = Field(
        default=None,
        description="Anthropic-compatible base URL",
    )


class Credentials(_WireModel):
    """API keys. Always ``[]`` in providers.json; see ``ProviderStore``."""

    api_keys: NullableList[str] = Field(
        default_factory=list,
        alias="apiKeys",
    )


class Model(_WireModel):
    """A single model offered by a provider."""

    id: str = Field(
        default="",
        description="Model identifier used in API calls",
    )
    name: str = Field(default="", description="Human-readable model name")
    enabled: bool = True
    parameters: Optional[str] = None
    pricing: Pricing = Field(default_factory=Pricing)
    context: Context = Field(default_factory=Context)
    modalities: NullableList[str] = Field(default_factory=list)
    features: Optional[ModelFeatures] = None
    limits: Optional[List[Limit]] = None


class Provider(_WireModel):
    """A configured LLM vendor: endpoints, credentials and models."""

    id: str = Field(default="", description="Stable, unique provider id")
    name: str = ""
    enabled: bool = True
    credentials: Credentials = Field(default_factory=Credentials)
    endpoints: Endpoints = Field(default_factory=Endpoints)
    limits: NullableList[Limit] = Field(default_factory=list)
    features: ProviderFeatures = Field(default_factory=ProviderFeatures)
    models: NullableList[Model] = Field(default_factory=list)
    is_custom: bool = Field(default=False, alias="isCustom")


class Metadata(_WireModel):
    created_at: str = Field(default="", alias="createdAt")
    modified_at: str = Field(default="", alias="modifiedAt")
    generator: str = ""
    description: Optional[str] = None


class LLMDeskData(_WireModel):
    """Export / import envelope."""

    version: str = ""
    metadata: Metadata = Field(default_factory=Metadata)
    providers: NullableList[Provider] = Field(default_factory=list)


ImportMode = Literal["replace", "merge"]
IMPORT_MODES = ("replace", "merge")


class ImportedCounts(_WireModel):
    providers: int = 0
    models: int = 0


class ImportResult(_WireModel):
    """Outcome of an import; counts refer to the imported document."""

    success: bool = False
    message: str = ""
    warnings: List[str] = Field(default_factory=list)
    imported: ImportedCounts = Field(default_factory=ImportedCounts)


class FetchedModel(_WireModel):
    """A model entry as returned by a provider's ``/models`` endpoint."""

    id: str
    name: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    owned_by: Optional[str] = None


class FetchModelsResult(_WireModel):
    models: List[FetchedModel] = Field(default_factory=list)
    error: Optional[str] = None
