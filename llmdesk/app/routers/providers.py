# -*- coding: utf-8 -*-
"""API routes for LLM providers and their models."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Request
from pydantic import BaseModel, Field

from ...providers import (
    FetchedModel,
    FetchModelsResult,
    Model,
    NotFoundError,
    Provider,
    ProviderService,
    UsageError,
    ValidationFailedError,
)
from ...providers.fetcher import ModelFetcher, transform_fetched_model

router = APIRouter(prefix="/providers", tags=["providers"])


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CredentialsRequest(BaseModel):
    """Request body for replacing a provider's API keys."""

    api_keys: List[str] = Field(
        default_factory=list,
        alias="apiKeys",
        description="API keys; an empty list removes stored keys",
    )

    model_config = {"populate_by_name": True}


class FetchModelsRequest(BaseModel):
    """Request body for listing a provider's remote models."""

    base_url: str = Field(..., alias="baseUrl")
    api_key: str = Field(default="", alias="apiKey")
    anthropic_url: Optional[str] = Field(default=None, alias="anthropicUrl")

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_service(request: Request) -> ProviderService:
    return request.app.state.provider_service


def get_fetcher(request: Request) -> ModelFetcher:
    return request.app.state.fetcher


def _to_http(exc: Exception) -> HTTPException:
    """Map service errors onto HTTP status codes."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ValidationFailedError):
        return HTTPException(
            status_code=422,
            detail=[e.model_dump() for e in exc.result.errors],
        )
    return HTTPException(status_code=400, detail=str(exc))


_SERVICE_ERRORS = (NotFoundError, UsageError, ValidationFailedError)


# ---------------------------------------------------------------------------
# Endpoints: provider CRUD
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=List[Provider],
    response_model_by_alias=True,
    summary="List all providers",
)
async def list_all_providers(
    service: ProviderService = Depends(get_service),
) -> List[Provider]:
    return service.get_all_providers()


@router.get(
    "/{provider_id}",
    response_model=Provider,
    response_model_by_alias=True,
    summary="Get a provider",
)
async def get_provider(
    provider_id: str = Path(..., description="Provider identifier"),
    service: ProviderService = Depends(get_service),
) -> Provider:
    try:
        return service.get_provider(provider_id)
    except _SERVICE_ERRORS as exc:
        raise _to_http(exc) from exc


@router.post(
    "",
    response_model=Provider,
    response_model_by_alias=True,
    status_code=201,
    summary="Create a custom provider",
)
async def create_provider(
    body: Provider = Body(..., description="Provider to create"),
    service: ProviderService = Depends(get_service),
) -> Provider:
    try:
        return service.create_provider(body)
    except _SERVICE_ERRORS as exc:
        raise _to_http(exc) from exc


@router.put(
    "/{provider_id}",
    response_model=Provider,
    response_model_by_alias=True,
    summary="Update a provider",
    description="Replace a provider's record. Models are kept unless "
    "keep_models is false.",
)
async def update_provider(
    provider_id: str = Path(..., description="Provider identifier"),
    body: Provider = Body(..., description="New provider record"),
    keep_models: bool = True,
    service: ProviderService = Depends(get_service),
) -> Provider:
    try:
        return service.update_provider(
            provider_id,
            body,
            keep_models=keep_models,
        )
    except _SERVICE_ERRORS as exc:
        raise _to_http(exc) from exc


@router.delete(
    "/{provider_id}",
    status_code=204,
    summary="Delete a provider and its stored keys",
)
async def delete_provider(
    provider_id: str = Path(..., description="Provider identifier"),
    service: ProviderService = Depends(get_service),
) -> None:
    try:
        service.delete_provider(provider_id)
    except _SERVICE_ERRORS as exc:
        raise _to_http(exc) from exc


@router.put(
    "/{provider_id}/credentials",
    status_code=204,
    summary="Replace a provider's API keys",
)
async def update_credentials(
    provider_id: str = Path(..., description="Provider identifier"),
    body: CredentialsRequest = Body(...),
    service: ProviderService = Depends(get_service),
) -> None:
    try:
        service.update_credentials(provider_id, body.api_keys)
    except _SERVICE_ERRORS as exc:
        raise _to_http(exc) from exc


# ---------------------------------------------------------------------------
# Endpoints: models
# ---------------------------------------------------------------------------


@router.post(
    "/{provider_id}/models",
    response_model=Model,
    response_model_by_alias=True,
    status_code=201,
    summary="Add a model to a provider",
)
async def add_model(
    provider_id: str = Path(..., description="Provider identifier"),
    body: Model = Body(...),
    service: ProviderService = Depends(get_service),
) -> Model:
    try:
        return service.add_model(provider_id, body)
    except _SERVICE_ERRORS as exc:
        raise _to_http(exc) from exc


@router.put(
    "/{provider_id}/models/{model_id:path}",
    response_model=Model,
    response_model_by_alias=True,
    summary="Update a model",
)
async def update_model(
    provider_id: str = Path(..., description="Provider identifier"),
    model_id: str = Path(..., description="Model identifier"),
    body: Model = Body(...),
    service: ProviderService = Depends(get_service),
) -> Model:
    try:
        return service.update_model(provider_id, model_id, body)
    except _SERVICE_ERRORS as exc:
        raise _to_http(exc) from exc


@router.delete(
    "/{provider_id}/models/{model_id:path}",
    status_code=204,
    summary="Delete a model",
)
async def delete_model(
    provider_id: str = Path(..., description="Provider identifier"),
    model_id: str = Path(..., description="Model identifier"),
    service: ProviderService = Depends(get_service),
) -> None:
    try:
        service.delete_model(provider_id, model_id)
    except _SERVICE_ERRORS as exc:
        raise _to_http(exc) from exc


# ---------------------------------------------------------------------------
# Endpoints: remote model listing
# ---------------------------------------------------------------------------


@router.post(
    "/fetch-models",
    response_model=FetchModelsResult,
    summary="List models offered by an endpoint",
)
def fetch_models(
    body: FetchModelsRequest = Body(...),
    fetcher: ModelFetcher = Depends(get_fetcher),
) -> FetchModelsResult:
    return fetcher.fetch_models(
        body.base_url,
        body.api_key,
        body.anthropic_url,
    )


@router.post(
    "/transform-model",
    response_model=Model,
    response_model_by_alias=True,
    summary="Turn a fetched model entry into a model record",
)
async def transform_model(body: FetchedModel = Body(...)) -> Model:
    return transform_fetched_model(body)
