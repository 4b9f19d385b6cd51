# -*- coding: utf-8 -*-
"""API routes for backup export/import and wiping stored data."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Request
from pydantic import BaseModel, Field

from ...providers import ImportResult, LLMDeskData, ProviderStore
from ...providers.transfer import build_export, import_data

router = APIRouter(prefix="/data", tags=["data"])


class ImportRequest(BaseModel):
    mode: str = Field(default="merge", description="replace or merge")
    data: LLMDeskData


class DataDirInfo(BaseModel):
    data_dir: str = Field(..., alias="dataDir")

    model_config = {"populate_by_name": True}


def get_store(request: Request) -> ProviderStore:
    return request.app.state.store


@router.get(
    "/export",
    response_model=LLMDeskData,
    summary="Export all providers",
    description="Return the catalogue, API keys included, wrapped in the "
    "export envelope.",
)
async def export_data(
    store: ProviderStore = Depends(get_store),
) -> LLMDeskData:
    return build_export(store.load())


@router.post(
    "/import",
    response_model=ImportResult,
    summary="Import providers",
    description="Apply an export document in replace or merge mode. "
    "Invalid modes are reported with success=false.",
)
async def import_document(
    body: ImportRequest = Body(...),
    store: ProviderStore = Depends(get_store),
) -> ImportResult:
    return import_data(store, body.data, body.mode)


@router.delete(
    "",
    status_code=204,
    summary="Delete all providers and their stored keys",
)
async def clear_all(store: ProviderStore = Depends(get_store)) -> None:
    store.clear()


@router.get("/dir", response_model=DataDirInfo, summary="Data directory")
async def get_data_dir(
    store: ProviderStore = Depends(get_store),
) -> DataDirInfo:
    return DataDirInfo(data_dir=str(store.data_dir))
