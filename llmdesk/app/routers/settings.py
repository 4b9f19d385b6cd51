# -*- coding: utf-8 -*-
"""API routes for user preferences."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Request
from pydantic import BaseModel

from ...config import AppSettings, SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


class ThemeRequest(BaseModel):
    theme: str


class ToggleRequest(BaseModel):
    enabled: bool


def get_settings_service(request: Request) -> SettingsService:
    return request.app.state.settings_service


@router.get("", response_model=AppSettings, summary="Get settings")
async def get_settings(
    service: SettingsService = Depends(get_settings_service),
) -> AppSettings:
    return service.get_settings()


@router.put(
    "/theme",
    response_model=AppSettings,
    summary="Set theme",
    description="Values other than light/dark fall back to dark.",
)
async def set_theme(
    body: ThemeRequest = Body(...),
    service: SettingsService = Depends(get_settings_service),
) -> AppSettings:
    service.set_theme(body.theme)
    return service.get_settings()


@router.put(
    "/follow-system-theme",
    response_model=AppSettings,
    summary="Follow the OS theme",
)
async def set_follow_system_theme(
    body: ToggleRequest = Body(...),
    service: SettingsService = Depends(get_settings_service),
) -> AppSettings:
    service.set_follow_system_theme(body.enabled)
    return service.get_settings()


@router.put(
    "/crash-reporting",
    response_model=AppSettings,
    summary="Enable or disable crash reporting",
)
async def set_crash_reporting(
    body: ToggleRequest = Body(...),
    service: SettingsService = Depends(get_settings_service),
) -> AppSettings:
    service.set_crash_reporting(body.enabled)
    return service.get_settings()
