# -*- coding: utf-8 -*-
from fastapi import APIRouter

from .data import router as data_router
from .providers import router as providers_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(providers_router)
router.include_router(data_router)
router.include_router(settings_router)

__all__ = ["router"]
