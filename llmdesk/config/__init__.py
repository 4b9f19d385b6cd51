# -*- coding: utf-8 -*-
from .config import AppSettings, Theme
from .service import SettingsService

__all__ = [
    "AppSettings",
    "SettingsService",
    "Theme",
]
