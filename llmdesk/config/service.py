# -*- coding: utf-8 -*-
"""In-memory view of settings.json with write-through setters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..providers.errors import LLMDeskError
from .config import DEFAULT_THEME, AppSettings

if TYPE_CHECKING:
    from ..providers.store import ProviderStore

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, store: "ProviderStore"):
        self.store = store
        self.settings = AppSettings()

        try:
            loaded = store.load_settings()
        except (OSError, LLMDeskError) as exc:
            logger.warning("Using default settings: %s", exc)
            loaded = None
        if loaded is not None:
            self.settings = loaded

    def get_settings(self) -> AppSettings:
        return self.settings.model_copy()

    def get_theme(self) -> str:
        return self.settings.theme or DEFAULT_THEME

    def set_theme(self, theme: str) -> None:
        """Persist *theme*; anything but light/dark becomes dark."""
        if theme not in ("light", "dark"):
            theme = DEFAULT_THEME
        self.settings.theme = theme
        self.store.save_settings(self.settings)

    def set_follow_system_theme(self, enabled: bool) -> None:
        self.settings.follow_system_theme = enabled
        self.store.save_settings(self.settings)

    def get_crash_reporting(self) -> bool:
        return self.settings.enable_crash_reporting

    def set_crash_reporting(self, enabled: bool) -> None:
        self.settings.enable_crash_reporting = enabled
        self.store.save_settings(self.settings)
