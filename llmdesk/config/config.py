# -*- coding: utf-8 -*-
from typing import Literal

from pydantic import BaseModel, Field

Theme = Literal["light", "dark"]
DEFAULT_THEME: Theme = "dark"


class AppSettings(BaseModel):
    """User preferences (settings.json)."""

    model_config = {"populate_by_name": True}

    theme: Theme = DEFAULT_THEME
    follow_system_theme: bool = Field(
        default=False,
        alias="followSystemTheme",
    )
    enable_crash_reporting: bool = Field(
        default=True,
        alias="enableCrashReporting",
    )
