# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("LLMDESK_WORKING_DIR", "~/.llmdesk"))
    .expanduser()
    .resolve()
)

PROVIDERS_FILE = os.environ.get("LLMDESK_PROVIDERS_FILE", "providers.json")

SETTINGS_FILE = os.environ.get("LLMDESK_SETTINGS_FILE", "settings.json")

LOG_DIR = WORKING_DIR / "logs"

# Env key for app log level (used by CLI and app).
LOG_LEVEL_ENV = "LLMDESK_LOG_LEVEL"

# When True, expose /docs, /redoc, /openapi.json
# (dev only; keep False in prod).
DOCS_ENABLED = os.environ.get("LLMDESK_OPENAPI_DOCS", "false").lower() in (
    "true",
    "1",
    "yes",
)

# ---------------------------------------------------------------------------
# OS secret store namespace: service name + "provider_<id>" per provider.
# ---------------------------------------------------------------------------
KEYRING_SERVICE = "llm-desk"
KEYRING_USER_PREFIX = "provider_"

# ---------------------------------------------------------------------------
# Export envelope
# ---------------------------------------------------------------------------
SCHEMA_VERSION = "1.0.0"
EXPORT_GENERATOR = "llm-desk"
EXPORT_DESCRIPTION = "LLM Desk configuration export"

FETCH_TIMEOUT = float(os.environ.get("LLMDESK_FETCH_TIMEOUT", "30"))
