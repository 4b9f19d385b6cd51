# -*- coding: utf-8 -*-
"""Provider management: models, secure store, import/export."""

from .errors import (
    CryptoError,
    DocumentError,
    LLMDeskError,
    NotFoundError,
    SecretStoreError,
    UsageError,
    ValidationFailedError,
)
from .models import (
    IMPORT_MODES,
    Context,
    Credentials,
    Endpoints,
    FetchedModel,
    FetchModelsResult,
    ImportMode,
    ImportResult,
    Limit,
    LLMDeskData,
    Metadata,
    Model,
    ModelFeatures,
    Pricing,
    Provider,
    ProviderFeatures,
)
from .secrets import KeyringSecretStore, SecretStore
from .service import ProviderService, generate_provider_id
from .store import ProviderStore
from .validation import (
    FieldError,
    ValidationResult,
    format_model_name,
    validate_model,
    validate_provider,
)

__all__ = [
    # errors
    "CryptoError",
    "DocumentError",
    "LLMDeskError",
    "NotFoundError",
    "SecretStoreError",
    "UsageError",
    "ValidationFailedError",
    # models
    "IMPORT_MODES",
    "Context",
    "Credentials",
    "Endpoints",
    "FetchedModel",
    "FetchModelsResult",
    "ImportMode",
    "ImportResult",
    "Limit",
    "LLMDeskData",
    "Metadata",
    "Model",
    "ModelFeatures",
    "Pricing",
    "Provider",
    "ProviderFeatures",
    # secrets
    "KeyringSecretStore",
    "SecretStore",
    # store / service
    "ProviderService",
    "ProviderStore",
    "generate_provider_id",
    # validation
    "FieldError",
    "ValidationResult",
    "format_model_name",
    "validate_model",
    "validate_provider",
]
