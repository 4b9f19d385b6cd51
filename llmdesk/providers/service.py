# -*- coding: utf-8 -*-
"""Provider and model CRUD on top of :class:`ProviderStore`.

Every mutator follows load -> modify -> save. Records are validated
before loading, so rejected input never reaches the store.
"""

from __future__ import annotations

import re
import time
from typing import List, Sequence

from .errors import NotFoundError, UsageError
from .models import Model, Provider
from .store import ProviderStore
from .validation import validate_model, validate_provider

_SLUG_RE = re.compile(r"[^a-z0-9]+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_provider_id(name: str) -> str:
    """``"My Provider"`` -> ``"my-provider-<base36 timestamp>"``."""
    base = _SLUG_RE.sub("-", name.lower()).strip("-")
    return f"{base}-{_base36(time.time_ns())}"


def _find_provider(providers: List[Provider], provider_id: str) -> int:
    for i, p in enumerate(providers):
        if p.id == provider_id:
            return i
    raise NotFoundError(f"provider not found: {provider_id}")


def _find_model(provider: Provider, model_id: str) -> int:
    for i, m in enumerate(provider.models):
        if m.id == model_id:
            return i
    raise NotFoundError(f"model not found: {model_id}")


class ProviderService:
    def __init__(self, store: ProviderStore):
        self.store = store

    # -- providers ---------------------------------------------------------

    def get_all_providers(self) -> List[Provider]:
        return self.store.load()

    def get_provider(self, provider_id: str) -> Provider:
        providers = self.store.load()
        return providers[_find_provider(providers, provider_id)]

    def create_provider(self, provider: Provider) -> Provider:
        """Validate and append a new custom provider.

        A missing id is generated from the name. Returns the stored record.
        """
        validate_provider(provider).raise_for_errors()

        providers = self.store.load()
        new = provider.model_copy(deep=True)
        if not new.id:
            new.id = generate_provider_id(new.name)
        if any(p.id == new.id for p in providers):
            raise UsageError(f"provider already exists: {new.id}")
        new.is_custom = True

        providers.append(new)
        self.store.save(providers)
        return new

    def update_provider(
        self,
        provider_id: str,
        updates: Provider,
        *,
        keep_models: bool = False,
    ) -> Provider:
        """Replace a provider's record, keeping its id.

        With *keep_models* the stored model list survives the update.
        """
        validate_provider(updates).raise_for_errors()

        providers = self.store.load()
        index = _find_provider(providers, provider_id)

        new = updates.model_copy(deep=True)
        new.id = provider_id
        if keep_models:
            new.models = providers[index].models
        providers[index] = new
        self.store.save(providers)
        return new

    def delete_provider(self, provider_id: str) -> None:
        providers = self.store.load()
        del providers[_find_provider(providers, provider_id)]
        self.store.save(providers)

    def update_credentials(
        self,
        provider_id: str,
        keys: Sequence[str],
    ) -> None:
        """Replace a provider's API keys; an empty list removes them."""
        providers = self.store.load()
        index = _find_provider(providers, provider_id)
        providers[index].credentials.api_keys = list(keys)
        if not keys:
            self.store.delete_keys(provider_id)
        self.store.save(providers)

    def save_providers(self, providers: Sequence[Provider]) -> None:
        self.store.save(providers)

    def clear_all_data(self) -> None:
        self.store.clear()

    # -- models ------------------------------------------------------------

    def add_model(self, provider_id: str, model: Model) -> Model:
        """Validate *model* (auto-filling its name) and add it."""
        model, result = validate_model(model)
        result.raise_for_errors()

        providers = self.store.load()
        provider = providers[_find_provider(providers, provider_id)]
        if any(m.id == model.id for m in provider.models):
            raise UsageError(f"model already exists: {model.id}")

        provider.models.append(model)
        self.store.save(providers)
        return model

    def update_model(
        self,
        provider_id: str,
        model_id: str,
        updates: Model,
    ) -> Model:
        model, result = validate_model(updates)
        result.raise_for_errors()

        providers = self.store.load()
        provider = providers[_find_provider(providers, provider_id)]
        index = _find_model(provider, model_id)

        model.id = model_id
        provider.models[index] = model
        self.store.save(providers)
        return model

    def delete_model(self, provider_id: str, model_id: str) -> None:
        providers = self.store.load()
        provider = providers[_find_provider(providers, provider_id)]
        del provider.models[_find_model(provider, model_id)]
        self.store.save(providers)
