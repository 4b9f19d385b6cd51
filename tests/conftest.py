"""Shared fixtures: in-memory secret stores and a store on tmp_path."""

import json
from typing import Dict, List, Sequence

import pytest

from llmdesk.providers import (
    Credentials,
    Endpoints,
    Model,
    Provider,
    ProviderStore,
    SecretStoreError,
    UsageError,
)
from llmdesk.providers.models import Context, Pricing


class MemorySecretStore:
    """Dict-backed stand-in for the OS keyring."""

    def __init__(self):
        self.data: Dict[str, List[str]] = {}
        self.set_calls = 0

    def set_keys(self, provider_id: str, keys: Sequence[str]) -> None:
        if not provider_id:
            raise UsageError("provider ID cannot be empty")
        self.set_calls += 1
        self.data[provider_id] = list(keys)

    def get_keys(self, provider_id: str) -> List[str]:
        if not provider_id:
            raise UsageError("provider ID cannot be empty")
        return list(self.data.get(provider_id, []))

    def delete_keys(self, provider_id: str) -> None:
        if not provider_id:
            raise UsageError("provider ID cannot be empty")
        self.data.pop(provider_id, None)


class FailingSecretStore(MemorySecretStore):
    """Raises SecretStoreError for the provider ids listed in ``fail_ids``."""

    def __init__(self, fail_ids=(), fail_get=False, fail_delete=False):
        super().__init__()
        self.fail_ids = set(fail_ids)
        self.fail_get = fail_get
        self.fail_delete = fail_delete

    def set_keys(self, provider_id, keys):
        if provider_id in self.fail_ids:
            raise SecretStoreError(f"keyring locked for {provider_id}")
        super().set_keys(provider_id, keys)

    def get_keys(self, provider_id):
        if self.fail_get and provider_id in self.fail_ids:
            raise SecretStoreError(f"keyring locked for {provider_id}")
        return super().get_keys(provider_id)

    def delete_keys(self, provider_id):
        if self.fail_delete:
            raise SecretStoreError("keyring locked")
        super().delete_keys(provider_id)


def make_model(model_id="gpt-4o", name="GPT-4o", **kwargs):
    return Model(
        id=model_id,
        name=name,
        pricing=kwargs.pop("pricing", Pricing(input=2.5, output=10)),
        context=kwargs.pop("context", Context(max_input=128000)),
        modalities=kwargs.pop("modalities", ["text"]),
        **kwargs,
    )


def make_provider(provider_id="openai", name="OpenAI", keys=(), **kwargs):
    return Provider(
        id=provider_id,
        name=name,
        credentials=Credentials(api_keys=list(keys)),
        endpoints=kwargs.pop(
            "endpoints",
            Endpoints(openai="https://api.openai.com/v1"),
        ),
        models=kwargs.pop("models", [make_model()]),
        **kwargs,
    )


@pytest.fixture
def secrets():
    return MemorySecretStore()


@pytest.fixture
def store(tmp_path, secrets):
    return ProviderStore(data_dir=tmp_path, secrets=secrets)


@pytest.fixture
def write_document(tmp_path):
    """Factory fixture: write a raw providers.json into tmp_path."""
    def _write(records):
        path = tmp_path / "providers.json"
        path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        return path
    return _write
