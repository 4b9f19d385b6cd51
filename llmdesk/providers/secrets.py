# -*- coding: utf-8 -*-
"""API key storage in the OS-native secret manager (via ``keyring``).

Each provider's keys are stored as one JSON list under
``(KEYRING_SERVICE, "provider_<id>")``.
"""

from __future__ import annotations

import json
import logging
from typing import List, Protocol, Sequence, runtime_checkable

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from ..constant import KEYRING_SERVICE, KEYRING_USER_PREFIX
from .errors import SecretStoreError, UsageError

logger = logging.getLogger(__name__)


@runtime_checkable
class SecretStore(Protocol):
    """Key/value capability for provider credentials."""

    def set_keys(self, provider_id: str, keys: Sequence[str]) -> None:
        ...

    def get_keys(self, provider_id: str) -> List[str]:
        ...

    def delete_keys(self, provider_id: str) -> None:
        ...


class KeyringSecretStore:
    """:class:`SecretStore` backed by the ``keyring`` package."""

    def __init__(
        self,
        service: str = KEYRING_SERVICE,
        user_prefix: str = KEYRING_USER_PREFIX,
    ):
        self.service = service
        self.user_prefix = user_prefix

    def _username(self, provider_id: str) -> str:
        if not provider_id:
            raise UsageError("provider ID cannot be empty")
        return self.user_prefix + provider_id

    def set_keys(self, provider_id: str, keys: Sequence[str]) -> None:
        """Overwrite the stored keys for *provider_id*."""
        user = self._username(provider_id)
        payload = json.dumps(list(keys))
        try:
            keyring.set_password(self.service, user, payload)
        except KeyringError as exc:
            raise SecretStoreError(
                f"failed to set keys in keyring for {provider_id}: {exc}",
            ) from exc
        logger.debug("Stored keys in keyring for provider %s", provider_id)

    def get_keys(self, provider_id: str) -> List[str]:
        """Return the stored keys, or ``[]`` when nothing is stored."""
        user = self._username(provider_id)
        try:
            payload = keyring.get_password(self.service, user)
        except KeyringError as exc:
            raise SecretStoreError(
                f"failed to get keys from keyring for {provider_id}: {exc}",
            ) from exc
        if payload is None:
            return []

        try:
            keys = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise SecretStoreError(
                f"malformed keyring entry for {provider_id}",
            ) from exc
        if not isinstance(keys, list) or not all(
            isinstance(k, str) for k in keys
        ):
            raise SecretStoreError(
                f"malformed keyring entry for {provider_id}",
            )
        return keys

    def delete_keys(self, provider_id: str) -> None:
        """Remove stored keys; a missing entry is not an error."""
        user = self._username(provider_id)
        try:
            keyring.delete_password(self.service, user)
        except PasswordDeleteError:
            return
        except KeyringError as exc:
            raise SecretStoreError(
                f"failed to delete keys from keyring for {provider_id}: "
                f"{exc}",
            ) from exc
        logger.debug("Deleted keys from keyring for provider %s", provider_id)
