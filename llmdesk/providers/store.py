# -*- coding: utf-8 -*-
"""Reading and writing provider configuration (providers.json).

API keys never stay in providers.json: ``save`` pushes them to the
secret store and writes a scrubbed copy, ``load`` injects them back.
Documents written by older versions that still carry plaintext keys are
migrated on the first ``load``.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set

from pydantic import ValidationError

from ..config.config import AppSettings
from ..constant import PROVIDERS_FILE, SETTINGS_FILE, WORKING_DIR
from .errors import DocumentError, LLMDeskError
from .models import Provider
from .secrets import KeyringSecretStore, SecretStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def _read_json(path: Path) -> Optional[Any]:
    """Return the parsed document, or ``None`` if the file is missing."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        return None
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path.name} is not valid JSON: {exc}") from exc


def _write_json(path: Path, data: Any) -> None:
    """Write *data* pretty-printed, replacing *path* in one step."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def _parse_providers(raw: Any) -> List[Provider]:
    if not isinstance(raw, list):
        raise DocumentError("providers document must be a JSON array")
    try:
        return [Provider.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise DocumentError(f"invalid provider record: {exc}") from exc


def _scrubbed(provider: Provider) -> dict:
    out = provider.to_wire()
    out["credentials"]["apiKeys"] = []
    return out


def _plaintext_keys(records: List[dict]) -> Dict[str, List[str]]:
    """Ids still carrying unmigrated keys in the raw document."""
    found = {}
    for item in records:
        creds = item.get("credentials")
        keys = creds.get("apiKeys") if isinstance(creds, dict) else None
        if isinstance(keys, list) and keys:
            found[item["id"]] = list(keys)
    return found


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ProviderStore:
    """Owns providers.json and settings.json for one working directory.

    Construct once at startup and pass it to the services that need it.
    ``secrets`` defaults to the OS keyring.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        secrets: Optional[SecretStore] = None,
    ):
        self.data_dir = Path(data_dir) if data_dir else WORKING_DIR
        self.secrets: SecretStore = (
            secrets if secrets is not None else KeyringSecretStore()
        )
        # Load may rewrite the document (migration), so it takes the
        # exclusive lock like save/clear.
        self._lock = threading.Lock()
        self._settings_lock = threading.Lock()

    @property
    def providers_path(self) -> Path:
        return self.data_dir / PROVIDERS_FILE

    @property
    def settings_path(self) -> Path:
        return self.data_dir / SETTINGS_FILE

    # -- providers ---------------------------------------------------------

    def load(self) -> List[Provider]:
        """Load providers with their API keys injected from the store.

        A missing file yields ``[]``. Plaintext keys found in the file are
        moved into the secret store and the file is rewritten scrubbed
        before returning. Secret-store failures for one provider degrade
        that provider's keys to ``[]``.
        """
        with self._lock:
            raw = _read_json(self.providers_path)
            if raw is None:
                return []
            providers = _parse_providers(raw)

            migrated = False
            unmigrated: Set[int] = set()
            for index, provider in enumerate(providers):
                if not provider.credentials.api_keys:
                    continue
                try:
                    self.secrets.set_keys(
                        provider.id,
                        provider.credentials.api_keys,
                    )
                    migrated = True
                except LLMDeskError as exc:
                    logger.warning(
                        "Could not migrate keys of provider %r: %s",
                        provider.id,
                        exc,
                    )
                    unmigrated.add(index)

            on_disk = []
            for index, provider in enumerate(providers):
                # Keep keys we failed to move, so they are not lost.
                if index in unmigrated:
                    on_disk.append(provider.to_wire())
                else:
                    on_disk.append(_scrubbed(provider))
                provider.credentials.api_keys = (
                    []
                    if index in unmigrated
                    else self._fetch_keys(provider.id)
                )

            if migrated:
                logger.info("Migrated plaintext API keys to secret store")
                try:
                    _write_json(self.providers_path, on_disk)
                except OSError as exc:
                    logger.error(
                        "Failed to rewrite %s after migration: %s",
                        self.providers_path,
                        exc,
                    )

            return providers

    def save(self, providers: Sequence[Provider]) -> None:
        """Persist *providers*; keys go to the secret store first.

        Any secret-store failure aborts before providers.json is touched.
        Ids that disappear from the collection lose their stored keys.
        Keys left in the file by a failed migration are retried for
        providers that arrive without keys, so they are never dropped.
        """
        with self._lock:
            records = self._read_records()
            previous_ids = {r["id"] for r in records}
            stranded = _plaintext_keys(records)

            out = []
            for provider in providers:
                keys = provider.credentials.api_keys or stranded.get(
                    provider.id,
                )
                if keys:
                    self.secrets.set_keys(provider.id, keys)
                out.append(_scrubbed(provider))

            _write_json(self.providers_path, out)

            current_ids = {p.id for p in providers}
            for pid in previous_ids - current_ids:
                self._forget(pid)

    def delete_keys(self, provider_id: str) -> None:
        """Drop the stored keys of one provider.

        Unmigrated keys still in providers.json for that id are scrubbed
        too.
        """
        with self._lock:
            self.secrets.delete_keys(provider_id)
            if provider_id not in _plaintext_keys(self._read_records()):
                return
            raw = _read_json(self.providers_path)
            for item in raw:
                if not isinstance(item, dict) or item.get("id") != provider_id:
                    continue
                if isinstance(item.get("credentials"), dict):
                    item["credentials"]["apiKeys"] = []
            _write_json(self.providers_path, raw)

    def clear(self) -> None:
        """Delete providers.json and every key it referenced."""
        with self._lock:
            for pid in {r["id"] for r in self._read_records()}:
                self._forget(pid)
            try:
                self.providers_path.unlink()
            except FileNotFoundError:
                pass

    # -- settings ----------------------------------------------------------

    def load_settings(self) -> Optional[AppSettings]:
        """Return saved settings, or ``None`` when none were saved yet."""
        with self._settings_lock:
            raw = _read_json(self.settings_path)
            if raw is None:
                return None
            try:
                return AppSettings.model_validate(raw)
            except ValidationError as exc:
                raise DocumentError(f"invalid settings: {exc}") from exc

    def save_settings(self, settings: AppSettings) -> None:
        with self._settings_lock:
            _write_json(
                self.settings_path,
                settings.model_dump(mode="json", by_alias=True),
            )

    # -- internal (caller holds self._lock) --------------------------------

    def _fetch_keys(self, provider_id: str) -> List[str]:
        try:
            return self.secrets.get_keys(provider_id)
        except LLMDeskError as exc:
            logger.warning(
                "Could not read keys of provider %r: %s",
                provider_id,
                exc,
            )
            return []

    def _read_records(self) -> List[dict]:
        """Best-effort raw records (with a string id) currently on disk."""
        try:
            raw = _read_json(self.providers_path)
        except (OSError, DocumentError) as exc:
            logger.debug("Cannot enumerate stored providers: %s", exc)
            return []
        if not isinstance(raw, list):
            return []
        return [
            item
            for item in raw
            if isinstance(item, dict) and isinstance(item.get("id"), str)
        ]

    def _forget(self, provider_id: str) -> None:
        if not provider_id:
            return
        try:
            self.secrets.delete_keys(provider_id)
        except LLMDeskError as exc:
            logger.debug(
                "Ignoring failure to delete keys of %r: %s",
                provider_id,
                exc,
            )
