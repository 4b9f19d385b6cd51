# -*- coding: utf-8 -*-
"""Export / import of the provider catalogue.

Exports are either plaintext JSON (``LLMDeskData``) or the same JSON
sealed with :mod:`.crypto`. Imports either replace the stored providers
or merge into them by provider id (last write wins per provider).
"""

from __future__ import annotations

import datetime
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Set, Union

from pydantic import ValidationError

from ..constant import EXPORT_DESCRIPTION, EXPORT_GENERATOR, SCHEMA_VERSION
from .crypto import decrypt, encrypt
from .errors import CryptoError, DocumentError, LLMDeskError, UsageError
from .models import (
    IMPORT_MODES,
    ImportedCounts,
    ImportResult,
    LLMDeskData,
    Metadata,
    Provider,
)
from .store import ProviderStore

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _now() -> str:
    return (
        datetime.datetime.now(datetime.timezone.utc)
        .replace(microsecond=0)
        .isoformat()
    )


def default_export_filename(today: Optional[datetime.date] = None) -> str:
    """``llm-desk-backup-YYYY-MM-DD.json``"""
    today = today or datetime.date.today()
    return f"llm-desk-backup-{today.isoformat()}.json"


def build_export(
    providers: Sequence[Provider],
    description: Optional[str] = EXPORT_DESCRIPTION,
) -> LLMDeskData:
    """Wrap *providers* in the export envelope."""
    now = _now()
    return LLMDeskData(
        version=SCHEMA_VERSION,
        metadata=Metadata(
            created_at=now,
            modified_at=now,
            generator=EXPORT_GENERATOR,
            description=description,
        ),
        providers=list(providers),
    )


def serialize_export(
    data: LLMDeskData,
    passphrase: Optional[str] = None,
) -> bytes:
    payload = json.dumps(data.to_wire(), ensure_ascii=False).encode("utf-8")
    if passphrase:
        return encrypt(payload, passphrase)
    return payload


def parse_export(
    payload: bytes,
    passphrase: Optional[str] = None,
) -> LLMDeskData:
    """Parse (and, with a passphrase, decrypt) an export payload.

    Raises:
        CryptoError: the payload could not be decrypted.
        DocumentError: the payload is not a valid export document.
    """
    if passphrase:
        payload = decrypt(payload, passphrase)
    try:
        return LLMDeskData.model_validate_json(payload)
    except ValidationError as exc:
        raise DocumentError(str(exc)) from exc


def export_to_file(
    store: ProviderStore,
    path: PathLike,
    passphrase: Optional[str] = None,
) -> bool:
    """Write the current catalogue to *path*.

    An empty *path* means the user cancelled the file picker; nothing is
    written and ``False`` is returned.
    """
    if not path:
        return False

    data = build_export(store.load())
    Path(path).write_bytes(serialize_export(data, passphrase))
    logger.info(
        "Exported %d providers to %s%s",
        len(data.providers),
        path,
        " (encrypted)" if passphrase else "",
    )
    return True


def read_import_file(
    path: PathLike,
    passphrase: Optional[str] = None,
) -> LLMDeskData:
    return parse_export(Path(path).read_bytes(), passphrase)


def merge_providers(
    current: Sequence[Provider],
    imported: Sequence[Provider],
    mode: str,
) -> List[Provider]:
    """Reconcile *imported* with *current* according to *mode*.

    ``replace``: the result is exactly *imported*.
    ``merge``: providers matched by id are overwritten whole, unmatched
    current providers are kept in place, new ones are appended.
    """
    if mode == "replace":
        return list(imported)
    if mode != "merge":
        raise UsageError(f"Invalid import mode: {mode}")

    result = list(current)
    index = {p.id: i for i, p in enumerate(result)}
    for provider in imported:
        if provider.id in index:
            result[index[provider.id]] = provider
        else:
            index[provider.id] = len(result)
            result.append(provider)
    return result


def _check_mode(mode: str) -> Optional[ImportResult]:
    if mode not in IMPORT_MODES:
        return ImportResult(
            success=False,
            message=f"Invalid import mode: {mode}",
        )
    return None


def import_data(
    store: ProviderStore,
    document: LLMDeskData,
    mode: str,
) -> ImportResult:
    """Apply *document* to *store* using *mode* (``replace``/``merge``)."""
    rejected = _check_mode(mode)
    if rejected is not None:
        return rejected

    warnings: List[str] = []
    if not document.version:
        warnings.append("No version specified in import file")

    counts = ImportedCounts(
        providers=len(document.providers),
        models=sum(len(p.models) for p in document.providers),
    )

    seen: Set[str] = set()
    for provider in document.providers:
        if provider.id in seen:
            return ImportResult(
                success=False,
                message=f"Duplicate provider id in import file: {provider.id}",
                warnings=warnings,
                imported=counts,
            )
        seen.add(provider.id)

    current = store.load() if mode == "merge" else []
    final = merge_providers(current, document.providers, mode)

    try:
        store.save(final)
    except LLMDeskError as exc:
        return ImportResult(
            success=False,
            message=f"Failed to save imported data: {exc}",
            warnings=warnings,
            imported=counts,
        )

    logger.info(
        "Imported %d providers / %d models (%s)",
        counts.providers,
        counts.models,
        mode,
    )
    return ImportResult(
        success=True,
        message="Successfully imported data",
        warnings=warnings,
        imported=counts,
    )


def import_from_file(
    store: ProviderStore,
    path: PathLike,
    mode: str,
    passphrase: Optional[str] = None,
) -> ImportResult:
    """Read an export file from *path* and apply it.

    An empty *path* (cancelled picker), an unknown mode, an undecryptable
    or unparsable file all give ``success=False`` results. Failing to read
    the file raises ``OSError``.
    """
    if not path:
        return ImportResult(success=False, message="Import cancelled")

    rejected = _check_mode(mode)
    if rejected is not None:
        return rejected

    try:
        document = read_import_file(path, passphrase)
    except CryptoError as exc:
        return ImportResult(success=False, message=str(exc))
    except DocumentError as exc:
        return ImportResult(
            success=False,
            message=f"Failed to parse import file: {exc}",
        )

    return import_data(store, document, mode)
