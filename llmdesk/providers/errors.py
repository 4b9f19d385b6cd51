# -*- coding: utf-8 -*-
"""Exception types raised by the provider storage layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validation import ValidationResult


class LLMDeskError(Exception):
    """Base class for all llmdesk errors."""


class UsageError(LLMDeskError, ValueError):
    """Caller passed an unusable argument (empty id, unknown mode...)."""


class NotFoundError(LLMDeskError, LookupError):
    """A provider or model id does not exist."""


class ValidationFailedError(LLMDeskError):
    """A record was rejected by the validators; nothing was written."""

    def __init__(self, result: "ValidationResult"):
        super().__init__(result.message())
        self.result = result


class CryptoError(LLMDeskError):
    """Encrypted payload could not be opened.

    The message is always the same so callers cannot tell a wrong
    passphrase from a corrupted blob.
    """

    def __init__(self) -> None:
        super().__init__("decryption failed")


class SecretStoreError(LLMDeskError):
    """The OS secret store refused or failed an operation."""


class DocumentError(LLMDeskError):
    """A JSON document on disk could not be parsed."""
