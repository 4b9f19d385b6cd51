# -*- coding: utf-8 -*-
"""List the models a provider offers through its ``/models`` endpoint."""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from ..constant import FETCH_TIMEOUT
from .models import Context, FetchedModel, FetchModelsResult, Model, Pricing
from .validation import format_model_name

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MAX_INPUT = 128000

FETCH_FAILED_MESSAGE = (
    "Could not fetch models. This may be due to invalid credentials, "
    "or the endpoint not supporting model listing."
)


def _extract_models(body, *, allow_bare_list: bool) -> List[FetchedModel]:
    """Pull model entries out of ``{"data": [...]}``, ``{"models": [...]}``
    or (OpenAI-compatible only) a bare list.
    """
    items = None
    if isinstance(body, dict):
        items = body.get("data") or body.get("models")
    elif allow_bare_list and isinstance(body, list):
        items = body
    if not items:
        return []
    return [FetchedModel.model_validate(item) for item in items]


class ModelFetcher:
    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: float = FETCH_TIMEOUT,
    ):
        self.client = client or httpx.Client(timeout=timeout)

    def fetch_models(
        self,
        base_url: str,
        api_key: str,
        anthropic_url: Optional[str] = None,
    ) -> FetchModelsResult:
        """Try the OpenAI-style endpoint, then the Anthropic one.

        Never raises for network or HTTP errors; a failed lookup returns
        an empty list with ``error`` set.
        """
        attempts = [
            (
                base_url,
                {"Authorization": f"Bearer {api_key}"},
                True,
            ),
        ]
        if anthropic_url:
            attempts.append(
                (
                    anthropic_url,
                    {
                        "x-api-key": api_key,
                        "anthropic-version": ANTHROPIC_VERSION,
                    },
                    False,
                ),
            )

        for url, headers, allow_bare_list in attempts:
            if not url:
                continue
            try:
                resp = self.client.get(
                    url.rstrip("/") + "/models",
                    headers={**headers, "Content-Type": "application/json"},
                )
                resp.raise_for_status()
                models = _extract_models(
                    resp.json(),
                    allow_bare_list=allow_bare_list,
                )
            except (httpx.HTTPError, ValueError) as exc:
                logger.info("Model listing failed for %s: %s", url, exc)
                continue
            if models:
                return FetchModelsResult(models=models)

        return FetchModelsResult(models=[], error=FETCH_FAILED_MESSAGE)

    def close(self) -> None:
        self.client.close()


def transform_fetched_model(fetched: FetchedModel) -> Model:
    """Turn a listing entry into an enabled model with neutral defaults."""
    return Model(
        id=fetched.id,
        name=fetched.name or format_model_name(fetched.id),
        enabled=True,
        pricing=Pricing(input=0, output=0, currency="USD"),
        context=Context(max_input=DEFAULT_MAX_INPUT),
        modalities=["text"],
        limits=[],
    )
