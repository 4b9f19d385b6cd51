# -*- coding: utf-8 -*-
"""CLI commands for inspecting providers and managing their API keys."""
from __future__ import annotations

import click

from ..providers import LLMDeskError, ProviderService
from .utils import fail, get_store, mask_api_key


@click.group("providers")
def providers_group() -> None:
    """Manage LLM providers and their credentials."""


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@providers_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show all providers, their endpoints, keys (masked) and models."""
    try:
        providers = get_store(ctx).load()
    except LLMDeskError as exc:
        fail(str(exc))

    if not providers:
        click.echo("No providers configured.")
        return

    click.echo("\n=== Providers ===")
    for p in providers:
        state = "enabled" if p.enabled else "disabled"
        click.echo(f"\n{'─' * 44}")
        click.echo(f"  {p.name} ({p.id}) [{state}]")
        click.echo(f"{'─' * 44}")
        click.echo(f"  {'openai':16s}: {p.endpoints.openai or '(not set)'}")
        if p.endpoints.anthropic:
            click.echo(f"  {'anthropic':16s}: {p.endpoints.anthropic}")
        keys = ", ".join(mask_api_key(k) for k in p.credentials.api_keys)
        click.echo(f"  {'api_keys':16s}: {keys or '(not set)'}")
        click.echo(f"  {'models':16s}: {len(p.models)}")
        for m in p.models:
            click.echo(f"    - {m.name} ({m.id})")
    click.echo()


# ---------------------------------------------------------------------------
# set-keys
# ---------------------------------------------------------------------------


@providers_group.command("set-keys")
@click.argument("provider_id")
@click.pass_context
def set_keys_cmd(ctx: click.Context, provider_id: str) -> None:
    """Replace a provider's API keys (comma separated, empty to remove)."""
    raw = click.prompt(
        "API keys",
        default="",
        hide_input=True,
        show_default=False,
    )
    keys = [k.strip() for k in raw.split(",") if k.strip()]

    try:
        ProviderService(get_store(ctx)).update_credentials(provider_id, keys)
    except LLMDeskError as exc:
        fail(str(exc))

    if keys:
        masked = ", ".join(mask_api_key(k) for k in keys)
        click.echo(f"✓ {provider_id}: API keys: {masked}")
    else:
        click.echo(f"✓ {provider_id}: API keys removed")


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


@providers_group.command("delete")
@click.argument("provider_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_cmd(ctx: click.Context, provider_id: str, yes: bool) -> None:
    """Delete a provider and its stored API keys."""
    if not yes and not click.confirm(f"Delete provider {provider_id}?"):
        return
    try:
        ProviderService(get_store(ctx)).delete_provider(provider_id)
    except LLMDeskError as exc:
        fail(str(exc))
    click.echo(f"✓ Deleted {provider_id}")
