# -*- coding: utf-8 -*-
"""CLI commands for backups: export, import and wiping all data."""
from __future__ import annotations

from pathlib import Path

import click

from ..providers import IMPORT_MODES, LLMDeskError
from ..providers.transfer import export_to_file, import_from_file
from .utils import fail, get_store


def _prompt_passphrase(confirm: bool) -> str:
    passphrase = click.prompt(
        "Passphrase",
        hide_input=True,
        confirmation_prompt=confirm,
    )
    if not passphrase:
        fail("passphrase is required.")
    return passphrase


@click.group("data")
def data_group() -> None:
    """Export, import or clear the provider catalogue."""


@data_group.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--encrypt",
    is_flag=True,
    help="Encrypt the backup with a passphrase.",
)
@click.pass_context
def export_cmd(ctx: click.Context, path: Path, encrypt: bool) -> None:
    """Write all providers (API keys included) to PATH."""
    passphrase = _prompt_passphrase(confirm=True) if encrypt else None
    try:
        export_to_file(get_store(ctx), path, passphrase)
    except (OSError, LLMDeskError) as exc:
        fail(str(exc))
    click.echo(f"✓ Exported to {path}" + (" (encrypted)" if encrypt else ""))


@data_group.command("import")
@click.argument(
    "path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--mode",
    type=click.Choice(IMPORT_MODES),
    default="merge",
    show_default=True,
    help="replace: imported providers supersede all; "
    "merge: overwrite by id, keep the rest.",
)
@click.option(
    "--encrypted",
    is_flag=True,
    help="PATH is an encrypted backup.",
)
@click.pass_context
def import_cmd(
    ctx: click.Context,
    path: Path,
    mode: str,
    encrypted: bool,
) -> None:
    """Import providers from a backup at PATH."""
    passphrase = _prompt_passphrase(confirm=False) if encrypted else None
    try:
        result = import_from_file(get_store(ctx), path, mode, passphrase)
    except (OSError, LLMDeskError) as exc:
        fail(str(exc))

    for warning in result.warnings:
        click.echo(click.style(f"Warning: {warning}", fg="yellow"))
    if not result.success:
        fail(result.message)
    click.echo(
        f"✓ {result.message}: {result.imported.providers} providers, "
        f"{result.imported.models} models ({mode})",
    )


@data_group.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_cmd(ctx: click.Context, yes: bool) -> None:
    """Delete all providers and every stored API key."""
    if not yes and not click.confirm(
        "Delete all providers and their API keys?",
        default=False,
    ):
        return
    try:
        get_store(ctx).clear()
    except OSError as exc:
        fail(str(exc))
    click.echo("✓ All data cleared")
