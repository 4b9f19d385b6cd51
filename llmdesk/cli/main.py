# -*- coding: utf-8 -*-
"""Entry point of the ``llmdesk`` command."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import click

from ..constant import LOG_LEVEL_ENV
from ..providers import ProviderStore
from ..utils.logging import setup_logger
from .app_cmd import app_cmd
from .data_cmd import data_group
from .providers_cmd import providers_group


@click.group()
@click.option(
    "--log-level",
    default=lambda: os.environ.get(LOG_LEVEL_ENV, "info"),
    show_default="info",
    type=click.Choice(
        ["debug", "info", "warn", "error"],
        case_sensitive=False,
    ),
    help="Log level.",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding providers.json (default: ~/.llmdesk).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, data_dir: Optional[Path]) -> None:
    """Manage LLM provider configurations."""
    ctx.ensure_object(dict)
    if "store" not in ctx.obj:
        ctx.obj["store"] = ProviderStore(data_dir)
    store = ctx.obj["store"]
    setup_logger(log_level, log_dir=store.data_dir / "logs", console=False)


cli.add_command(providers_group)
cli.add_command(data_group)
cli.add_command(app_cmd)


if __name__ == "__main__":
    cli()  # pylint: disable=no-value-for-parameter
