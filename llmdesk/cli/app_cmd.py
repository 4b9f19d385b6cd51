# -*- coding: utf-8 -*-
from __future__ import annotations

import click

from .utils import get_store


@click.command("app")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8088, type=int, show_default=True)
@click.pass_context
def app_cmd(ctx: click.Context, host: str, port: int) -> None:
    """Serve the HTTP API."""
    import uvicorn

    from ..app import create_app

    uvicorn.run(create_app(get_store(ctx)), host=host, port=port)
