# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared options."""

from __future__ import annotations

from typing import Annotated

import typer

from ..logging import configure_logging
from .add_cmd import add_command
from .discover_cmd import discover_command
from .generate_cmd import generate_command
from .select_cmd import select_command
from .shared import CLIOptions
from .toolchain_cmd import toolchain_command

app = typer.Typer(
    name="jdk-toolchains",
    help="Discover, rank and select the JDK toolchains installed on this machine.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def configure(
    ctx: typer.Context,
    debug: Annotated[bool, typer.Option("--debug", help="Log discovery details to stderr.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
) -> None:
    """Store global presentation options for the invoked command."""

    ctx.obj = CLIOptions(emoji=not no_emoji, color=not no_color, debug=debug)
    configure_logging(debug=debug)


app.command("discover")(discover_command)
app.command("generate")(generate_command)
app.command("select")(select_command)
app.command("add")(add_command)
app.command("toolchain")(toolchain_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
