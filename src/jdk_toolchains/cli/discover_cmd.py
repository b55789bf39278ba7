# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command displaying discovered JDK toolchains."""

from __future__ import annotations

from typing import Annotated

import typer

from .rendering import render_toolchains, toolchains_payload
from .shared import CLIError, build_cli_logger, build_discoverer, exit_with, load_settings, options_from


def discover_command(
    ctx: typer.Context,
    comparator: Annotated[
        str | None,
        typer.Option(
            "--comparator",
            "-c",
            help="Comma separated ranking criteria among lts, current, env, version, vendor.",
        ),
    ] = None,
    refresh: Annotated[
        bool,
        typer.Option("--refresh", help="Ignore cached metadata and probe every JDK again."),
    ] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON instead of a table.")] = False,
) -> None:
    """Display the JDK toolchains found on this machine, best first."""

    options = options_from(ctx)
    logger = build_cli_logger(options)
    try:
        settings = load_settings({"comparator": comparator})
    except CLIError as exc:
        raise exit_with(logger, exc) from exc

    discoverer = build_discoverer(settings)
    if refresh:
        discoverer.refresh()
        if not as_json:
            logger.info("Ignoring cached metadata; every JDK will be probed again.")
    toolchains = discoverer.discover(settings.comparator)
    if as_json:
        logger.echo(toolchains_payload(toolchains))
        return
    render_toolchains(logger.console, toolchains)


__all__ = ["discover_command"]
