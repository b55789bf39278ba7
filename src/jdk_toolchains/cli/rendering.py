# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rendering helpers for discovered and selected toolchains."""

from __future__ import annotations

import json
from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from ..constants import CURRENT, ENV, LTS, RUNTIME_VERSION, SORTED_PROVIDES, VENDOR, VERSION
from ..models import ToolchainModel


def _provides_rank(item: tuple[str, str]) -> tuple[int, str]:
    key = item[0]
    if key in SORTED_PROVIDES:
        return SORTED_PROVIDES.index(key), key
    return len(SORTED_PROVIDES), key


def ordered_provides(model: ToolchainModel) -> list[tuple[str, str]]:
    """Return ``provides`` pairs with well-known keys first, the rest alphabetically."""

    return sorted(model.provides.items(), key=_provides_rank)


def _flags(model: ToolchainModel) -> str:
    flags = [name for name in (CURRENT, LTS) if name in model.provides]
    if ENV in model.provides:
        flags.append(f"env={model.provides[ENV]}")
    return ", ".join(flags) or "-"


def build_toolchains_table(toolchains: Sequence[ToolchainModel], *, title: str) -> Table:
    """Return a rich table summarising ``toolchains`` in rank order.

    Args:
        toolchains: Ranked models to display.
        title: Table caption.

    Returns:
        Table: Rich table ready for rendering.
    """

    table = Table(title=title, box=box.SIMPLE, expand=True)
    table.add_column("#", justify="right")
    table.add_column("Version", style="bold")
    table.add_column("Vendor")
    table.add_column("Runtime Version")
    table.add_column("Flags")
    table.add_column("JDK Home", overflow="fold")
    for index, model in enumerate(toolchains, start=1):
        table.add_row(
            str(index),
            model.provides.get(VERSION, "-"),
            model.provides.get(VENDOR, "-"),
            model.provides.get(RUNTIME_VERSION, "-"),
            _flags(model),
            str(model.install_path),
        )
    return table


def render_toolchains(console: Console, toolchains: Sequence[ToolchainModel]) -> None:
    console.print(build_toolchains_table(toolchains, title=f"Discovered {len(toolchains)} JDK toolchains"))


def toolchains_payload(toolchains: Sequence[ToolchainModel]) -> str:
    """Return a JSON document listing ``toolchains`` with ordered provides."""

    entries = [
        {
            "jdk_home": str(model.install_path),
            "kind": model.kind,
            "provides": dict(ordered_provides(model)),
        }
        for model in toolchains
    ]
    return json.dumps(entries, indent=2)


__all__ = ["build_toolchains_table", "ordered_provides", "render_toolchains", "toolchains_payload"]
