# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pick the toolchains a build should use."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from .constants import DISPLAY_COMPARATOR, TOOLCHAIN_KIND_JDK
from .discovery.discoverer import ToolchainDiscoverer
from .errors import NoMatchingToolchainError, UnmatchedToolchainsError, describe_requirements
from .matching import matches
from .models import (
    JdkConstraints,
    RequirementSet,
    SelectionResult,
    SelectionSource,
    SelectionStatus,
    ToolchainModel,
    UsageMode,
)
from .ranking import parse_comparator_spec

LOGGER = logging.getLogger(__name__)


class ToolchainSelector:
    """Single-pass selection state machine over configured and discovered toolchains."""

    def __init__(self, discoverer: ToolchainDiscoverer) -> None:
        self._discoverer = discoverer

    def select(
        self,
        constraints: JdkConstraints | Mapping[str, str],
        *,
        mode: UsageMode = UsageMode.IF_MATCH,
        configured: Sequence[ToolchainModel] = (),
        discover: bool = True,
        comparator: str | Iterable[str] = DISPLAY_COMPARATOR,
    ) -> SelectionResult:
        """Select at most one toolchain satisfying ``constraints``.

        Args:
            constraints: Caller constraints; only supplied ones become requirements.
            mode: Policy deciding when the current JDK makes a switch unnecessary.
            configured: Toolchains already declared by the user, tried in order
                before discovery.
            discover: Whether to fall back to discovery when nothing configured
                matches.
            comparator: Ranking applied to discovered toolchains.

        Returns:
            SelectionResult: Terminal state reached.

        Raises:
            UnsupportedComparatorError: If ``comparator`` is invalid, before any
                toolchain is inspected.
            NoMatchingToolchainError: If no toolchain satisfies the requirements.
        """

        requirements = self._requirements(constraints)
        if not requirements:
            return SelectionResult(status=SelectionStatus.NOTHING_TO_SELECT, requirements=requirements)
        criteria = parse_comparator_spec(comparator)

        current = self._discoverer.current_runtime_toolchain()
        if mode is UsageMode.IF_MATCH and current is not None and matches(current, requirements):
            LOGGER.info("Not using an external toolchain as the current JDK matches the requirements.")
            return SelectionResult(
                status=SelectionStatus.USE_CURRENT,
                requirements=requirements,
                toolchain=current,
                source=SelectionSource.CURRENT,
            )

        toolchain, source = self._first_match(configured, requirements), SelectionSource.CONFIGURED
        if toolchain is not None:
            LOGGER.info("Found matching JDK toolchain: %s", toolchain)
        elif discover:
            LOGGER.debug("No matching toolchains configured, trying to discover JDK toolchains")
            discovered = self._discoverer.discover(criteria)
            LOGGER.debug("Discovered %d JDK toolchains", len(discovered))
            toolchain, source = self._first_match(discovered, requirements), SelectionSource.DISCOVERED

        if toolchain is None:
            raise NoMatchingToolchainError(requirements)

        current_home = self._discoverer.current_home
        if mode is UsageMode.IF_SAME and current_home is not None and toolchain.install_path == current_home:
            LOGGER.debug("Not using an external toolchain as the current JDK has been selected.")
            return SelectionResult(
                status=SelectionStatus.USE_CURRENT,
                requirements=requirements,
                toolchain=current or toolchain,
                source=SelectionSource.CURRENT,
            )

        LOGGER.debug("Selected JDK toolchain: %s", toolchain)
        return SelectionResult(
            status=SelectionStatus.SELECTED,
            requirements=requirements,
            toolchain=toolchain,
            source=source,
        )

    @staticmethod
    def _requirements(constraints: JdkConstraints | Mapping[str, str]) -> RequirementSet:
        if isinstance(constraints, JdkConstraints):
            return constraints.to_requirements()
        return {key: value for key, value in constraints.items() if value is not None}

    @staticmethod
    def _first_match(toolchains: Iterable[ToolchainModel], requirements: RequirementSet) -> ToolchainModel | None:
        candidates = (toolchain for toolchain in toolchains if toolchain.kind == TOOLCHAIN_KIND_JDK)
        return next((toolchain for toolchain in candidates if matches(toolchain, requirements)), None)


def select_toolchains(
    requirements_by_kind: Mapping[str, Mapping[str, str]],
    configured: Sequence[ToolchainModel],
) -> dict[str, ToolchainModel]:
    """Pick the first configured toolchain matching each required kind.

    Only declared toolchains are considered; nothing is discovered. An empty
    requirement mapping for a kind accepts any toolchain of that kind.

    Args:
        requirements_by_kind: Requirement set per toolchain kind, such as
            ``{"jdk": {"version": "17"}, "protobuf": {}}``.
        configured: Declared toolchains in file order.

    Returns:
        dict[str, ToolchainModel]: Selected toolchain per kind, in requirement
        order.

    Raises:
        UnmatchedToolchainsError: If at least one kind has no match; every
            unmatched kind is reported.
    """

    selected: dict[str, ToolchainModel] = {}
    unmatched: dict[str, Mapping[str, str]] = {}
    for kind, requirements in requirements_by_kind.items():
        LOGGER.info("Required toolchain: %s", describe_requirements(kind, requirements))
        candidates = [toolchain for toolchain in configured if toolchain.kind == kind]
        toolchain = next((candidate for candidate in candidates if matches(candidate, requirements)), None)
        if toolchain is None:
            found = f"matched from {len(candidates)} found" if candidates else "found"
            LOGGER.error("No toolchain %s for type %s", found, kind)
            unmatched[kind] = requirements
            continue
        LOGGER.info("Found matching toolchain for type %s: %s", kind, toolchain)
        selected[kind] = toolchain
    if unmatched:
        raise UnmatchedToolchainsError(unmatched)
    return selected


__all__ = ["ToolchainSelector", "select_toolchains"]
