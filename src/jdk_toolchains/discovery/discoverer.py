# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery engine tying scanning, probing, caching, flagging and ranking together."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path

from ..constants import CURRENT, DISPLAY_COMPARATOR, VERSION
from ..models import ToolchainModel
from ..platform import OsFamily
from ..platform.paths import has_compiler
from ..ranking import parse_comparator_spec, sort_toolchains
from ..release import read_release_file, release_provides
from .cache import MetadataCache
from .flags import FlagAnnotator
from .probe import ToolchainProbe
from .scanner import LocationScanner

LOGGER = logging.getLogger(__name__)


class ToolchainDiscoverer:
    """Locate, describe and rank the JDK toolchains installed on this machine.

    One instance owns one scanner memo and one metadata cache; both live as
    long as the instance.
    """

    def __init__(
        self,
        *,
        cache: MetadataCache,
        probe: ToolchainProbe,
        environ: Mapping[str, str],
        user_home: Path,
        os_family: OsFamily,
        current_home: Path | None,
        max_workers: int | None = None,
        roots: Sequence[Path] | None = None,
    ) -> None:
        self._cache = cache
        self._probe = probe
        self._environ = dict(environ)
        self._current_home = current_home
        self._max_workers = max_workers
        self._scanner = LocationScanner(
            environ=self._environ,
            user_home=user_home,
            os_family=os_family,
            current_home=current_home,
            roots=roots,
        )

    @property
    def current_home(self) -> Path | None:
        return self._current_home

    @property
    def cache(self) -> MetadataCache:
        return self._cache

    def _annotator(self) -> FlagAnnotator:
        return FlagAnnotator(current_home=self._current_home, environ=self._environ)

    def current_runtime_toolchain(self) -> ToolchainModel | None:
        """Return the model of the JDK the environment currently runs with.

        The model is read from the JDK ``release`` file, no process is
        spawned.

        Returns:
            ToolchainModel | None: Model flagged ``current``, or ``None`` when
            there is no current JDK or it lacks a compiler or version.
        """

        home = self._current_home
        if home is None or not has_compiler(home):
            return None
        try:
            provides = release_provides(read_release_file(home))
        except OSError as exc:
            LOGGER.debug("Current JDK at %s has no readable release file: %s", home, exc)
            return None
        if VERSION not in provides:
            LOGGER.debug("Current JDK at %s does not declare JAVA_VERSION", home)
            return None
        model = ToolchainModel.from_parts(jdk_home=home, provides=provides)
        annotated = self._annotator().annotate(model)
        return annotated.with_provides({CURRENT: "true"})

    def refresh(self) -> None:
        """Drop cached metadata so the next discovery probes every candidate."""

        self._cache.invalidate()

    def discover(self, comparator: str | Iterable[str] = DISPLAY_COMPARATOR) -> list[ToolchainModel]:
        """Return every usable toolchain ranked by ``comparator``.

        Args:
            comparator: Ranking criteria, validated before any I/O happens.

        Returns:
            list[ToolchainModel]: Annotated models, best first. Unexpected
            failures are logged and yield an empty list.

        Raises:
            UnsupportedComparatorError: If ``comparator`` names an unknown
                criterion.
        """

        criteria = parse_comparator_spec(comparator)
        try:
            return self._discover(criteria)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.warning("Error discovering toolchains (enable debug level for more information): %s", exc)
            LOGGER.debug("Discovery failure details", exc_info=True)
            return []

    def _discover(self, criteria: tuple[str, ...]) -> list[ToolchainModel]:
        locations = sorted(self._scanner.scan())
        LOGGER.info("Found %d possible JDKs", len(locations))
        lookup = partial(self._cache.get_or_compute, compute=self._probe.probe)
        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="jdk-probe") as executor:
            models = [model for model in executor.map(lookup, locations) if model is not None]
        self._cache.save()
        annotator = self._annotator()
        return sort_toolchains((annotator.annotate(model) for model in models), criteria)


__all__ = ["ToolchainDiscoverer"]
