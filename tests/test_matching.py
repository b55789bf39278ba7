# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the requirement matcher."""

from __future__ import annotations

import pytest

from jdk_toolchains.matching import matches, parse_version_ranges, version_matches
from jdk_toolchains.models import JdkConstraints


def test_version_prefix_matches(model_factory) -> None:
    assert matches(model_factory("17.0.9"), {"version": "17"})
    assert matches(model_factory("17.0.9"), {"version": "17.0.9"})


def test_version_prefix_respects_segment_boundaries(model_factory) -> None:
    assert not matches(model_factory("170.1"), {"version": "17"})
    assert not matches(model_factory("11.0.2"), {"version": "17"})


@pytest.mark.parametrize(
    ("requested", "discovered", "expected"),
    [
        ("[11,17)", "11.0.2", True),
        ("[11,17)", "17", False),
        ("[11,17]", "17", True),
        ("[17,)", "21.0.1", True),
        ("(,1.8]", "1.8", True),
        ("(11,)", "11", False),
        ("[11],[17]", "17", True),
        ("[11],[17]", "21", False),
        ("[11,17", "11", False),
    ],
)
def test_version_ranges(requested, discovered, expected) -> None:
    assert version_matches(requested, discovered) is expected


def test_invalid_range_is_rejected() -> None:
    with pytest.raises(ValueError):
        parse_version_ranges("[11,17)x")


def test_other_keys_need_exact_values(model_factory) -> None:
    model = model_factory("17", **{"runtime.name": "Y"})

    assert not matches(model, {"runtime.name": "X"})
    assert matches(model, {"runtime.name": "Y"})


def test_missing_attribute_does_not_match(model_factory) -> None:
    assert not matches(model_factory("17"), {"runtime.version": "17+35"})


def test_env_matches_any_token(model_factory) -> None:
    model = model_factory("17", env="JAVA17_HOME,JAVA_HOME")

    assert matches(model, {"env": "JAVA_HOME"})
    assert matches(model, {"env": "JAVA17_HOME"})
    assert not matches(model, {"env": "JAVA"})


def test_every_requirement_must_hold(model_factory) -> None:
    model = model_factory("17.0.9", "Acme")

    assert matches(model, {"version": "17", "vendor": "Acme"})
    assert not matches(model, {"version": "17", "vendor": "Other"})


def test_matches_accepts_plain_mappings() -> None:
    assert matches({"version": "21.0.1"}, {"version": "21"})


def test_constraints_drop_absent_values() -> None:
    constraints = JdkConstraints(version="17", env="JAVA17_HOME")

    assert constraints.to_requirements() == {"version": "17", "env": "JAVA17_HOME"}
    assert JdkConstraints().to_requirements() == {}
