"""Enum stories: string values used by CLI options and settings."""

from __future__ import annotations

import pytest

from kvconfig.domain.enums import ConflictPolicy, OutputFormat


@pytest.mark.os_agnostic
def test_output_format_values_match_cli_choices() -> None:
    assert [f.value for f in OutputFormat] == ["human", "json"]


@pytest.mark.os_agnostic
def test_conflict_policy_values_match_settings_choices() -> None:
    assert [p.value for p in ConflictPolicy] == ["last-write-wins", "strict"]


@pytest.mark.os_agnostic
def test_conflict_policy_parses_from_its_value() -> None:
    assert ConflictPolicy("strict") is ConflictPolicy.STRICT


@pytest.mark.os_agnostic
def test_enums_compare_equal_to_their_values() -> None:
    assert OutputFormat.JSON == "json"
    assert ConflictPolicy.LAST_WRITE_WINS == "last-write-wins"
