"""Tree materialization settings read from the ``[tree]`` section."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from kvconfig.domain.enums import ConflictPolicy
from kvconfig.domain.errors import ConfigurationError


class TreeSettings(BaseModel):
    """Validated, immutable ``[tree]`` settings.

    Example:
        >>> TreeSettings(conflict_policy="strict").conflict_policy
        <ConflictPolicy.STRICT: 'strict'>
        >>> TreeSettings().conflict_policy is ConflictPolicy.LAST_WRITE_WINS
        True
    """

    model_config = ConfigDict(frozen=True)

    conflict_policy: ConflictPolicy = ConflictPolicy.LAST_WRITE_WINS


def load_tree_settings(config_dict: Mapping[str, Any]) -> TreeSettings:
    """Build TreeSettings from the ``tree`` section of a config dict.

    Raises:
        ConfigurationError: When ``conflict_policy`` names an unknown policy.

    Example:
        >>> load_tree_settings({}).conflict_policy.value
        'last-write-wins'
    """
    raw = config_dict.get("tree", {})
    try:
        return TreeSettings.model_validate(raw if raw else {})
    except ValidationError as exc:
        choices = ", ".join(p.value for p in ConflictPolicy)
        raise ConfigurationError(f"Invalid tree settings: conflict_policy must be one of {choices}") from exc


__all__ = [
    "TreeSettings",
    "load_tree_settings",
]
