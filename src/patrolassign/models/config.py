"""Configuration for the patrol store and validation rules."""

# Patrol Assign
# Copyright (C) 2025  Patrol Assign developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

from patrolassign.constants import (
    MAX_JUDGES,
    MIN_PATROL_SIZE,
    SIZE_IMBALANCE_THRESHOLD,
)
from patrolassign.exceptions import InvalidConfigurationException


@dataclass
class StoreConfig:
    """Tunable rules for a patrol editing session.

    Attributes
    ----------
    min_patrol_size : int
        A move may not leave its source patrol with fewer members than this.
    max_judges : int
        Maximum judges per patrol.
    size_imbalance_threshold : int
        Largest tolerated difference between biggest and smallest patrol.
    recompute_stats_on_edit : bool
        Refresh stats after every move/role change instead of only on load.
    strict_integrity : bool
        Raise instead of rejecting when a request names unknown ids.
    """

    min_patrol_size: int = MIN_PATROL_SIZE
    max_judges: int = MAX_JUDGES
    size_imbalance_threshold: int = SIZE_IMBALANCE_THRESHOLD
    recompute_stats_on_edit: bool = False
    strict_integrity: bool = False

    def __post_init__(self):
        if self.min_patrol_size < 1:
            raise InvalidConfigurationException(
                f"min_patrol_size must be at least 1: {self.min_patrol_size}"
            )
        if self.max_judges < 0:
            raise InvalidConfigurationException(
                f"max_judges cannot be negative: {self.max_judges}"
            )
        if self.size_imbalance_threshold < 0:
            raise InvalidConfigurationException(
                f"size_imbalance_threshold cannot be negative: {self.size_imbalance_threshold}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreConfig":
        """Deserialize config from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidConfigurationException(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StoreConfig":
        """Load config from a JSON file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidConfigurationException(
                f"Could not read configuration from {path}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise InvalidConfigurationException(
                f"Configuration in {path} must be a JSON object"
            )
        return cls.from_dict(data)
