"""Aggregate quality statistics for a roster."""

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

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class HomogeneityScores:
    """Per-attribute uniformity, each 0-100, higher is more uniform."""

    division: float = 0.0
    gender: float = 0.0
    category: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "division": self.division,
            "gender": self.gender,
            "category": self.category,
        }


@dataclass(frozen=True)
class PatrolStats:
    """Snapshot of roster quality metrics.

    Refreshed on load and regenerate; individual edits leave it stale unless
    the store is asked to recompute.
    """

    total_participants: int = 0
    average_patrol_size: float = 0.0
    club_diversity_score: float = 0.0  # 0-100, higher is better
    homogeneity_scores: HomogeneityScores = field(default_factory=HomogeneityScores)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total_participants": self.total_participants,
            "average_patrol_size": self.average_patrol_size,
            "club_diversity_score": self.club_diversity_score,
            "homogeneity_scores": self.homogeneity_scores.to_dict(),
        }
