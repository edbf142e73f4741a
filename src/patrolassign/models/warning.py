"""Diagnostic warnings raised against patrols."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class WarningType(Enum):
    """Kinds of composition problems the warning engine reports."""

    SAME_CLUB_JUDGES = "same-club-judges"
    MIXED_DIVISIONS = "mixed-divisions"
    MIXED_GENDERS = "mixed-genders"
    SIZE_IMBALANCE = "size-imbalance"
    MISSING_LEADER = "missing-leader"
    MISSING_JUDGES = "missing-judges"


class Severity(Enum):
    """How loudly a warning should be surfaced."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class PatrolWarning:
    """A derived diagnostic for one patrol. Never persisted."""

    patrol_id: str
    type: WarningType
    message: str
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        """Serialize warning to dictionary."""
        return {
            "patrol_id": self.patrol_id,
            "type": self.type.value,
            "message": self.message,
            "severity": self.severity.value,
        }
