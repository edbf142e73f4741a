"""Data model for patrol rosters."""

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

from patrolassign.models.config import StoreConfig
from patrolassign.models.factory import (
    ParticipantFactory,
    create_participant,
    create_participant_from_dict,
)
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.requests import (
    MoveRequest,
    MoveResult,
    MoveValidation,
    OperationResult,
    RoleChangeRequest,
)
from patrolassign.models.roster import Roster
from patrolassign.models.stats import HomogeneityScores, PatrolStats
from patrolassign.models.warning import PatrolWarning, Severity, WarningType

__all__ = [
    "Participant",
    "Patrol",
    "PatrolWarning",
    "WarningType",
    "Severity",
    "PatrolStats",
    "HomogeneityScores",
    "Roster",
    "StoreConfig",
    "MoveRequest",
    "RoleChangeRequest",
    "MoveValidation",
    "MoveResult",
    "OperationResult",
    "ParticipantFactory",
    "create_participant",
    "create_participant_from_dict",
]
