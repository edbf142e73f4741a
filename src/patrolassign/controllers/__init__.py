"""Patrol assignment controllers: validation, warnings, stats and the store."""

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

from patrolassign.controllers.move_validator import can_move, dominant_value
from patrolassign.controllers.stats_aggregator import compute_stats
from patrolassign.controllers.store import PatrolStore
from patrolassign.controllers.store_state import EditorPhase, StoreState
from patrolassign.controllers.warning_engine import recompute_warnings

__all__ = [
    "can_move",
    "dominant_value",
    "recompute_warnings",
    "compute_stats",
    "PatrolStore",
    "StoreState",
    "EditorPhase",
]
