"""Roster: the participant arena plus the patrols that reference it."""

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
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from dateutil import parser as date_parser

from patrolassign.constants import ROSTER_FILE_FORMAT_VERSION
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol


@dataclass
class Roster:
    """All patrols of one tournament and the participants they reference.

    Participants live once, in ``participants`` keyed by id; patrols hold ids
    only.

    Attributes
    ----------
    patrols : list of Patrol
        Patrols in their stored order.
    participants : dict of str to Participant
        Participant index.
    saved_at : datetime or None
        When the roster was last persisted, if known.
    """

    patrols: List[Patrol] = field(default_factory=list)
    participants: Dict[str, Participant] = field(default_factory=dict)
    saved_at: Optional[datetime] = None

    @classmethod
    def build(
        cls, patrols: Iterable[Patrol], participants: Iterable[Participant]
    ) -> "Roster":
        """Create a roster from patrols and a flat participant list."""
        return cls(
            patrols=list(patrols),
            participants={p.id: p for p in participants},
        )

    def copy(self) -> "Roster":
        """Return a copy whose patrols can be mutated independently."""
        return Roster(
            patrols=[p.copy() for p in self.patrols],
            participants=dict(self.participants),
            saved_at=self.saved_at,
        )

    def get_patrol(self, patrol_id: str) -> Optional[Patrol]:
        for patrol in self.patrols:
            if patrol.id == patrol_id:
                return patrol
        return None

    def patrol_of(self, participant_id: str) -> Optional[Patrol]:
        """Find the patrol a participant currently belongs to."""
        for patrol in self.patrols:
            if participant_id in patrol.members:
                return patrol
        return None

    def sorted_patrols(self) -> List[Patrol]:
        """Patrols ordered by target number, as they are displayed."""
        return sorted(self.patrols, key=lambda p: p.target_number)

    def integrity_problems(self, max_judges: int = 2) -> List[str]:
        """List every violated structural invariant.

        Checks exclusive membership, leader and judge membership, judge count
        and duplicates, and that every member resolves in the index.
        """
        problems = []
        seen: Dict[str, str] = {}
        for patrol in self.patrols:
            if len(set(patrol.members)) != len(patrol.members):
                problems.append(f"Patrol {patrol.id} lists a member twice")
            for member_id in patrol.members:
                if member_id in seen and seen[member_id] != patrol.id:
                    problems.append(
                        f"Participant {member_id} is in patrols {seen[member_id]} and {patrol.id}"
                    )
                seen[member_id] = patrol.id
                if member_id not in self.participants:
                    problems.append(
                        f"Patrol {patrol.id} references unknown participant {member_id}"
                    )
            if patrol.leader_id is not None and patrol.leader_id not in patrol.members:
                problems.append(f"Leader of patrol {patrol.id} is not a member")
            if len(patrol.judge_ids) > max_judges:
                problems.append(
                    f"Patrol {patrol.id} has {len(patrol.judge_ids)} judges (max {max_judges})"
                )
            if len(set(patrol.judge_ids)) != len(patrol.judge_ids):
                problems.append(f"Patrol {patrol.id} lists a judge twice")
            for judge_id in patrol.judge_ids:
                if judge_id not in patrol.members:
                    problems.append(
                        f"Judge {judge_id} of patrol {patrol.id} is not a member"
                    )
        return problems

    def to_dict(self) -> Dict[str, Any]:
        """Serialize roster to dictionary."""
        return {
            "version": ROSTER_FILE_FORMAT_VERSION,
            "saved_at": self.saved_at.isoformat() if self.saved_at else None,
            "participants": [p.to_dict() for p in self.participants.values()],
            "patrols": [p.to_dict() for p in self.patrols],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Roster":
        """Deserialize roster from dictionary."""
        saved_at = data.get("saved_at")
        return cls(
            patrols=[Patrol.from_dict(p) for p in data.get("patrols", [])],
            participants={
                participant.id: participant
                for participant in (
                    Participant.from_dict(p) for p in data.get("participants", [])
                )
            },
            saved_at=date_parser.isoparse(saved_at) if saved_at else None,
        )
