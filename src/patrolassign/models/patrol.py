"""Data model for a patrol (target group)."""

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
from typing import Any, Dict, List, Optional

from patrolassign.constants import ROLE_JUDGE, ROLE_LEADER, ROLE_MEMBER
from patrolassign.exceptions import InvalidPatrolDataException
from patrolassign.utils.validation import validate_positive_integer


@dataclass
class Patrol:
    """A group of participants shooting together on one target.

    Attributes
    ----------
    id : str
        Unique patrol identifier.
    target_number : int
        Positive target number, used for display ordering.
    members : list of str
        Ordered participant ids. A participant belongs to at most one patrol.
    leader_id : str or None
        Participant id of the leader, always one of ``members`` when set.
    judge_ids : list of str
        Up to two participant ids drawn from ``members``.
    """

    id: str
    target_number: int
    members: List[str] = field(default_factory=list)
    leader_id: Optional[str] = None
    judge_ids: List[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    def has_member(self, participant_id: str) -> bool:
        return participant_id in self.members

    def copy(self) -> "Patrol":
        """Return an independent copy (member and judge lists are not shared)."""
        return Patrol(
            id=self.id,
            target_number=self.target_number,
            members=list(self.members),
            leader_id=self.leader_id,
            judge_ids=list(self.judge_ids),
        )

    def role_of(self, participant_id: str) -> Optional[str]:
        """Return ``"leader"``, ``"judge"``, ``"member"`` or None if absent.

        Leader wins over judge when a member holds both roles.
        """
        if participant_id not in self.members:
            return None
        if participant_id == self.leader_id:
            return ROLE_LEADER
        if participant_id in self.judge_ids:
            return ROLE_JUDGE
        return ROLE_MEMBER

    def to_dict(self) -> Dict[str, Any]:
        """Serialize patrol to dictionary."""
        return {
            "id": self.id,
            "target_number": self.target_number,
            "members": list(self.members),
            "leader_id": self.leader_id,
            "judge_ids": list(self.judge_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Patrol":
        """Deserialize patrol from dictionary.

        Raises:
            InvalidPatrolDataException: If the target number is not a positive integer
        """
        target = validate_positive_integer(data.get("target_number"), "Target number")
        if not target:
            raise InvalidPatrolDataException(
                f"Patrol {data.get('id')}: {target.error_message}"
            )
        return cls(
            id=str(data["id"]),
            target_number=int(target.sanitized_value),
            members=[str(m) for m in data.get("members", [])],
            leader_id=data.get("leader_id"),
            judge_ids=[str(j) for j in data.get("judge_ids", [])],
        )
