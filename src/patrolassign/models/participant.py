"""Data model for tournament participants."""

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
from typing import Any, Dict

from patrolassign.constants import DEFAULT_BOW_CATEGORY


@dataclass(frozen=True)
class Participant:
    """A registered participant as supplied by the participant registry.

    Participants are never edited by the patrol engine. Patrols reference
    them by ``id`` only.

    Attributes
    ----------
    id : str
        Unique, session-stable identifier.
    name : str
        Display name.
    club : str
        Club affiliation, used for judge and diversity checks.
    division : str
        Age/experience category (e.g. ``"Adult Male"``).
    gender : str
        Gender value (e.g. ``"M"``, ``"F"``).
    bow_category : str
        Equipment class (e.g. ``"RC"``, ``"CP"``, ``"LB"``).
    """

    id: str
    name: str
    club: str
    division: str
    gender: str
    bow_category: str = DEFAULT_BOW_CATEGORY

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "club": self.club,
            "division": self.division,
            "gender": self.gender,
            "bow_category": self.bow_category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            club=data["club"],
            division=data["division"],
            gender=data["gender"],
            bow_category=data.get("bow_category") or DEFAULT_BOW_CATEGORY,
        )
