"""Factory for creating Participant objects with validation.

This module is the single entry point for turning participant registry
records into Participant values, enforcing the registry contract (unique ids,
non-empty string fields).
"""

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

from typing import Any, Dict, Iterable, List, Optional

from patrolassign.constants import DEFAULT_BOW_CATEGORY
from patrolassign.exceptions import InvalidParticipantDataException
from patrolassign.models.participant import Participant
from patrolassign.utils import setup_logger
from patrolassign.utils.validation import validate_participant_fields

logger = setup_logger(__name__)


class ParticipantFactory:
    """Factory for creating Participant instances from registry records.

    Example:
        >>> factory = ParticipantFactory(strict=True)
        >>> participant = factory.create_participant(
        ...     id="u1", name="Olena", club="Lviv Archers",
        ...     division="Adult Female", gender="F",
        ... )
    """

    def __init__(self, validate: bool = True, strict: bool = False):
        """Initialize the ParticipantFactory.

        Args:
            validate: Whether to validate input data
            strict: Whether to raise exceptions on validation errors
        """
        self.validate = validate
        self.strict = strict

    def create_participant(
        self,
        id: str,
        name: str,
        club: str,
        division: str,
        gender: str,
        bow_category: Optional[str] = None,
    ) -> Participant:
        """Create a participant, validating the registry fields.

        Raises:
            InvalidParticipantDataException: If validation fails and strict=True
        """
        data = {
            "id": id,
            "name": name,
            "club": club,
            "division": division,
            "gender": gender,
        }
        if self.validate:
            errors = validate_participant_fields(data)
            if errors and self.strict:
                raise InvalidParticipantDataException(
                    f"Invalid participant data: {'; '.join(errors)}"
                )
            if errors:
                logger.warning("Participant %s has invalid data: %s", id, errors)

        return Participant(
            id=str(id).strip(),
            name=str(name).strip(),
            club=str(club).strip(),
            division=str(division).strip(),
            gender=str(gender).strip(),
            bow_category=(bow_category or DEFAULT_BOW_CATEGORY).strip(),
        )

    def create_from_dict(self, data: Dict[str, Any]) -> Participant:
        """Create a participant from dictionary data.

        Raises:
            InvalidParticipantDataException: If the id is missing
        """
        if not data.get("id"):
            raise InvalidParticipantDataException("Participant id is required")

        return self.create_participant(
            id=data["id"],
            name=data.get("name", ""),
            club=data.get("club", ""),
            division=data.get("division", ""),
            gender=data.get("gender", ""),
            bow_category=data.get("bow_category"),
        )

    def create_batch(self, records: Iterable[Dict[str, Any]]) -> List[Participant]:
        """Create participants from a list of dictionaries.

        Duplicate ids are rejected in strict mode and skipped otherwise (the
        first record wins).
        """
        participants: List[Participant] = []
        seen = set()
        for data in records:
            try:
                participant = self.create_from_dict(data)
                if participant.id in seen:
                    raise InvalidParticipantDataException(
                        f"Duplicate participant id: {participant.id}"
                    )
            except InvalidParticipantDataException as e:
                if self.strict:
                    raise
                logger.warning("Skipping invalid participant data: %s", e)
                continue
            seen.add(participant.id)
            participants.append(participant)

        return participants


# Global factory instance for convenience
default_factory = ParticipantFactory(validate=True, strict=False)


def create_participant(**kwargs) -> Participant:
    """Convenience function to create a participant using the default factory."""
    return default_factory.create_participant(**kwargs)


def create_participant_from_dict(data: Dict[str, Any]) -> Participant:
    """Convenience function to create a participant from dict using default factory."""
    return default_factory.create_from_dict(data)
