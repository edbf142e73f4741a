"""API adapters for converting backend patrol payloads to rosters.

The tournament backend returns patrols as ``{id, name, members: [{user, role}]}``
records. These helpers turn that shape into a Roster and back into the
per-member role assignments the backend accepts.
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

import re
from typing import Any, Dict, List, Tuple

from patrolassign.constants import (
    DEFAULT_BOW_CATEGORY,
    DEFAULT_CLUB,
    DEFAULT_DIVISION,
    DEFAULT_GENDER,
    DEFAULT_NAME,
    ROLE_JUDGE,
    ROLE_LEADER,
    ROLE_MEMBER,
)
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.roster import Roster
from patrolassign.type_hints import MemberRole
from patrolassign.utils import setup_logger
from patrolassign.utils.validation import validate_positive_integer

logger = setup_logger(__name__)

_TARGET_NUMBER = re.compile(r"\d+")


def backend_user_to_participant(user: Dict[str, Any]) -> Participant:
    """Convert a backend user record to a Participant.

    Missing fields fall back to placeholder values so that incomplete
    registrations still show up in the roster.

    Args:
        user: Raw user record (``firstName``, ``lastName``, ``email``,
            ``club: {name}``, ``division``, ``bowCategory``, ``gender``)

    Returns:
        Participant
    """
    full_name = f"{user.get('firstName') or ''} {user.get('lastName') or ''}".strip()
    club = user.get("club") or {}
    return Participant(
        id=str(user["id"]),
        name=full_name or user.get("email") or DEFAULT_NAME,
        club=club.get("name") or DEFAULT_CLUB,
        division=user.get("division") or DEFAULT_DIVISION,
        gender=user.get("gender") or DEFAULT_GENDER,
        bow_category=user.get("bowCategory") or DEFAULT_BOW_CATEGORY,
    )


def backend_patrols_to_roster(backend_patrols: List[Dict[str, Any]]) -> Roster:
    """Convert backend patrol records into a Roster.

    The target number is the first number in the patrol name (``"Target 7"``
    -> 7); patrols without a positive one are numbered by position. Members without a
    user record are skipped.

    Example:
        >>> roster = backend_patrols_to_roster([
        ...     {"id": "p1", "name": "Target 1", "members": [
        ...         {"user": {"id": "u1", "firstName": "Ann"}, "role": "leader"},
        ...     ]},
        ... ])
        >>> roster.patrols[0].leader_id
        'u1'
    """
    participants: Dict[str, Participant] = {}
    patrols: List[Patrol] = []

    for record in backend_patrols:
        member_ids: List[str] = []
        judge_ids: List[str] = []
        leader_id = None

        for member in record.get("members") or []:
            user = member.get("user")
            if not user:
                logger.debug("Skipping member without user in patrol %s", record.get("id"))
                continue

            participant = backend_user_to_participant(user)
            participants[participant.id] = participant
            member_ids.append(participant.id)

            role = member.get("role")
            if role == ROLE_LEADER:
                leader_id = participant.id
            elif role == ROLE_JUDGE:
                judge_ids.append(participant.id)

        target_number = len(patrols) + 1
        match = _TARGET_NUMBER.search(record.get("name") or "")
        if match:
            parsed = validate_positive_integer(match.group(0), "Target number")
            if parsed:
                target_number = int(parsed.sanitized_value)
            else:
                logger.warning(
                    "Patrol %s: %s, numbering by position",
                    record.get("id"),
                    parsed.error_message,
                )

        patrols.append(
            Patrol(
                id=str(record["id"]),
                target_number=target_number,
                members=member_ids,
                leader_id=leader_id,
                judge_ids=judge_ids,
            )
        )

    return Roster(patrols=patrols, participants=participants)


def roster_to_member_roles(roster: Roster) -> List[Tuple[str, str, MemberRole]]:
    """Flatten a roster into ``(patrol_id, user_id, role)`` assignments.

    The backend stores one role per member, so a leader who is also a judge
    is sent as leader.
    """
    assignments = []
    for patrol in roster.patrols:
        for member_id in patrol.members:
            if member_id == patrol.leader_id:
                role = ROLE_LEADER
            elif member_id in patrol.judge_ids:
                role = ROLE_JUDGE
            else:
                role = ROLE_MEMBER
            assignments.append((patrol.id, member_id, role))
    return assignments
