"""Move validation for patrol member transfers.

A move is a pure question asked of the current roster: may this member leave
its patrol for another one? Hard rules refuse the move; soft rules only
produce advisory messages for the operator.
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

from collections import Counter
from typing import Iterable, List, Mapping, Optional, Sequence

from patrolassign.constants import MIN_PATROL_SIZE
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.requests import MoveValidation

REASON_INVALID = "Invalid patrol or member"
REASON_NOT_IN_SOURCE = "Member is not in the source patrol"
REASON_SAME_PATROL = "Member is already in the target patrol"


def dominant_value(values: Iterable[str]) -> Optional[str]:
    """Return the most frequent value, or None for no values.

    Ties go to the value encountered first. That makes the answer
    deterministic for a given member order, though arbitrary between equally
    common values.
    """
    counts = Counter(v for v in values if v)
    if not counts:
        return None
    # most_common keeps first-encountered order among equal counts
    return counts.most_common(1)[0][0]


def _find_patrol(patrols: Sequence[Patrol], patrol_id: str) -> Optional[Patrol]:
    for patrol in patrols:
        if patrol.id == patrol_id:
            return patrol
    return None


def can_move(
    member_id: str,
    source_patrol_id: str,
    target_patrol_id: str,
    patrols: Sequence[Patrol],
    participants: Mapping[str, Participant],
    min_patrol_size: int = MIN_PATROL_SIZE,
) -> MoveValidation:
    """Decide whether a member may move from one patrol to another.

    Args:
        member_id: Participant being moved
        source_patrol_id: Patrol the member currently belongs to
        target_patrol_id: Patrol the member should join
        patrols: Current patrols
        participants: Participant index (id -> Participant)
        min_patrol_size: Smallest size the source patrol may be left with

    Returns:
        MoveValidation. When refused, ``reason`` explains why; when allowed,
        ``warnings`` lists division/gender mismatches with the target patrol.
        Target size is never limited.
    """
    source = _find_patrol(patrols, source_patrol_id)
    target = _find_patrol(patrols, target_patrol_id)
    member = participants.get(member_id)

    if source is None or target is None or member is None:
        return MoveValidation(allowed=False, reason=REASON_INVALID)

    if member_id not in source.members:
        return MoveValidation(allowed=False, reason=REASON_NOT_IN_SOURCE)

    if source.id == target.id:
        return MoveValidation(allowed=False, reason=REASON_SAME_PATROL)

    if len(source.members) - 1 < min_patrol_size:
        return MoveValidation(
            allowed=False,
            reason=(
                f"Source patrol would be too small "
                f"(minimum {min_patrol_size} members required)"
            ),
        )

    return MoveValidation(
        allowed=True, warnings=_soft_warnings(member, target, participants)
    )


def _soft_warnings(
    member: Participant, target: Patrol, participants: Mapping[str, Participant]
) -> List[str]:
    warnings: List[str] = []
    target_members = [participants[m] for m in target.members if m in participants]

    dominant_division = dominant_value(p.division for p in target_members)
    if dominant_division and member.division != dominant_division:
        warnings.append(
            f"Member division ({member.division}) differs from patrol's "
            f"dominant division ({dominant_division})"
        )

    dominant_gender = dominant_value(p.gender for p in target_members)
    if dominant_gender and member.gender != dominant_gender:
        warnings.append(
            f"Member gender ({member.gender}) differs from patrol's "
            f"dominant gender ({dominant_gender})"
        )

    return warnings
