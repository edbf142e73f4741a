"""Diagnostic warning computation for patrol rosters."""

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

from typing import List, Mapping, Sequence

from patrolassign.constants import MAX_JUDGES, SIZE_IMBALANCE_THRESHOLD
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.warning import PatrolWarning, Severity, WarningType


def recompute_warnings(
    patrols: Sequence[Patrol],
    participants: Mapping[str, Participant],
    imbalance_threshold: int = SIZE_IMBALANCE_THRESHOLD,
    required_judges: int = MAX_JUDGES,
) -> List[PatrolWarning]:
    """Recompute every warning for the roster from scratch.

    Per patrol, in order: same-club judges, missing judges, missing leader,
    mixed divisions, mixed genders. Then one pass over the whole roster for
    size imbalance. Members missing from the index are ignored by the
    attribute checks.

    Parameters
    ----------
    patrols : sequence of Patrol
        Current patrols, in display/iteration order.
    participants : mapping of str to Participant
        Participant index.
    imbalance_threshold : int
        Largest tolerated ``max_size - min_size``.
    required_judges : int
        Judges every patrol should have.

    Returns
    -------
    list of PatrolWarning
        A new list; nothing in it aliases the input.
    """
    warnings: List[PatrolWarning] = []

    for patrol in patrols:
        warnings.extend(_patrol_warnings(patrol, participants, required_judges))

    warnings.extend(_size_imbalance_warnings(patrols, imbalance_threshold))
    return warnings


def _patrol_warnings(
    patrol: Patrol, participants: Mapping[str, Participant], required_judges: int
) -> List[PatrolWarning]:
    warnings: List[PatrolWarning] = []

    if len(patrol.judge_ids) == 2:
        judge1 = participants.get(patrol.judge_ids[0])
        judge2 = participants.get(patrol.judge_ids[1])
        if judge1 and judge2 and judge1.club == judge2.club:
            warnings.append(
                PatrolWarning(
                    patrol_id=patrol.id,
                    type=WarningType.SAME_CLUB_JUDGES,
                    message=f"Judges are from the same club ({judge1.club})",
                    severity=Severity.WARNING,
                )
            )

    if len(patrol.judge_ids) < required_judges:
        warnings.append(
            PatrolWarning(
                patrol_id=patrol.id,
                type=WarningType.MISSING_JUDGES,
                message=f"Only {len(patrol.judge_ids)} judge(s) assigned",
                severity=Severity.ERROR,
            )
        )

    if not patrol.leader_id:
        warnings.append(
            PatrolWarning(
                patrol_id=patrol.id,
                type=WarningType.MISSING_LEADER,
                message="No leader assigned",
                severity=Severity.ERROR,
            )
        )

    members = [participants[m] for m in patrol.members if m in participants]

    if len({m.division for m in members}) > 1:
        warnings.append(
            PatrolWarning(
                patrol_id=patrol.id,
                type=WarningType.MIXED_DIVISIONS,
                message="Mixed divisions in patrol",
                severity=Severity.INFO,
            )
        )

    if len({m.gender for m in members}) > 1:
        warnings.append(
            PatrolWarning(
                patrol_id=patrol.id,
                type=WarningType.MIXED_GENDERS,
                message="Mixed genders in patrol",
                severity=Severity.INFO,
            )
        )

    return warnings


def _size_imbalance_warnings(
    patrols: Sequence[Patrol], threshold: int
) -> List[PatrolWarning]:
    if not patrols:
        return []

    sizes = [len(p.members) for p in patrols]
    min_size = min(sizes)
    max_size = max(sizes)
    if max_size - min_size <= threshold:
        return []

    return [
        PatrolWarning(
            patrol_id=patrol.id,
            type=WarningType.SIZE_IMBALANCE,
            message=(
                f"Patrol size ({len(patrol.members)}) differs significantly "
                f"from other patrols ({min_size}-{max_size})"
            ),
            severity=Severity.INFO,
        )
        for patrol in patrols
        if len(patrol.members) in (min_size, max_size)
    ]
