"""Roster quality statistics.

All scores are percentages (0-100) averaged over every patrol. A patrol with
no resolvable members scores 0 and still counts in the average, so empty
patrols pull the scores down rather than disappearing from them.
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
from typing import Callable, List, Mapping, Sequence

from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.stats import HomogeneityScores, PatrolStats


def compute_stats(
    patrols: Sequence[Patrol], participants: Mapping[str, Participant]
) -> PatrolStats:
    """Compute diversity and homogeneity metrics for a roster.

    Args:
        patrols: Current patrols
        participants: Participant index (id -> Participant)

    Returns:
        A fresh PatrolStats snapshot
    """
    total = len(participants)
    if not patrols:
        return PatrolStats(total_participants=total)

    resolved = [
        [participants[m] for m in patrol.members if m in participants]
        for patrol in patrols
    ]

    return PatrolStats(
        total_participants=total,
        average_patrol_size=total / len(patrols),
        club_diversity_score=_mean_percentage(resolved, _distinct_ratio(lambda p: p.club)),
        homogeneity_scores=HomogeneityScores(
            division=_mean_percentage(resolved, _dominant_ratio(lambda p: p.division)),
            gender=_mean_percentage(resolved, _dominant_ratio(lambda p: p.gender)),
            category=_mean_percentage(
                resolved, _dominant_ratio(lambda p: p.bow_category)
            ),
        ),
    )


def _distinct_ratio(
    attribute: Callable[[Participant], str]
) -> Callable[[List[Participant]], float]:
    def ratio(members: List[Participant]) -> float:
        return len({attribute(m) for m in members}) / len(members)

    return ratio


def _dominant_ratio(
    attribute: Callable[[Participant], str]
) -> Callable[[List[Participant]], float]:
    def ratio(members: List[Participant]) -> float:
        top_count = Counter(attribute(m) for m in members).most_common(1)[0][1]
        return top_count / len(members)

    return ratio


def _mean_percentage(
    groups: List[List[Participant]],
    ratio: Callable[[List[Participant]], float],
) -> float:
    scores = [ratio(members) if members else 0.0 for members in groups]
    return sum(scores) / len(scores) * 100
