import pytest

from patrolassign.controllers.stats_aggregator import compute_stats
from patrolassign.models.patrol import Patrol


def test_fixture_roster_stats(patrols, participants):
    stats = compute_stats(patrols, participants)

    assert stats.total_participants == 11
    assert stats.average_patrol_size == pytest.approx(11 / 3)
    assert stats.club_diversity_score == pytest.approx((2 / 3 + 3 / 4 + 3 / 4) / 3 * 100)
    assert stats.homogeneity_scores.division == pytest.approx((1 + 1 + 3 / 4) / 3 * 100)
    assert stats.homogeneity_scores.gender == pytest.approx((1 + 1 + 3 / 4) / 3 * 100)
    assert stats.homogeneity_scores.category == pytest.approx(100.0)


def test_no_patrols():
    stats = compute_stats([], {})

    assert stats.total_participants == 0
    assert stats.average_patrol_size == 0.0
    assert stats.club_diversity_score == 0.0


def test_empty_patrol_counts_as_zero(participants):
    patrols = [Patrol("full", 1, ["a1", "a3"]), Patrol("empty", 2, [])]

    stats = compute_stats(patrols, participants)

    # full patrol: two clubs over two members -> 1.0, empty patrol -> 0.0
    assert stats.club_diversity_score == pytest.approx(50.0)
    assert stats.homogeneity_scores.division == pytest.approx(50.0)


def test_scores_stay_in_range(patrols, participants):
    stats = compute_stats(patrols, participants)

    for score in (
        stats.club_diversity_score,
        stats.homogeneity_scores.division,
        stats.homogeneity_scores.gender,
        stats.homogeneity_scores.category,
    ):
        assert 0.0 <= score <= 100.0


def test_total_counts_index_not_members(participants):
    patrols = [Patrol("only", 1, ["a1"])]

    stats = compute_stats(patrols, participants)

    assert stats.total_participants == len(participants)
    assert stats.average_patrol_size == pytest.approx(len(participants))
