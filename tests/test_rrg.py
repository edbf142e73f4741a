import pytest

from patrolassign.testing.rrg import (
    ClubDistribution,
    RandomRosterGenerator,
    RRGConfig,
    deal_into_patrols,
)


def test_same_seed_same_roster():
    config = RRGConfig(num_participants=20, num_patrols=5, seed=42)

    first = RandomRosterGenerator(config).generate_roster()
    second = RandomRosterGenerator(config).generate_roster()

    assert first.patrols == second.patrols
    assert first.participants == second.participants


def test_generated_roster_is_consistent():
    config = RRGConfig(num_participants=23, num_patrols=5, seed=1)

    roster = RandomRosterGenerator(config).generate_roster()

    assert roster.integrity_problems() == []
    sizes = sorted(len(p.members) for p in roster.patrols)
    assert sizes == [4, 4, 5, 5, 5]
    assert [p.target_number for p in roster.patrols] == [1, 2, 3, 4, 5]
    for patrol in roster.patrols:
        assert patrol.leader_id == patrol.members[0]
        assert len(patrol.judge_ids) == 2


def test_judges_from_different_clubs_when_possible():
    config = RRGConfig(
        num_participants=24,
        num_patrols=4,
        club_distribution=ClubDistribution.UNIFORM,
        seed=8,
    )
    roster = RandomRosterGenerator(config).generate_roster()

    for patrol in roster.patrols:
        clubs = [roster.participants[m].club for m in patrol.members[1:]]
        judge_clubs = {roster.participants[j].club for j in patrol.judge_ids}
        if len(set(clubs)) > 1:
            assert len(judge_clubs) == 2


def test_dominant_club_distribution():
    config = RRGConfig(
        num_participants=200,
        num_patrols=10,
        club_distribution=ClubDistribution.DOMINANT,
        seed=3,
    )

    participants = RandomRosterGenerator(config).generate_participants()

    dominant = sum(1 for p in participants if p.club == config.clubs[0])
    assert dominant > 200 // 3


def test_deal_without_roles():
    participants = RandomRosterGenerator(
        RRGConfig(num_participants=6, num_patrols=2, seed=0)
    ).generate_participants()

    patrols = deal_into_patrols(participants, 2, assign_roles=False)

    assert all(p.leader_id is None and p.judge_ids == [] for p in patrols)


def test_patrol_count_must_be_positive():
    with pytest.raises(ValueError):
        deal_into_patrols([], 0)
