import copy

from conftest import make_participant

from patrolassign.controllers.move_validator import (
    REASON_INVALID,
    REASON_NOT_IN_SOURCE,
    REASON_SAME_PATROL,
    can_move,
    dominant_value,
)
from patrolassign.models.patrol import Patrol


def test_move_from_minimum_size_patrol_is_rejected(patrols, participants):
    result = can_move("a1", "P1", "P2", patrols, participants)

    assert not result.allowed
    assert result.reason == "Source patrol would be too small (minimum 3 members required)"
    assert result.warnings == []


def test_move_leaving_three_members_is_allowed(patrols, participants):
    result = can_move("b4", "P2", "P1", patrols, participants)

    assert result.allowed
    assert result.reason is None
    assert result.warnings == []


def test_unknown_ids_are_invalid(patrols, participants):
    assert can_move("zz", "P2", "P1", patrols, participants).reason == REASON_INVALID
    assert can_move("b4", "nope", "P1", patrols, participants).reason == REASON_INVALID
    assert can_move("b4", "P2", "nope", patrols, participants).reason == REASON_INVALID


def test_member_must_be_in_source(patrols, participants):
    result = can_move("c1", "P2", "P1", patrols, participants)

    assert not result.allowed
    assert result.reason == REASON_NOT_IN_SOURCE


def test_same_patrol_is_rejected(patrols, participants):
    result = can_move("b4", "P2", "P2", patrols, participants)

    assert not result.allowed
    assert result.reason == REASON_SAME_PATROL


def test_target_size_is_unbounded(participants):
    crowd = [f"x{i}" for i in range(30)]
    index = dict(participants)
    index.update({pid: make_participant(pid) for pid in crowd})
    patrols = [
        Patrol("big", 1, crowd),
        Patrol("src", 2, ["a1", "a2", "a3", "b1"]),
    ]

    assert can_move("b1", "src", "big", patrols, index).allowed


def test_division_and_gender_mismatch_are_advisory(patrols, participants):
    result = can_move("c4", "P3", "P2", patrols, participants)

    assert result.allowed
    assert result.warnings == [
        "Member division (Adult Female) differs from patrol's dominant division (Adult Male)",
        "Member gender (F) differs from patrol's dominant gender (M)",
    ]


def test_configurable_minimum_size(patrols, participants):
    assert not can_move("b4", "P2", "P1", patrols, participants, min_patrol_size=4).allowed
    assert can_move("a1", "P1", "P2", patrols, participants, min_patrol_size=2).allowed


def test_validator_does_not_mutate_inputs(patrols, participants):
    before = copy.deepcopy(patrols)

    can_move("b4", "P2", "P1", patrols, participants)
    can_move("a1", "P1", "P2", patrols, participants)

    assert patrols == before


def test_dominant_value_tie_goes_to_first_seen():
    assert dominant_value(["F", "M", "M", "F"]) == "F"
    assert dominant_value(["M", "F", "F"]) == "F"
    assert dominant_value([]) is None


def test_unresolved_target_members_are_skipped():
    index = {
        "m1": make_participant("m1", division="Junior Male"),
        "s1": make_participant("s1"),
        "s2": make_participant("s2"),
        "s3": make_participant("s3"),
        "s4": make_participant("s4"),
    }
    patrols = [
        Patrol("t", 1, ["ghost1", "ghost2", "m1"]),
        Patrol("s", 2, ["s1", "s2", "s3", "s4"]),
    ]

    result = can_move("s4", "s", "t", patrols, index)

    assert result.allowed
    assert result.warnings == [
        "Member division (Adult Male) differs from patrol's dominant division (Junior Male)"
    ]
