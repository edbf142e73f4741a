import copy

from patrolassign.controllers.warning_engine import recompute_warnings
from patrolassign.models.patrol import Patrol
from patrolassign.models.warning import Severity, WarningType


def _of_type(warnings, warning_type):
    return [w for w in warnings if w.type == warning_type]


def test_warning_order_for_fixture_roster(patrols, participants):
    warnings = recompute_warnings(patrols, participants)

    assert [(w.patrol_id, w.type) for w in warnings] == [
        ("P2", WarningType.SAME_CLUB_JUDGES),
        ("P3", WarningType.MISSING_JUDGES),
        ("P3", WarningType.MISSING_LEADER),
        ("P3", WarningType.MIXED_DIVISIONS),
        ("P3", WarningType.MIXED_GENDERS),
    ]


def test_same_club_judges(patrols, participants):
    same_club = _of_type(
        recompute_warnings(patrols, participants), WarningType.SAME_CLUB_JUDGES
    )

    assert len(same_club) == 1
    assert same_club[0].patrol_id == "P2"
    assert same_club[0].severity == Severity.WARNING
    assert "Club X" in same_club[0].message


def test_missing_judges_reports_count(patrols, participants):
    missing = _of_type(
        recompute_warnings(patrols, participants), WarningType.MISSING_JUDGES
    )

    assert len(missing) == 1
    assert missing[0].patrol_id == "P3"
    assert missing[0].severity == Severity.ERROR
    assert "0" in missing[0].message


def test_one_judge_is_still_missing_judges(participants):
    patrols = [Patrol("P", 1, ["a1", "a2", "a3"], leader_id="a1", judge_ids=["a2"])]

    (warning,) = recompute_warnings(patrols, participants)

    assert warning.type == WarningType.MISSING_JUDGES
    assert warning.message == "Only 1 judge(s) assigned"


def test_size_imbalance_marks_only_extremes():
    sizes = [3, 4, 4, 6]
    patrols = [
        Patrol(f"S{i}", i + 1, [f"m{i}-{j}" for j in range(size)])
        for i, size in enumerate(sizes)
    ]

    imbalance = _of_type(recompute_warnings(patrols, {}), WarningType.SIZE_IMBALANCE)

    assert [w.patrol_id for w in imbalance] == ["S0", "S3"]
    assert all(w.severity == Severity.INFO for w in imbalance)
    assert imbalance[0].message == "Patrol size (3) differs significantly from other patrols (3-6)"


def test_size_difference_at_threshold_is_fine():
    patrols = [
        Patrol("S0", 1, ["a", "b", "c"]),
        Patrol("S1", 2, ["d", "e", "f", "g", "h"]),
    ]

    assert _of_type(recompute_warnings(patrols, {}), WarningType.SIZE_IMBALANCE) == []


def test_no_patrols_no_warnings():
    assert recompute_warnings([], {}) == []


def test_recompute_is_pure(patrols, participants):
    patrols_before = copy.deepcopy(patrols)
    participants_before = dict(participants)

    first = recompute_warnings(patrols, participants)
    second = recompute_warnings(patrols, participants)

    assert first == second
    assert first is not second
    assert patrols == patrols_before
    assert participants == participants_before
