from datetime import datetime, timezone

import pytest

from patrolassign.exceptions import (
    InvalidConfigurationException,
    InvalidParticipantDataException,
    InvalidPatrolDataException,
)
from patrolassign.models.config import StoreConfig
from patrolassign.models.factory import ParticipantFactory, create_participant
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.requests import (
    MoveRequest,
    decode_member_drag,
    encode_member_drag,
)
from patrolassign.models.roster import Roster
from patrolassign.utils.validation import (
    validate_non_empty,
    validate_participant_fields,
    validate_positive_integer,
)


def test_participant_defaults_bow_category():
    participant = Participant.from_dict(
        {"id": 7, "name": "Ann", "club": "A", "division": "Cub", "gender": "F"}
    )

    assert participant.id == "7"
    assert participant.bow_category == "Unknown"


def test_patrol_role_of(patrols):
    p1 = patrols[0]

    assert p1.role_of("a1") == "leader"
    assert p1.role_of("a2") == "judge"
    assert p1.role_of("c1") is None
    assert patrols[2].role_of("c1") == "member"


def test_leader_wins_over_judge():
    patrol = Patrol("p", 1, ["x", "y", "z"], leader_id="x", judge_ids=["x"])

    assert patrol.role_of("x") == "leader"


def test_roster_serialization_keeps_saved_at(roster):
    roster.saved_at = datetime(2025, 5, 1, 9, 30, tzinfo=timezone.utc)

    data = roster.to_dict()
    restored = Roster.from_dict(data)

    assert data["version"] == 1
    assert restored.saved_at == roster.saved_at
    assert restored.patrols == roster.patrols
    assert restored.participants == roster.participants


@pytest.mark.parametrize("target", [0, -3, "abc", None])
def test_patrol_from_dict_rejects_bad_target_number(target):
    with pytest.raises(InvalidPatrolDataException, match="Target number"):
        Patrol.from_dict({"id": "P1", "target_number": target, "members": ["a1"]})


def test_patrol_from_dict_accepts_numeric_string():
    patrol = Patrol.from_dict({"id": "P1", "target_number": "7"})

    assert patrol.target_number == 7
    assert patrol.members == []


def test_roster_integrity_problems():
    roster = Roster(
        patrols=[
            Patrol("a", 1, ["x", "y"], leader_id="q", judge_ids=["x", "x", "y"]),
            Patrol("b", 2, ["y"]),
        ],
        participants={},
    )

    problems = roster.integrity_problems()

    assert any("is in patrols a and b" in p for p in problems)
    assert any("Leader of patrol a" in p for p in problems)
    assert any("3 judges" in p for p in problems)
    assert any("lists a judge twice" in p for p in problems)
    assert any("unknown participant x" in p for p in problems)


def test_fixture_roster_is_consistent(roster):
    assert roster.integrity_problems() == []
    assert roster.patrol_of("b3").id == "P2"
    assert roster.patrol_of("ghost") is None


def test_member_drag_encoding():
    text = encode_member_drag("u001", "patrol-2")

    assert text == "member:patrol-2:u001"
    assert decode_member_drag(text, "patrol-5") == MoveRequest("u001", "patrol-2", "patrol-5")


@pytest.mark.parametrize("text", ["", "player:u1", "member:", "member:p1", "member::u1"])
def test_foreign_drag_text_is_ignored(text):
    assert decode_member_drag(text, "p2") is None


def test_store_config_from_dict():
    config = StoreConfig.from_dict({"min_patrol_size": 2, "strict_integrity": True})

    assert config.min_patrol_size == 2
    assert config.strict_integrity
    assert config.max_judges == 2
    assert StoreConfig.from_dict(config.to_dict()) == config


def test_store_config_rejects_bad_values(tmp_path):
    with pytest.raises(InvalidConfigurationException):
        StoreConfig.from_dict({"max_patrol_size": 8})
    with pytest.raises(InvalidConfigurationException):
        StoreConfig(min_patrol_size=0)

    broken = tmp_path / "config.json"
    broken.write_text("[1, 2]")
    with pytest.raises(InvalidConfigurationException):
        StoreConfig.from_file(broken)


def test_store_config_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"size_imbalance_threshold": 4}')

    assert StoreConfig.from_file(path).size_imbalance_threshold == 4


def test_factory_strips_fields():
    participant = create_participant(
        id=" u1 ", name=" Ann ", club="A", division="Cub", gender="F"
    )

    assert participant.id == "u1"
    assert participant.name == "Ann"


def test_factory_strict_mode_rejects_blank_fields():
    factory = ParticipantFactory(strict=True)

    with pytest.raises(InvalidParticipantDataException):
        factory.create_participant(id="u1", name="", club="A", division="Cub", gender="F")


def test_factory_batch_skips_invalid_and_duplicates():
    factory = ParticipantFactory()
    records = [
        {"id": "u1", "name": "Ann", "club": "A", "division": "Cub", "gender": "F"},
        {"name": "No Id"},
        {"id": "u1", "name": "Again", "club": "B", "division": "Cub", "gender": "F"},
        {"id": "u2", "name": "Bob", "club": "B", "division": "Adult", "gender": "M"},
    ]

    participants = factory.create_batch(records)

    assert [p.id for p in participants] == ["u1", "u2"]
    assert participants[0].name == "Ann"

    with pytest.raises(InvalidParticipantDataException):
        ParticipantFactory(strict=True).create_batch(records)


def test_validation_helpers():
    assert validate_non_empty("  x ").sanitized_value == "x"
    assert not validate_non_empty("   ")
    assert validate_positive_integer("3").sanitized_value == "3"
    assert not validate_positive_integer(0)
    assert not validate_positive_integer("abc")
    assert validate_participant_fields({"id": "u1"}) == [
        "Name cannot be empty",
        "Club cannot be empty",
        "Division cannot be empty",
        "Gender cannot be empty",
    ]
