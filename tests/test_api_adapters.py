from patrolassign.models.patrol import Patrol
from patrolassign.models.roster import Roster
from patrolassign.utils.api_adapters import (
    backend_patrols_to_roster,
    backend_user_to_participant,
    roster_to_member_roles,
)

BACKEND_PATROLS = [
    {
        "id": "p-a",
        "name": "Target 12",
        "members": [
            {
                "user": {
                    "id": 1,
                    "firstName": "Olena",
                    "lastName": "Koval",
                    "club": {"name": "Kyiv Archers"},
                    "division": "Adult Female",
                    "gender": "F",
                    "bowCategory": "RC",
                },
                "role": "leader",
            },
            {"user": {"id": 2, "email": "judge@example.com"}, "role": "judge"},
            {"user": None, "role": "member"},
            {"user": {"id": 3, "firstName": "Taras"}, "role": "member"},
        ],
    },
    {"id": "p-b", "name": "Overflow", "members": []},
]


def test_user_defaults():
    participant = backend_user_to_participant({"id": 5})

    assert participant.id == "5"
    assert participant.name == "Unknown"
    assert participant.club == "No Club"
    assert participant.division == "Unknown"
    assert participant.gender == "Other"
    assert participant.bow_category == "Unknown"


def test_name_falls_back_to_email():
    participant = backend_user_to_participant({"id": 2, "email": "judge@example.com"})

    assert participant.name == "judge@example.com"


def test_backend_patrols_to_roster():
    roster = backend_patrols_to_roster(BACKEND_PATROLS)

    first, second = roster.patrols
    assert first.target_number == 12
    assert first.members == ["1", "2", "3"]
    assert first.leader_id == "1"
    assert first.judge_ids == ["2"]
    assert roster.participants["1"].name == "Olena Koval"
    assert roster.participants["1"].club == "Kyiv Archers"
    # no number in the name: numbered by position
    assert second.target_number == 2
    assert second.members == []
    assert roster.integrity_problems() == []


def test_target_zero_in_name_falls_back_to_position():
    roster = backend_patrols_to_roster(
        [
            {"id": "p1", "name": "Target 3", "members": []},
            {"id": "p2", "name": "Target 0", "members": []},
        ]
    )

    assert [p.target_number for p in roster.patrols] == [3, 2]


def test_roster_to_member_roles_prefers_leader():
    roster = Roster(
        patrols=[Patrol("p", 1, ["x", "y", "z"], leader_id="x", judge_ids=["x", "y"])]
    )

    assert roster_to_member_roles(roster) == [
        ("p", "x", "leader"),
        ("p", "y", "judge"),
        ("p", "z", "member"),
    ]
