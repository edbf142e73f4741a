import pytest

from patrolassign.exceptions import (
    RosterGenerationException,
    RosterLoadException,
    RosterSaveException,
)
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.roster import Roster
from patrolassign.persistence.gateway import GatewayResponse, PersistenceGateway


def make_participant(
    pid, club="Club A", division="Adult Male", gender="M", bow_category="RC"
):
    return Participant(
        id=pid,
        name=f"Archer {pid}",
        club=club,
        division=division,
        gender=gender,
        bow_category=bow_category,
    )


@pytest.fixture
def participants():
    people = [
        make_participant("a1", club="Club A"),
        make_participant("a2", club="Club A"),
        make_participant("a3", club="Club B"),
        make_participant("b1", club="Club B"),
        make_participant("b2", club="Club X"),
        make_participant("b3", club="Club X"),
        make_participant("b4", club="Club C"),
        make_participant("c1", club="Club C"),
        make_participant("c2", club="Club A"),
        make_participant("c3", club="Club B"),
        make_participant("c4", club="Club C", division="Adult Female", gender="F"),
    ]
    return {p.id: p for p in people}


@pytest.fixture
def patrols():
    """Three patrols: P1 is clean at minimum size, P2 has same-club judges,
    P3 has no roles and mixed divisions/genders."""
    return [
        Patrol("P1", 1, ["a1", "a2", "a3"], leader_id="a1", judge_ids=["a2", "a3"]),
        Patrol("P2", 2, ["b1", "b2", "b3", "b4"], leader_id="b1", judge_ids=["b2", "b3"]),
        Patrol("P3", 3, ["c1", "c2", "c3", "c4"]),
    ]


@pytest.fixture
def roster(patrols, participants):
    return Roster(patrols=patrols, participants=participants)


class FakeGateway(PersistenceGateway):
    """In-memory gateway recording calls; failures and hooks are switchable."""

    def __init__(self, roster=None, regenerated=None):
        self.roster = roster or Roster()
        self.regenerated = regenerated
        self.saved = []
        self.fail_load = False
        self.fail_save = False
        self.fail_regenerate = False
        self.during_call = None

    async def _hook(self):
        if self.during_call is not None:
            self.during_call()

    async def load(self, tournament_id):
        await self._hook()
        if self.fail_load:
            raise RosterLoadException("backend unavailable")
        return GatewayResponse(roster=self.roster.copy())

    async def save(self, tournament_id, roster):
        await self._hook()
        if self.fail_save:
            raise RosterSaveException("disk full")
        self.saved.append(roster)

    async def regenerate(self, tournament_id):
        await self._hook()
        if self.fail_regenerate:
            raise RosterGenerationException("generator crashed")
        return GatewayResponse(roster=self.regenerated.copy(), is_newly_generated=True)

    async def delete_and_redistribute(self, tournament_id, patrol_id):
        await self._hook()
        roster = self.roster.copy()
        removed = roster.get_patrol(patrol_id)
        if removed is None:
            raise RosterGenerationException(f"Patrol '{patrol_id}' does not exist")
        roster.patrols = [p for p in roster.patrols if p.id != patrol_id]
        roster.patrols[0].members.extend(removed.members)
        return GatewayResponse(roster=roster)


@pytest.fixture
def gateway(roster):
    return FakeGateway(roster)
