"""Persistence gateway contract.

The patrol store never talks to storage directly. It awaits one of these
gateways, which owns loading, saving and (re)generating rosters. The
balanced-assignment algorithm lives behind ``regenerate`` and is not part of
this package.
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

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

from patrolassign.models.participant import Participant
from patrolassign.models.roster import Roster
from patrolassign.models.stats import PatrolStats
from patrolassign.type_hints import Patrols

# (participants, patrol_count) -> patrols
PatrolGenerator = Callable[[List[Participant], int], Patrols]

# tournament_id -> participants
ParticipantRegistry = Callable[[str], List[Participant]]


@dataclass
class GatewayResponse:
    """A roster handed back by the gateway.

    Attributes
    ----------
    roster : Roster
        The full replacement roster.
    stats : PatrolStats or None
        Stats computed by the backend, if it provides them.
    is_newly_generated : bool
        True when the backend had nothing stored and generated the roster.
    """

    roster: Roster
    stats: Optional[PatrolStats] = None
    is_newly_generated: bool = False


class PersistenceGateway(ABC):
    """Asynchronous storage backend for patrol rosters.

    Every method raises a ``GatewayException`` subclass on failure and never
    returns a partial roster.
    """

    @abstractmethod
    async def load(self, tournament_id: str) -> GatewayResponse:
        """Load the stored roster, generating one if none exists."""

    @abstractmethod
    async def save(self, tournament_id: str, roster: Roster) -> None:
        """Persist the roster."""

    @abstractmethod
    async def regenerate(self, tournament_id: str) -> GatewayResponse:
        """Discard the stored roster and generate a new one."""

    @abstractmethod
    async def delete_and_redistribute(
        self, tournament_id: str, patrol_id: str
    ) -> GatewayResponse:
        """Delete one patrol and spread its members over the others."""
