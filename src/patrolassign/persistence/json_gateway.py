"""JSON file persistence for patrol rosters.

Each tournament is stored as ``<tournament_id>.json`` in one directory.
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

import asyncio
import json
import math
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from patrolassign.constants import SAVE_FILE_EXTENSION
from patrolassign.exceptions import (
    InvalidPatrolDataException,
    RosterGenerationException,
    RosterLoadException,
    RosterSaveException,
)
from patrolassign.models.participant import Participant
from patrolassign.models.roster import Roster
from patrolassign.persistence.gateway import (
    GatewayResponse,
    ParticipantRegistry,
    PatrolGenerator,
    PersistenceGateway,
)
from patrolassign.utils import setup_logger

logger = setup_logger(__name__)

DEFAULT_TARGET_SIZE = 4


class JsonFileGateway(PersistenceGateway):
    """Store rosters as JSON files and generate them with a pluggable generator.

    Parameters
    ----------
    directory : str or Path
        Where roster files live. Created on first save.
    generator : callable
        ``(participants, patrol_count) -> patrols``; the assignment heuristic.
    registry : callable, optional
        ``tournament_id -> participants``. Needed to generate a roster for a
        tournament that has no file yet; otherwise regeneration reuses the
        participants already stored.
    target_size : int
        Desired patrol size when the patrol count has to be derived.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        generator: PatrolGenerator,
        registry: Optional[ParticipantRegistry] = None,
        target_size: int = DEFAULT_TARGET_SIZE,
    ):
        self.directory = Path(directory)
        self.generator = generator
        self.registry = registry
        self.target_size = target_size

    def path_for(self, tournament_id: str) -> Path:
        return self.directory / f"{tournament_id}{SAVE_FILE_EXTENSION}"

    async def load(self, tournament_id: str) -> GatewayResponse:
        path = self.path_for(tournament_id)
        if not path.exists():
            if self.registry is None:
                raise RosterLoadException(
                    f"No roster stored for tournament '{tournament_id}'"
                )
            logger.info("No roster for %s, generating one", tournament_id)
            participants = self._registry_participants(tournament_id)
            roster = self._generate(participants, self._patrol_count(len(participants)))
            await self.save(tournament_id, roster)
            return GatewayResponse(roster=roster, is_newly_generated=True)

        roster = await asyncio.to_thread(self._read, path)
        logger.info(
            "Loaded %s patrols for %s from %s", len(roster.patrols), tournament_id, path
        )
        return GatewayResponse(roster=roster)

    async def save(self, tournament_id: str, roster: Roster) -> None:
        path = self.path_for(tournament_id)
        to_store = roster.copy()
        to_store.saved_at = datetime.now(timezone.utc)
        await asyncio.to_thread(self._write, path, to_store)
        logger.info("Saved roster for %s to %s", tournament_id, path)

    async def regenerate(self, tournament_id: str) -> GatewayResponse:
        path = self.path_for(tournament_id)
        stored: Optional[Roster] = None
        if path.exists():
            stored = await asyncio.to_thread(self._read, path)

        if self.registry is not None:
            participants = self._registry_participants(tournament_id)
        elif stored is not None:
            participants = list(stored.participants.values())
        else:
            raise RosterGenerationException(
                f"No participants available to generate tournament '{tournament_id}'"
            )

        if stored is not None and stored.patrols:
            patrol_count = len(stored.patrols)
        else:
            patrol_count = self._patrol_count(len(participants))

        roster = self._generate(participants, patrol_count)
        await self.save(tournament_id, roster)
        return GatewayResponse(roster=roster, is_newly_generated=True)

    async def delete_and_redistribute(
        self, tournament_id: str, patrol_id: str
    ) -> GatewayResponse:
        path = self.path_for(tournament_id)
        if not path.exists():
            raise RosterGenerationException(
                f"No roster stored for tournament '{tournament_id}'"
            )
        roster = await asyncio.to_thread(self._read, path)

        removed = roster.get_patrol(patrol_id)
        if removed is None:
            raise RosterGenerationException(f"Patrol '{patrol_id}' does not exist")
        remaining = [p for p in roster.patrols if p.id != patrol_id]
        if not remaining:
            raise RosterGenerationException("Cannot delete the only patrol")

        # Freed members join the currently smallest patrol, lowest target first
        for member_id in removed.members:
            smallest = min(remaining, key=lambda p: (len(p.members), p.target_number))
            smallest.members.append(member_id)

        roster.patrols = remaining
        await self.save(tournament_id, roster)
        logger.info(
            "Deleted patrol %s and redistributed %s members",
            patrol_id,
            len(removed.members),
        )
        return GatewayResponse(roster=roster)

    def _patrol_count(self, participant_count: int) -> int:
        return max(1, math.ceil(participant_count / self.target_size))

    def _registry_participants(self, tournament_id: str) -> List[Participant]:
        try:
            return list(self.registry(tournament_id))
        except Exception as e:
            raise RosterGenerationException(
                f"Could not read participants for '{tournament_id}': {e}"
            ) from e

    def _generate(self, participants: List[Participant], patrol_count: int) -> Roster:
        try:
            patrols = self.generator(participants, patrol_count)
        except Exception as e:
            raise RosterGenerationException(f"Patrol generation failed: {e}") from e
        return Roster.build(patrols, participants)

    @staticmethod
    def _read(path: Path) -> Roster:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Roster.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, InvalidPatrolDataException) as e:
            raise RosterLoadException(f"Could not load roster from {path}: {e}") from e

    @staticmethod
    def _write(path: Path, roster: Roster) -> None:
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(roster.to_dict(), f, indent=2)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            raise RosterSaveException(f"Could not save roster to {path}: {e}") from e
