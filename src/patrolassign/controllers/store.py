"""Patrol store: the single owner of the live roster.

The store serializes every edit through the move validator, keeps the
warning list current, tracks unsaved changes and delegates loading, saving
and regeneration to a persistence gateway. Views subscribe with a callback
and re-read the snapshot properties when notified.
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

from collections.abc import Mapping
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from patrolassign.constants import (
    EVENT_LOAD_FAILED,
    EVENT_LOAD_STARTED,
    EVENT_LOADED,
    EVENT_MOVED,
    EVENT_REGENERATE_FAILED,
    EVENT_REGENERATE_STARTED,
    EVENT_REGENERATED,
    EVENT_ROLE_CHANGED,
    EVENT_SAVE_FAILED,
    EVENT_SAVE_STARTED,
    EVENT_SAVED,
    EVENT_STATS_REFRESHED,
    ROLE_CHANGES,
    ROLE_JUDGE,
    ROLE_LEADER,
    ROLE_REMOVE,
)
from patrolassign.controllers.move_validator import (
    REASON_INVALID,
    REASON_NOT_IN_SOURCE,
    can_move,
)
from patrolassign.controllers.stats_aggregator import compute_stats
from patrolassign.controllers.store_state import StoreState
from patrolassign.controllers.warning_engine import recompute_warnings
from patrolassign.exceptions import (
    GatewayException,
    InvalidRoleException,
    RosterIntegrityException,
    RosterLockedException,
)
from patrolassign.models.config import StoreConfig
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.requests import (
    MoveRequest,
    MoveResult,
    OperationResult,
    RoleChangeRequest,
    StoreRequest,
)
from patrolassign.models.roster import Roster
from patrolassign.models.stats import PatrolStats
from patrolassign.models.warning import PatrolWarning
from patrolassign.persistence.gateway import GatewayResponse, PersistenceGateway
from patrolassign.type_hints import ParticipantIndex, RoleChange
from patrolassign.utils import setup_logger

logger = setup_logger(__name__)

StoreObserver = Callable[["PatrolStore", str], None]


class PatrolStore:
    """Holds the roster being edited and applies validated mutations.

    Mutations (``move_member``, ``change_role``) are synchronous and run to
    completion one at a time. ``load``, ``save``, ``regenerate`` and
    ``delete_and_redistribute`` are coroutines awaiting the gateway.

    Parameters
    ----------
    gateway : PersistenceGateway, optional
        Storage backend; required for the asynchronous operations.
    tournament_id : str, optional
        Tournament whose roster this store edits.
    config : StoreConfig, optional
        Composition rules and behaviour switches.
    """

    def __init__(
        self,
        gateway: Optional[PersistenceGateway] = None,
        tournament_id: Optional[str] = None,
        config: Optional[StoreConfig] = None,
    ):
        self.gateway = gateway
        self.tournament_id = tournament_id
        self.config = config or StoreConfig()

        self._roster = Roster()
        self._warnings: List[PatrolWarning] = []
        self._stats: Optional[PatrolStats] = None
        self._dirty = False
        self._saving = False
        self._replacing = False
        self._revision = 0
        self._observers: List[StoreObserver] = []
        self.last_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Snapshot reads
    # ------------------------------------------------------------------

    @property
    def patrols(self) -> List[Patrol]:
        """Copies of the patrols; editing them does not touch the store."""
        return [p.copy() for p in self._roster.patrols]

    def sorted_patrols(self) -> List[Patrol]:
        """Patrol copies ordered by target number."""
        return [p.copy() for p in self._roster.sorted_patrols()]

    def get_patrol(self, patrol_id: str) -> Optional[Patrol]:
        patrol = self._roster.get_patrol(patrol_id)
        return patrol.copy() if patrol else None

    @property
    def participants(self) -> ParticipantIndex:
        return dict(self._roster.participants)

    @property
    def roster(self) -> Roster:
        """A detached copy of the whole roster."""
        return self._roster.copy()

    @property
    def warnings(self) -> List[PatrolWarning]:
        return list(self._warnings)

    def warnings_for(self, patrol_id: str) -> List[PatrolWarning]:
        return [w for w in self._warnings if w.patrol_id == patrol_id]

    @property
    def stats(self) -> Optional[PatrolStats]:
        return self._stats

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def is_busy(self) -> bool:
        """True while a full roster replacement is pending; editing is locked."""
        return self._replacing

    @property
    def state(self) -> StoreState:
        return StoreState.compute(self)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: StoreObserver) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self, event: str) -> None:
        for callback in list(self._observers):
            callback(self, event)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_roster(
        self,
        patrols: Sequence[Patrol],
        participants: Union[Mapping[str, Participant], Sequence[Participant]],
        stats: Optional[PatrolStats] = None,
    ) -> None:
        """Replace the whole roster with trusted input and clear the dirty flag.

        No validation is run. Stats are taken from ``stats`` when given and
        computed otherwise.
        """
        if isinstance(participants, Mapping):
            index = dict(participants)
        else:
            index = {p.id: p for p in participants}
        self._replace(Roster(patrols=[p.copy() for p in patrols], participants=index), stats)
        logger.info(
            "Loaded roster with %s patrols and %s participants",
            len(self._roster.patrols),
            len(index),
        )
        self._notify(EVENT_LOADED)

    def _replace(self, roster: Roster, stats: Optional[PatrolStats]) -> None:
        self._roster = roster
        self._dirty = False
        self._revision += 1
        self._recompute_warnings()
        self._stats = stats or compute_stats(roster.patrols, roster.participants)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def apply(self, request: StoreRequest) -> Optional[MoveResult]:
        """Dispatch a request from an input layer.

        Returns the MoveResult for moves and None for role changes.
        """
        if isinstance(request, MoveRequest):
            return self.move_member(
                request.member_id, request.source_patrol_id, request.target_patrol_id
            )
        if isinstance(request, RoleChangeRequest):
            self.change_role(request.patrol_id, request.member_id, request.role)
            return None
        raise TypeError(f"Unsupported request: {request!r}")

    def move_member(
        self, member_id: str, source_patrol_id: str, target_patrol_id: str
    ) -> MoveResult:
        """Move a member between patrols if the move validator allows it.

        On acceptance the member loses any leader/judge role it held in the
        source patrol and joins the target as a plain member.

        Raises:
            RosterLockedException: If a roster replacement is pending
            RosterIntegrityException: In strict mode, for unknown ids
        """
        self._ensure_editable()

        validation = can_move(
            member_id,
            source_patrol_id,
            target_patrol_id,
            self._roster.patrols,
            self._roster.participants,
            min_patrol_size=self.config.min_patrol_size,
        )

        if not validation.allowed:
            if validation.reason in (REASON_INVALID, REASON_NOT_IN_SOURCE):
                message = (
                    f"Move of {member_id} from {source_patrol_id} to "
                    f"{target_patrol_id} references unknown ids"
                )
                if self.config.strict_integrity:
                    raise RosterIntegrityException(message)
                logger.warning(message)
            else:
                logger.info("Move of %s rejected: %s", member_id, validation.reason)
            return MoveResult(accepted=False, reason=validation.reason)

        source = self._roster.get_patrol(source_patrol_id)
        target = self._roster.get_patrol(target_patrol_id)

        source.members.remove(member_id)
        if source.leader_id == member_id:
            source.leader_id = None
        if member_id in source.judge_ids:
            source.judge_ids.remove(member_id)
        target.members.append(member_id)

        for warning in validation.warnings:
            logger.info("Move of %s: %s", member_id, warning)

        self._after_edit()
        self._notify(EVENT_MOVED)
        return MoveResult(accepted=True, warnings=list(validation.warnings))

    def change_role(self, patrol_id: str, member_id: str, role: RoleChange) -> None:
        """Assign or clear a leader/judge role inside one patrol.

        ``leader`` replaces any previous leader. ``judge`` is a no-op when the
        patrol already has the maximum number of judges or the member is
        already one. ``remove`` strips the member's roles. The store is marked
        dirty and warnings are recomputed even for a no-op.

        Raises:
            InvalidRoleException: If ``role`` is not a known role change
            RosterLockedException: If a roster replacement is pending
            RosterIntegrityException: In strict mode, for an unknown patrol or a
                non-member
        """
        if role not in ROLE_CHANGES:
            raise InvalidRoleException(f"Unknown role '{role}'")
        self._ensure_editable()

        patrol = self._roster.get_patrol(patrol_id)
        if patrol is None or (role != ROLE_REMOVE and member_id not in patrol.members):
            message = f"Role change for {member_id} names unknown patrol or member ({patrol_id})"
            if self.config.strict_integrity:
                raise RosterIntegrityException(message)
            logger.warning(message)
        elif role == ROLE_LEADER:
            patrol.leader_id = member_id
        elif role == ROLE_JUDGE:
            if (
                len(patrol.judge_ids) < self.config.max_judges
                and member_id not in patrol.judge_ids
            ):
                patrol.judge_ids.append(member_id)
            else:
                logger.debug("Judge assignment for %s in %s ignored", member_id, patrol_id)
        elif role == ROLE_REMOVE:
            if patrol.leader_id == member_id:
                patrol.leader_id = None
            if member_id in patrol.judge_ids:
                patrol.judge_ids.remove(member_id)

        self._after_edit()
        self._notify(EVENT_ROLE_CHANGED)

    def _ensure_editable(self) -> None:
        if self._replacing:
            raise RosterLockedException(
                "Roster is being replaced; editing is disabled until it finishes"
            )

    def _after_edit(self) -> None:
        self._dirty = True
        self._revision += 1
        self._recompute_warnings()
        if self.config.recompute_stats_on_edit:
            self._stats = compute_stats(self._roster.patrols, self._roster.participants)

    def _recompute_warnings(self) -> None:
        self._warnings = recompute_warnings(
            self._roster.patrols,
            self._roster.participants,
            imbalance_threshold=self.config.size_imbalance_threshold,
            required_judges=self.config.max_judges,
        )

    def refresh_stats(self) -> PatrolStats:
        """Recompute stats for the current roster on demand."""
        self._stats = compute_stats(self._roster.patrols, self._roster.participants)
        self._notify(EVENT_STATS_REFRESHED)
        return self._stats

    # ------------------------------------------------------------------
    # Gateway operations
    # ------------------------------------------------------------------

    async def load(self) -> OperationResult:
        """Load the roster from the gateway; on failure keep the current one.

        A backend with nothing stored generates a roster, reported through
        ``OperationResult.is_newly_generated``.
        """
        self._require_gateway()
        return await self._replace_from_gateway(
            lambda: self.gateway.load(self.tournament_id),
            "Failed to load patrols",
            started=EVENT_LOAD_STARTED,
            succeeded=EVENT_LOADED,
            failed=EVENT_LOAD_FAILED,
        )

    async def save(self) -> OperationResult:
        """Persist the current roster.

        Editing stays possible while the save is pending. The dirty flag is
        only cleared if nothing changed after the snapshot was taken, so later
        edits are picked up by the next save. On failure the flag stays set
        and the caller retries by calling ``save`` again.
        Refused while a roster replacement is pending.
        """
        self._require_gateway()
        if self._saving:
            return OperationResult(success=False, error_message="Save already in progress")
        if self._replacing:
            return OperationResult(
                success=False, error_message="Cannot save while the roster is being replaced"
            )

        snapshot = self._roster.copy()
        revision = self._revision
        error: Optional[GatewayException] = None
        self._saving = True
        self._notify(EVENT_SAVE_STARTED)
        try:
            await self.gateway.save(self.tournament_id, snapshot)
        except GatewayException as e:
            error = e
        finally:
            self._saving = False

        if error is not None:
            return self._failed("Failed to save patrols", error, EVENT_SAVE_FAILED)

        if self._revision == revision:
            self._dirty = False
        else:
            logger.info("Roster changed during save; keeping unsaved changes flag")
        self.last_error = None
        logger.info("Patrols saved for tournament %s", self.tournament_id)
        self._notify(EVENT_SAVED)
        return OperationResult(success=True)

    async def regenerate(self, confirmed: bool = False) -> OperationResult:
        """Replace the roster with a freshly generated one.

        Discards unsaved edits, so the caller has to pass ``confirmed=True``
        after asking the operator. Editing is locked until it finishes; on
        failure the previous roster is kept untouched.
        """
        self._require_gateway()
        if not confirmed:
            return OperationResult(
                success=False,
                error_message="Regeneration discards all patrols and must be confirmed",
            )
        return await self._replace_from_gateway(
            lambda: self.gateway.regenerate(self.tournament_id),
            "Failed to regenerate patrols",
        )

    async def delete_and_redistribute(
        self, patrol_id: str, confirmed: bool = False
    ) -> OperationResult:
        """Delete a patrol on the backend and reload the redistributed roster."""
        self._require_gateway()
        if not confirmed:
            return OperationResult(
                success=False,
                error_message="Deleting a patrol must be confirmed",
            )
        return await self._replace_from_gateway(
            lambda: self.gateway.delete_and_redistribute(self.tournament_id, patrol_id),
            "Failed to delete patrol and redistribute",
        )

    async def _replace_from_gateway(
        self,
        call: Callable[[], Awaitable[GatewayResponse]],
        failure_message: str,
        started: str = EVENT_REGENERATE_STARTED,
        succeeded: str = EVENT_REGENERATED,
        failed: str = EVENT_REGENERATE_FAILED,
    ) -> OperationResult:
        if self._replacing:
            return OperationResult(
                success=False, error_message="Another roster replacement is in progress"
            )
        if self._saving:
            return OperationResult(
                success=False, error_message="Cannot replace the roster while a save is pending"
            )

        error: Optional[GatewayException] = None
        response: Optional[GatewayResponse] = None
        self._replacing = True
        self._notify(started)
        try:
            response = await call()
        except GatewayException as e:
            error = e
        finally:
            self._replacing = False

        if error is not None:
            return self._failed(failure_message, error, failed)

        self._replace(response.roster.copy(), response.stats)
        self.last_error = None
        logger.info(
            "Roster replaced (%s patrols, newly generated: %s)",
            len(self._roster.patrols),
            response.is_newly_generated,
        )
        self._notify(succeeded)
        return OperationResult(
            success=True, is_newly_generated=response.is_newly_generated
        )

    def _failed(self, message: str, error: Exception, event: str) -> OperationResult:
        logger.error("%s: %s", message, error)
        self.last_error = f"{message}: {error}"
        self._notify(event)
        return OperationResult(success=False, error_message=self.last_error)

    def _require_gateway(self) -> None:
        if self.gateway is None or self.tournament_id is None:
            raise RuntimeError("PatrolStore has no gateway/tournament configured")
