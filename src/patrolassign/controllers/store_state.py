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

"""
Patrol editor state.

This module derives, from a patrol store, which actions an editing surface
should offer at any given moment.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from patrolassign.models.warning import Severity

if TYPE_CHECKING:
    from patrolassign.controllers.store import PatrolStore


class EditorPhase(Enum):
    """
    Represents the current phase of a patrol editing session.

    Used to determine which UI elements and actions should be available.
    """

    EMPTY = auto()  # No patrols loaded
    REPLACING = auto()  # Load/regenerate pending, editing locked
    SAVING = auto()  # Save pending, editing still allowed
    UNSAVED = auto()  # Local edits not yet persisted
    CLEAN = auto()  # Matches the persisted copy


@dataclass
class StoreState:
    """
    Encapsulates the computed state of a patrol store.

    Attributes
    ----------
    num_patrols : int
        Number of patrols in the roster
    num_participants : int
        Number of participants in the index
    error_count : int
        Warnings with severity ``error``
    warning_count : int
        Warnings with severity ``warning``
    info_count : int
        Warnings with severity ``info``
    phase : EditorPhase
        Current phase of the session
    can_edit : bool
        Whether moves and role changes may be issued
    can_save : bool
        Whether the save action should be enabled
    can_regenerate : bool
        Whether the regenerate action should be enabled
    """

    num_patrols: int
    num_participants: int
    error_count: int
    warning_count: int
    info_count: int
    phase: EditorPhase
    can_edit: bool
    can_save: bool
    can_regenerate: bool

    @classmethod
    def compute(cls, store: "PatrolStore") -> "StoreState":
        """
        Compute the current editor state.

        Parameters
        ----------
        store : PatrolStore
            The store to inspect

        Returns
        -------
        StoreState
            The computed state object with all derived properties
        """
        patrols = store.patrols
        warnings = store.warnings

        if store.is_busy:
            phase = EditorPhase.REPLACING
        elif not patrols:
            phase = EditorPhase.EMPTY
        elif store.is_saving:
            phase = EditorPhase.SAVING
        elif store.is_dirty:
            phase = EditorPhase.UNSAVED
        else:
            phase = EditorPhase.CLEAN

        return cls(
            num_patrols=len(patrols),
            num_participants=len(store.participants),
            error_count=sum(1 for w in warnings if w.severity == Severity.ERROR),
            warning_count=sum(1 for w in warnings if w.severity == Severity.WARNING),
            info_count=sum(1 for w in warnings if w.severity == Severity.INFO),
            phase=phase,
            can_edit=not store.is_busy and bool(patrols),
            can_save=store.is_dirty and not store.is_saving and not store.is_busy,
            can_regenerate=not store.is_busy,
        )

    @property
    def status_message(self) -> str:
        """
        Get a human-readable status message for the current state.

        Returns
        -------
        str
            A message describing what the operator should do next
        """
        if self.phase == EditorPhase.EMPTY:
            return "No patrols found. Regenerate to create patrols."
        elif self.phase == EditorPhase.REPLACING:
            return "Loading patrols..."
        elif self.phase == EditorPhase.SAVING:
            return "Saving patrols..."

        summary = f"{self.num_patrols} patrols, {self.num_participants} participants"
        if self.error_count:
            summary += f", {self.error_count} problem(s) to fix"
        if self.phase == EditorPhase.UNSAVED:
            return f"{summary}. Unsaved changes."
        return f"{summary}. All changes saved."

    @property
    def save_button_text(self) -> str:
        """Get the text for the save button."""
        if self.phase == EditorPhase.SAVING:
            return "Saving..."
        if self.can_save:
            return "Save Changes *"
        return "Save Changes"
