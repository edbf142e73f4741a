"""Request and result value types exchanged with the patrol store.

Input layers (drag-and-drop board, CLI, interactive shell) only ever hand the
store one of the request values below; they share no other state with it.
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

from dataclasses import dataclass, field
from typing import List, Optional, Union

from patrolassign.constants import ROLE_CHANGES
from patrolassign.exceptions import InvalidRoleException
from patrolassign.type_hints import RoleChange

MEMBER_MIME_PREFIX = "member:"


@dataclass(frozen=True)
class MoveRequest:
    """Move one member from a source patrol to a target patrol."""

    member_id: str
    source_patrol_id: str
    target_patrol_id: str


@dataclass(frozen=True)
class RoleChangeRequest:
    """Change the role a member holds inside its patrol."""

    patrol_id: str
    member_id: str
    role: RoleChange

    def __post_init__(self):
        if self.role not in ROLE_CHANGES:
            raise InvalidRoleException(
                f"Unknown role '{self.role}'. Expected one of: {', '.join(ROLE_CHANGES)}"
            )


StoreRequest = Union[MoveRequest, RoleChangeRequest]


@dataclass
class MoveValidation:
    """Outcome of a move check.

    Attributes:
        allowed: Whether the move may be applied
        reason: Why the move was refused, when it was
        warnings: Advisory messages that never block the move
    """

    allowed: bool
    reason: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.allowed


@dataclass
class MoveResult:
    """What the store reports back after a move request."""

    accepted: bool
    reason: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.accepted


@dataclass
class OperationResult:
    """Result of an asynchronous store operation (load, save, regenerate)."""

    success: bool
    error_message: Optional[str] = None
    is_newly_generated: bool = False

    def __bool__(self) -> bool:
        return self.success


def encode_member_drag(member_id: str, source_patrol_id: str) -> str:
    """Encode a dragged member as mime text: ``member:<patrol_id>:<member_id>``."""
    return f"{MEMBER_MIME_PREFIX}{source_patrol_id}:{member_id}"


def decode_member_drag(text: str, target_patrol_id: str) -> Optional[MoveRequest]:
    """Turn dropped mime text into a MoveRequest, or None if it is not ours."""
    if not text or not text.startswith(MEMBER_MIME_PREFIX):
        return None
    payload = text[len(MEMBER_MIME_PREFIX) :]
    source_patrol_id, sep, member_id = payload.partition(":")
    if not sep or not source_patrol_id or not member_id:
        return None
    return MoveRequest(
        member_id=member_id,
        source_patrol_id=source_patrol_id,
        target_patrol_id=target_patrol_id,
    )
