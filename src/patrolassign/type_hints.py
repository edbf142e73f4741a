"""Type hints used in Patrol Assign."""

from typing import TYPE_CHECKING, Dict, List, Literal

if TYPE_CHECKING:
    from patrolassign.models.participant import Participant
    from patrolassign.models.patrol import Patrol

# Role change literals (for type hints)
RoleChange = Literal["leader", "judge", "remove"]

# Role a member holds when serialized for the backend
MemberRole = Literal["leader", "judge", "member"]

# Participant id -> Participant
ParticipantIndex = Dict[str, "Participant"]
# Ordered list of patrols in a roster
Patrols = List["Patrol"]
