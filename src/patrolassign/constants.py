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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
ROSTER_FILE_FORMAT_VERSION = 1

# Patrol composition rules
MIN_PATROL_SIZE = 3
MAX_JUDGES = 2
SIZE_IMBALANCE_THRESHOLD = 2

# Role change keys (see RoleChangeRequest)
ROLE_LEADER = "leader"
ROLE_JUDGE = "judge"
ROLE_REMOVE = "remove"
ROLE_CHANGES = (ROLE_LEADER, ROLE_JUDGE, ROLE_REMOVE)

# Role a plain member carries in backend payloads
ROLE_MEMBER = "member"

# Fallback attribute values for incomplete backend records
DEFAULT_CLUB = "No Club"
DEFAULT_DIVISION = "Unknown"
DEFAULT_BOW_CATEGORY = "Unknown"
DEFAULT_GENDER = "Other"
DEFAULT_NAME = "Unknown"

# Store events delivered to observers
EVENT_LOAD_STARTED = "load_started"
EVENT_LOADED = "loaded"
EVENT_LOAD_FAILED = "load_failed"
EVENT_MOVED = "moved"
EVENT_ROLE_CHANGED = "role_changed"
EVENT_SAVE_STARTED = "save_started"
EVENT_SAVED = "saved"
EVENT_SAVE_FAILED = "save_failed"
EVENT_REGENERATE_STARTED = "regenerate_started"
EVENT_REGENERATED = "regenerated"
EVENT_REGENERATE_FAILED = "regenerate_failed"
EVENT_STATS_REFRESHED = "stats_refreshed"

# Display names for roles
ROLE_NAMES = {
    ROLE_LEADER: "Leader",
    ROLE_JUDGE: "Judge",
    ROLE_MEMBER: "Member",
}
