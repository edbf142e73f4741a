"""Exceptions for use in Patrol Assign"""

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


# ========== Base Application Exception ==========


class PatrolAssignException(Exception):
    """Base exception for all Patrol Assign errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Roster Exceptions ==========


class RosterException(PatrolAssignException):
    """Base exception for roster-related errors."""

    pass


class RosterIntegrityException(RosterException):
    """Raised when a request names a patrol or participant the roster does not hold."""

    pass


class RosterLockedException(RosterException):
    """Raised when a roster is edited while a full replacement is pending."""

    pass


class InvalidRoleException(RosterException):
    """Raised when a role change names an unknown role."""

    pass


class InvalidPatrolDataException(RosterException):
    """Raised when stored patrol data cannot be turned into a Patrol."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(PatrolAssignException):
    """Base exception for participant-related errors."""

    pass


class InvalidParticipantDataException(ParticipantException):
    """Raised when participant data is invalid or incomplete."""

    pass


# ========== Gateway Exceptions ==========


class GatewayException(PatrolAssignException):
    """Base exception for persistence gateway errors."""

    pass


class RosterLoadException(GatewayException):
    """Raised when a roster cannot be loaded."""

    pass


class RosterSaveException(GatewayException):
    """Raised when a roster cannot be saved."""

    pass


class RosterGenerationException(GatewayException):
    """Raised when a roster cannot be generated or redistributed."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PatrolAssignException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
