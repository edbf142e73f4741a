"""Background workers running store coroutines off the GUI thread."""

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
from typing import Awaitable, Callable

from PyQt6 import QtCore

from patrolassign.models.requests import OperationResult
from patrolassign.utils import setup_logger

logger = setup_logger(__name__)


class StoreTaskWorker(QtCore.QObject):
    """Runs one store coroutine to completion in its own event loop.

    Move the worker to a ``QThread`` and connect ``thread.started`` to
    :meth:`run`. ``done`` carries the success flag and the error message,
    which is empty on success.
    """

    done = QtCore.pyqtSignal(bool, str)
    finished = QtCore.pyqtSignal()

    def __init__(self, task: Callable[[], Awaitable[OperationResult]]) -> None:
        super().__init__()
        self.task = task

    def run(self) -> None:
        try:
            result = asyncio.run(self.task())
        except Exception as e:
            # nothing may escape a slot running on a worker thread
            logger.exception("Store task failed")
            self.done.emit(False, str(e))
        else:
            self.done.emit(result.success, result.error_message or "")
        finally:
            self.finished.emit()
