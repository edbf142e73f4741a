"""Contains the patrol member list widget."""

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

from typing import TYPE_CHECKING, Dict, Optional

from PyQt6 import QtCore, QtGui, QtWidgets
from PyQt6.QtCore import QMimeData, Qt
from PyQt6.QtGui import (
    QContextMenuEvent,
    QDrag,
    QDragEnterEvent,
    QDragLeaveEvent,
    QDragMoveEvent,
    QDropEvent,
)

from patrolassign.constants import (
    ROLE_JUDGE,
    ROLE_LEADER,
    ROLE_MEMBER,
    ROLE_NAMES,
    ROLE_REMOVE,
)
from patrolassign.exceptions import PatrolAssignException
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.requests import (
    MEMBER_MIME_PREFIX,
    RoleChangeRequest,
    decode_member_drag,
    encode_member_drag,
)
from patrolassign.utils import setup_logger

if TYPE_CHECKING:
    from patrolassign.controllers.store import PatrolStore

logger = setup_logger(__name__)

ROLE_ACTIONS = (
    ("Make leader", ROLE_LEADER),
    ("Make judge", ROLE_JUDGE),
    ("Remove role", ROLE_REMOVE),
)


def _is_member_drag(mime: QMimeData) -> bool:
    return mime.hasText() and mime.text().startswith(MEMBER_MIME_PREFIX)


class PatrolMemberList(QtWidgets.QListWidget):
    """QListWidget showing one patrol's members; accepts members dragged from other patrols.

    Drops are turned into MoveRequests and handed to the store, which has the
    final say. The widget never edits its own items; the board rebuilds it
    when the store notifies.
    """

    # Emitted with a human-readable message after each drop or role change
    feedback = QtCore.pyqtSignal(str)

    def __init__(
        self,
        store: "PatrolStore",
        patrol_id: str,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)

        self.store = store
        self.patrol_id = patrol_id

        self.setAcceptDrops(True)
        self.setDragDropMode(QtWidgets.QAbstractItemView.DragDropMode.DragDrop)
        self.setDefaultDropAction(Qt.DropAction.MoveAction)
        self.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)

    def populate(self, patrol: Patrol, participants: Dict[str, Participant]) -> None:
        """Fill the list from a patrol snapshot."""
        self.clear()
        for member_id in patrol.members:
            participant = participants.get(member_id)
            role = patrol.role_of(member_id)
            text = participant.name if participant else member_id
            if role != ROLE_MEMBER:
                text += f"  ({ROLE_NAMES[role]})"
            item = QtWidgets.QListWidgetItem(text)
            item.setData(Qt.ItemDataRole.UserRole, member_id)
            if participant:
                item.setToolTip(
                    f"{participant.club} | {participant.division} | "
                    f"{participant.gender} | {participant.bow_category}"
                )
            if role == ROLE_LEADER:
                font = item.font()
                font.setBold(True)
                item.setFont(font)
            self.addItem(item)

    def startDrag(self, supported_actions: Qt.DropAction) -> None:
        """Start dragging the selected member out of this patrol."""
        current_item: Optional[QtWidgets.QListWidgetItem] = self.currentItem()
        if not current_item:
            return

        member_id: Optional[str] = current_item.data(Qt.ItemDataRole.UserRole)
        if not member_id:
            return

        if not self.store.state.can_edit:
            QtWidgets.QToolTip.showText(
                QtGui.QCursor.pos(),
                "Patrols are being regenerated. Please wait.",
                self,
                QtCore.QRect(),
                2000,
            )
            return

        drag = QDrag(self)
        mime_data = QMimeData()
        mime_data.setText(encode_member_drag(member_id, self.patrol_id))
        drag.setMimeData(mime_data)

        pixmap = QtGui.QPixmap(220, 30)
        pixmap.fill(QtGui.QColor(255, 255, 255, 200))

        painter = QtGui.QPainter(pixmap)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        painter.setPen(QtGui.QPen(QtGui.QColor(33, 150, 243), 2))
        painter.setBrush(QtGui.QBrush(QtGui.QColor(227, 242, 253, 180)))
        painter.drawRoundedRect(1, 1, 218, 28, 4, 4)
        painter.setPen(QtGui.QColor(0, 0, 0))
        painter.drawText(pixmap.rect(), Qt.AlignmentFlag.AlignCenter, current_item.text())
        painter.end()

        drag.setPixmap(pixmap)
        drag.setHotSpot(QtCore.QPoint(110, 15))

        drag.exec(supported_actions)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        """Handle drag enter events."""
        if _is_member_drag(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:
        """Handle drag move events."""
        if _is_member_drag(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        """Handle drag leave events."""
        QtWidgets.QApplication.restoreOverrideCursor()
        super().dragLeaveEvent(event)

    def dropEvent(self, event: QDropEvent) -> None:
        """Turn a dropped member into a move request."""
        QtWidgets.QApplication.restoreOverrideCursor()

        request = decode_member_drag(event.mimeData().text(), self.patrol_id)
        if request is None or request.source_patrol_id == self.patrol_id:
            event.ignore()
            return

        event.acceptProposedAction()
        self.handle_drop(request.member_id, request.source_patrol_id)

    def handle_drop(self, member_id: str, source_patrol_id: str) -> bool:
        """Ask the store to move ``member_id`` into this patrol.

        Returns:
            True if the store accepted the move
        """
        try:
            result = self.store.move_member(member_id, source_patrol_id, self.patrol_id)
        except PatrolAssignException as e:
            self.feedback.emit(str(e))
            return False

        if not result.accepted:
            self.feedback.emit(f"Move rejected: {result.reason}")
            return False

        message = "Member moved."
        if result.warnings:
            message += " " + " ".join(result.warnings)
        self.feedback.emit(message)
        return True

    def contextMenuEvent(self, event: QContextMenuEvent) -> None:
        """Offer role changes for the member under the cursor."""
        item = self.itemAt(event.pos())
        if not item:
            return
        member_id = item.data(Qt.ItemDataRole.UserRole)

        menu = QtWidgets.QMenu(self)
        for label, role in ROLE_ACTIONS:
            action = menu.addAction(label)
            action.setData(role)
            action.setEnabled(self.store.state.can_edit)

        chosen = menu.exec(event.globalPos())
        if chosen is not None:
            self.change_role(member_id, chosen.data())

    def change_role(self, member_id: str, role: str) -> None:
        try:
            self.store.apply(RoleChangeRequest(self.patrol_id, member_id, role))
        except PatrolAssignException as e:
            self.feedback.emit(str(e))
            return
        self.feedback.emit(f"{ROLE_NAMES.get(role, 'Role')} updated.")
