"""Patrol board: one card per patrol, laid out in a scrollable grid."""

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

from datetime import datetime
from typing import Callable, Dict, List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtPrintSupport import QPrinter, QPrintPreviewDialog

from patrolassign.controllers.store import PatrolStore
from patrolassign.gui.widgets.patrol_list import PatrolMemberList
from patrolassign.gui.workers import StoreTaskWorker
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.warning import PatrolWarning, Severity
from patrolassign.reporting.roster_printer import RosterPrinter
from patrolassign.utils import setup_logger

logger = setup_logger(__name__)

SEVERITY_STYLES = {
    Severity.ERROR: "color: #c62828;",
    Severity.WARNING: "color: #ef6c00;",
    Severity.INFO: "color: #1565c0;",
}

CARD_COLUMNS = 3


class PatrolCard(QtWidgets.QGroupBox):
    """A single patrol: its member list and the warnings attached to it."""

    def __init__(
        self, store: PatrolStore, patrol: Patrol, parent: Optional[QtWidgets.QWidget] = None
    ) -> None:
        super().__init__(f"Target {patrol.target_number}", parent)
        self.patrol_id = patrol.id

        layout = QtWidgets.QVBoxLayout(self)
        self.member_list = PatrolMemberList(store, patrol.id, self)
        layout.addWidget(self.member_list)

        self.warnings_layout = QtWidgets.QVBoxLayout()
        layout.addLayout(self.warnings_layout)

    def update_contents(
        self,
        patrol: Patrol,
        participants: Dict[str, Participant],
        warnings: List[PatrolWarning],
    ) -> None:
        self.setTitle(f"Target {patrol.target_number} ({patrol.size})")
        self.member_list.populate(patrol, participants)

        while self.warnings_layout.count():
            item = self.warnings_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        for warning in warnings:
            label = QtWidgets.QLabel(warning.message)
            label.setWordWrap(True)
            label.setStyleSheet(SEVERITY_STYLES[warning.severity])
            label.setToolTip(warning.type.value)
            self.warnings_layout.addWidget(label)

    def warning_texts(self) -> List[str]:
        texts = []
        for index in range(self.warnings_layout.count()):
            widget = self.warnings_layout.itemAt(index).widget()
            if isinstance(widget, QtWidgets.QLabel):
                texts.append(widget.text())
        return texts


class PatrolBoard(QtWidgets.QWidget):
    """Editing surface for a patrol store.

    The board subscribes to the store and rebuilds its cards from the
    snapshot whenever the store reports a change. Saving and regenerating run
    on a worker thread; store events raised there reach the board through
    ``store_changed``, which Qt queues onto the GUI thread.
    """

    store_changed = QtCore.pyqtSignal(str)
    task_finished = QtCore.pyqtSignal(bool)

    def __init__(
        self,
        store: PatrolStore,
        title: str = "",
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.title = title
        self.cards: Dict[str, PatrolCard] = {}
        self._task_thread: Optional[QtCore.QThread] = None
        self._task_worker: Optional[StoreTaskWorker] = None
        self._success_text = ""
        self._last_success = False

        self._setup_ui()
        self.store_changed.connect(self._refresh_after_event)
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(
            self._on_store_event
        )
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        toolbar = QtWidgets.QHBoxLayout()
        self.btn_save = QtWidgets.QPushButton("Save Changes")
        self.btn_save.clicked.connect(self.save)
        self.btn_regenerate = QtWidgets.QPushButton("Regenerate")
        self.btn_regenerate.clicked.connect(self.confirm_regenerate)
        self.btn_print = QtWidgets.QPushButton("Print...")
        self.btn_print.clicked.connect(self.print_roster)
        toolbar.addWidget(self.btn_save)
        toolbar.addWidget(self.btn_regenerate)
        toolbar.addStretch()
        toolbar.addWidget(self.btn_print)
        layout.addLayout(toolbar)

        self.lbl_stats = QtWidgets.QLabel()
        layout.addWidget(self.lbl_stats)

        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        container = QtWidgets.QWidget()
        self.grid = QtWidgets.QGridLayout(container)
        scroll.setWidget(container)
        layout.addWidget(scroll, 1)

        self.lbl_status = QtWidgets.QLabel()
        self.lbl_feedback = QtWidgets.QLabel()
        self.lbl_feedback.setWordWrap(True)
        layout.addWidget(self.lbl_feedback)
        layout.addWidget(self.lbl_status)

    # --- Store synchronisation ---

    def _on_store_event(self, store: PatrolStore, event: str) -> None:
        self.store_changed.emit(event)

    def _refresh_after_event(self, event: str) -> None:
        logger.debug("Board received %s", event)
        self.refresh()
        if self.store.last_error and event.endswith("failed"):
            self.show_feedback(self.store.last_error)

    def refresh(self) -> None:
        """Re-read the store snapshot and update every card."""
        patrols = self.store.sorted_patrols()
        participants = self.store.participants

        if set(self.cards) != {p.id for p in patrols}:
            self._rebuild_cards(patrols)

        for patrol in patrols:
            self.cards[patrol.id].update_contents(
                patrol, participants, self.store.warnings_for(patrol.id)
            )

        state = self.store.state
        self.btn_save.setEnabled(state.can_save)
        self.btn_save.setText(state.save_button_text)
        self.btn_regenerate.setEnabled(state.can_regenerate)
        self.lbl_status.setText(state.status_message)

        stats = self.store.stats
        if stats is None:
            self.lbl_stats.clear()
        else:
            self.lbl_stats.setText(
                f"Participants: {stats.total_participants}  |  "
                f"Avg size: {stats.average_patrol_size:.1f}  |  "
                f"Club diversity: {stats.club_diversity_score:.0f}%  |  "
                f"Division: {stats.homogeneity_scores.division:.0f}%  |  "
                f"Gender: {stats.homogeneity_scores.gender:.0f}%"
            )

    def _rebuild_cards(self, patrols: List[Patrol]) -> None:
        for card in self.cards.values():
            self.grid.removeWidget(card)
            card.deleteLater()
        self.cards = {}
        for index, patrol in enumerate(patrols):
            card = PatrolCard(self.store, patrol)
            card.member_list.feedback.connect(self.show_feedback)
            self.grid.addWidget(card, index // CARD_COLUMNS, index % CARD_COLUMNS)
            self.cards[patrol.id] = card

    def show_feedback(self, message: str) -> None:
        self.lbl_feedback.setText(message)

    # --- Actions ---

    def save(self) -> bool:
        """Start saving in the background; False if another task is running."""
        return self._start_task(self.store.save, "Patrols saved.")

    def confirm_regenerate(self) -> None:
        answer = QtWidgets.QMessageBox.question(
            self,
            "Regenerate Patrols",
            "This discards all current patrols and any unsaved changes. Continue?",
            QtWidgets.QMessageBox.StandardButton.Yes
            | QtWidgets.QMessageBox.StandardButton.No,
            QtWidgets.QMessageBox.StandardButton.No,
        )
        if answer == QtWidgets.QMessageBox.StandardButton.Yes:
            self.regenerate()

    def regenerate(self) -> bool:
        return self._start_task(
            lambda: self.store.regenerate(confirmed=True), "Patrols regenerated."
        )

    @property
    def is_busy(self) -> bool:
        return self._task_thread is not None

    def _start_task(self, task, success_text: str) -> bool:
        if self.is_busy:
            self.show_feedback("Another operation is still running.")
            return False

        self._success_text = success_text
        self._task_thread = QtCore.QThread()
        self._task_worker = StoreTaskWorker(task)
        self._task_worker.moveToThread(self._task_thread)

        self._task_thread.started.connect(self._task_worker.run)
        self._task_worker.done.connect(self._on_task_done)

        self._task_worker.finished.connect(self._task_thread.quit)
        self._task_worker.finished.connect(self._task_worker.deleteLater)
        self._task_thread.finished.connect(self._on_task_thread_finished)

        self._task_thread.start()
        return True

    def _on_task_done(self, success: bool, message: str) -> None:
        self._last_success = success
        if success:
            self.show_feedback(self._success_text)
        elif message:
            self.show_feedback(message)

    def _on_task_thread_finished(self) -> None:
        self._task_thread.wait()
        self._task_thread = None
        self._task_worker = None
        self.task_finished.emit(self._last_success)

    def wait_for_task(self) -> bool:
        """Run a local event loop until the background task finishes.

        Returns the success flag of the last finished task.
        """
        if self.is_busy:
            loop = QtCore.QEventLoop()
            self.task_finished.connect(loop.quit)
            loop.exec()
            self.task_finished.disconnect(loop.quit)
        return self._last_success

    def roster_html(self) -> str:
        return RosterPrinter(include_warnings=True).generate_roster_html(
            self.title,
            self.store.patrols,
            self.store.participants,
            warnings=self.store.warnings,
            stats=self.store.stats,
            printed_at=datetime.now(),
        )

    def print_roster(self) -> None:
        """Open a print preview of the roster."""
        if not self.store.patrols:
            QtWidgets.QMessageBox.information(self, "Print Patrols", "No patrols to print.")
            return

        printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        preview = QPrintPreviewDialog(printer, self)
        preview.setWindowTitle("Print Preview - Patrols")

        def render_preview(printer_obj):
            doc = QtGui.QTextDocument()
            doc.setHtml(self.roster_html())
            doc.print(printer_obj)

        preview.paintRequested.connect(render_preview)
        preview.exec()

    def closeEvent(self, event: QCloseEvent) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        super().closeEvent(event)


class PatrolBoardWindow(QtWidgets.QMainWindow):
    """Main window hosting a patrol board."""

    def __init__(self, store: PatrolStore, title: str = "") -> None:
        super().__init__()
        self.setWindowTitle(f"Patrol Assign - {title}" if title else "Patrol Assign")
        self.board = PatrolBoard(store, title, self)
        self.setCentralWidget(self.board)
        self.resize(1100, 750)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.board.wait_for_task()
        if self.board.store.is_dirty:
            answer = QtWidgets.QMessageBox.question(
                self,
                "Unsaved Changes",
                "There are unsaved changes. Save before closing?",
                QtWidgets.QMessageBox.StandardButton.Save
                | QtWidgets.QMessageBox.StandardButton.Discard
                | QtWidgets.QMessageBox.StandardButton.Cancel,
            )
            if answer == QtWidgets.QMessageBox.StandardButton.Cancel:
                event.ignore()
                return
            if answer == QtWidgets.QMessageBox.StandardButton.Save and not (
                self.board.save() and self.board.wait_for_task()
            ):
                event.ignore()
                return
        self.board.close()
        super().closeEvent(event)
