import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from conftest import FakeGateway  # noqa: E402

from patrolassign.controllers.store import PatrolStore  # noqa: E402
from patrolassign.gui.views.patrol_board import PatrolBoard  # noqa: E402
from patrolassign.gui.workers import StoreTaskWorker  # noqa: E402
from patrolassign.models.patrol import Patrol  # noqa: E402
from patrolassign.models.roster import Roster  # noqa: E402


@pytest.fixture(scope="module")
def app():
    application = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield application


@pytest.fixture
def board(app, patrols, participants):
    store = PatrolStore()
    store.load_roster(patrols, participants)
    widget = PatrolBoard(store, "Cup")
    yield widget
    widget.close()


@pytest.fixture
def gateway_board(app, roster, participants):
    gateway = FakeGateway(
        roster,
        regenerated=Roster(
            patrols=[Patrol("new", 1, ["a1", "a2", "a3"])], participants=participants
        ),
    )
    store = PatrolStore(gateway=gateway, tournament_id="cup")
    store.load_roster(roster.patrols, participants)
    widget = PatrolBoard(store, "Cup")
    yield widget, gateway
    widget.wait_for_task()
    widget.close()

def test_board_has_a_card_per_patrol(board):
    assert sorted(board.cards) == ["P1", "P2", "P3"]
    assert board.cards["P1"].member_list.count() == 3
    assert "No leader assigned" in board.cards["P3"].warning_texts()


def test_drop_moves_member_and_refreshes(board):
    messages = []
    target = board.cards["P1"].member_list
    target.feedback.connect(messages.append)

    assert target.handle_drop("b4", "P2")

    assert board.cards["P1"].member_list.count() == 4
    assert board.cards["P2"].member_list.count() == 3
    assert messages == ["Member moved."]
    assert board.btn_save.isEnabled()


def test_rejected_drop_reports_reason(board):
    messages = []
    target = board.cards["P2"].member_list
    target.feedback.connect(messages.append)

    assert not target.handle_drop("a1", "P1")

    assert messages[0].startswith("Move rejected: Source patrol would be too small")
    assert board.cards["P1"].member_list.count() == 3


def test_role_change_from_list(board):
    board.cards["P3"].member_list.change_role("c2", "leader")

    assert board.store.get_patrol("P3").leader_id == "c2"
    assert "No leader assigned" not in board.cards["P3"].warning_texts()


def test_print_html_contains_roster(board):
    html = board.roster_html()

    assert "Patrols - Cup" in html
    assert "No leader assigned" in html


def test_worker_reports_store_result(app, patrols, participants):
    store = PatrolStore(gateway=FakeGateway(), tournament_id="cup")
    store.load_roster(patrols, participants)
    results = []
    worker = StoreTaskWorker(store.save)
    worker.done.connect(lambda success, message: results.append((success, message)))

    worker.run()

    assert results == [(True, "")]


def test_worker_reports_errors_instead_of_raising(app, patrols, participants):
    store = PatrolStore()
    store.load_roster(patrols, participants)
    results = []
    worker = StoreTaskWorker(store.save)
    worker.done.connect(lambda success, message: results.append((success, message)))

    worker.run()

    assert results == [(False, "PatrolStore has no gateway/tournament configured")]


def test_save_runs_in_background(gateway_board):
    board, gateway = gateway_board
    board.cards["P1"].member_list.handle_drop("b4", "P2")

    assert board.save()
    assert board.wait_for_task()

    assert not board.is_busy
    assert len(gateway.saved) == 1
    assert not board.store.is_dirty
    assert board.lbl_feedback.text() == "Patrols saved."


def test_regenerate_refreshes_cards_on_gui_thread(gateway_board):
    board, _ = gateway_board

    assert board.regenerate()
    assert board.wait_for_task()

    assert sorted(board.cards) == ["new"]
    assert board.lbl_feedback.text() == "Patrols regenerated."
