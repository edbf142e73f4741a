from datetime import datetime

from conftest import make_participant

from patrolassign.controllers.stats_aggregator import compute_stats
from patrolassign.controllers.warning_engine import recompute_warnings
from patrolassign.models.patrol import Patrol
from patrolassign.reporting.roster_printer import RosterPrinter


def test_roster_html_orders_by_target(patrols, participants):
    reversed_patrols = list(reversed(patrols))

    html = RosterPrinter().generate_roster_html(
        "Spring Cup",
        reversed_patrols,
        participants,
        printed_at=datetime(2025, 4, 2, 10, 15),
    )

    assert "Patrols - Spring Cup" in html
    assert html.index("Target 1") < html.index("Target 2") < html.index("Target 3")
    assert "Printed by Patrol Assign" in html
    assert "2025-04-02 10:15" in html


def test_roles_and_stats_are_printed(patrols, participants):
    html = RosterPrinter().generate_roster_html(
        "Cup", patrols, participants, stats=compute_stats(patrols, participants)
    )

    assert "<td>Leader</td>" in html
    assert "<td>Judge</td>" in html
    assert "11 participants" in html


def test_warnings_only_when_enabled(patrols, participants):
    warnings = recompute_warnings(patrols, participants)

    plain = RosterPrinter().generate_roster_html("Cup", patrols, participants, warnings)
    detailed = RosterPrinter(include_warnings=True).generate_roster_html(
        "Cup", patrols, participants, warnings
    )

    assert "No leader assigned" not in plain
    assert "No leader assigned" in detailed


def test_names_are_escaped():
    participants = {"x": make_participant("x", club="<b>Bold</b> & Co")}

    html = RosterPrinter().generate_roster_html(
        "A & B", [Patrol("p", 1, ["x", "ghost"])], participants
    )

    assert "&lt;b&gt;Bold&lt;/b&gt; &amp; Co" in html
    assert "A &amp; B" in html
    assert "<td>ghost</td>" in html
