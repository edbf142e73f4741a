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
Roster printing.

This module renders a patrol roster as a clean, ink-friendly HTML document
listing every target with its leader, judges and members.
"""

from datetime import datetime
from html import escape
from typing import Dict, List, Mapping, Optional, Sequence

from patrolassign.constants import ROLE_NAMES
from patrolassign.models.participant import Participant
from patrolassign.models.patrol import Patrol
from patrolassign.models.stats import PatrolStats
from patrolassign.models.warning import PatrolWarning


class RosterPrinter:
    """
    Generates printable HTML for a patrol roster.

    Parameters
    ----------
    include_warnings : bool
        Whether to list open warnings under each patrol
    """

    def __init__(self, include_warnings: bool = False):
        self.include_warnings = include_warnings

    def generate_roster_html(
        self,
        tournament_name: str,
        patrols: Sequence[Patrol],
        participants: Mapping[str, Participant],
        warnings: Optional[Sequence[PatrolWarning]] = None,
        stats: Optional[PatrolStats] = None,
        printed_at: Optional[datetime] = None,
    ) -> str:
        """
        Generate HTML for a roster printout.

        Parameters
        ----------
        tournament_name : str
            Name of the tournament
        patrols : sequence of Patrol
            Patrols to print; they are ordered by target number
        participants : mapping
            Participant index
        warnings : sequence of PatrolWarning, optional
            Warnings to list when ``include_warnings`` is set
        stats : PatrolStats, optional
            Summary line printed under the title
        printed_at : datetime, optional
            Timestamp for the footer, defaults to now

        Returns
        -------
        str
            Complete HTML document for printing
        """
        main_title = "Patrols"
        if tournament_name:
            main_title += f" - {escape(tournament_name)}"

        by_patrol: Dict[str, List[PatrolWarning]] = {}
        for warning in warnings or []:
            by_patrol.setdefault(warning.patrol_id, []).append(warning)

        html = f"""
        <html>
        <head>
            <style>
                body {{ font-family: Arial, sans-serif; color: #000; background: #fff; margin: 0; padding: 0; }}
                h2 {{ text-align: center; margin: 0 0 0.5em 0; font-size: 1.35em; font-weight: normal; }}
                h3 {{ margin: 1em 0 0.3em 0; font-size: 1.1em; }}
                .subtitle {{ text-align: center; font-size: 1.05em; margin-bottom: 1.2em; }}
                table.patrol {{ border-collapse: collapse; width: 100%; margin-bottom: 1em; }}
                table.patrol th, table.patrol td {{ border: 1px solid #222; padding: 4px 8px; text-align: left; font-size: 10pt; }}
                .warnings {{ font-size: 9pt; font-style: italic; margin: 0 0 1em 0; }}
                .footer {{ text-align: center; font-size: 9pt; margin-top: 2em; color: #888; }}
            </style>
        </head>
        <body>
            <h2>{main_title}</h2>
        """

        if stats is not None:
            html += (
                f'<div class="subtitle">{stats.total_participants} participants, '
                f"average patrol size {stats.average_patrol_size:.1f}</div>"
            )

        for patrol in sorted(patrols, key=lambda p: p.target_number):
            html += self._patrol_html(patrol, participants)
            if self.include_warnings and by_patrol.get(patrol.id):
                items = "".join(
                    f"<li>{escape(w.message)}</li>" for w in by_patrol[patrol.id]
                )
                html += f'<ul class="warnings">{items}</ul>'

        stamp = (printed_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
        html += f"""
            <div class="footer">
                Printed by Patrol Assign &mdash; {stamp}
            </div>
        </body>
        </html>
        """
        return html

    def _patrol_html(
        self, patrol: Patrol, participants: Mapping[str, Participant]
    ) -> str:
        rows = ""
        for position, member_id in enumerate(patrol.members, start=1):
            participant = participants.get(member_id)
            name = participant.name if participant else member_id
            club = participant.club if participant else ""
            division = participant.division if participant else ""
            role = ROLE_NAMES[patrol.role_of(member_id)]
            rows += (
                f"<tr><td>{position}</td><td>{escape(name)}</td><td>{escape(club)}</td>"
                f"<td>{escape(division)}</td><td>{role}</td></tr>"
            )

        return f"""
            <h3>Target {patrol.target_number}</h3>
            <table class="patrol">
                <tr>
                    <th style="width:6%;">#</th>
                    <th>Name</th>
                    <th>Club</th>
                    <th>Division</th>
                    <th style="width:12%;">Role</th>
                </tr>
                {rows}
            </table>
        """
