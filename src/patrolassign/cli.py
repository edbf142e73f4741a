"""Command-line interface for patrol rosters.

Subcommands generate, inspect and edit rosters stored as JSON files, and
``shell`` opens an interactive editing session.
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

import argparse
import asyncio
import json
import logging
import shlex
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from patrolassign.constants import (
    EVENT_LOADED,
    EVENT_REGENERATED,
    ROLE_CHANGES,
    ROLE_MEMBER,
)
from patrolassign.controllers.store import PatrolStore
from patrolassign.exceptions import PatrolAssignException
from patrolassign.models.config import StoreConfig
from patrolassign.models.requests import MoveRequest, RoleChangeRequest
from patrolassign.models.warning import Severity
from patrolassign.persistence.json_gateway import JsonFileGateway
from patrolassign.reporting.roster_printer import RosterPrinter
from patrolassign.testing.rrg import (
    ClubDistribution,
    RandomRosterGenerator,
    RRGConfig,
    deal_into_patrols,
)
from patrolassign.utils import set_log_level, setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    OKCYAN = "\033[96m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


SEVERITY_COLORS = {
    Severity.ERROR: Colors.FAIL,
    Severity.WARNING: Colors.WARNING,
    Severity.INFO: Colors.OKCYAN,
}

SHELL_COMMANDS = {
    "show": "List patrols with their members and roles",
    "warnings": "List current warnings",
    "stats": "Recompute and print roster statistics",
    "move": "move MEMBER SOURCE_PATROL TARGET_PATROL",
    "role": f"role PATROL MEMBER {{{'|'.join(ROLE_CHANGES)}}}",
    "save": "Save the roster",
    "regenerate": "Regenerate all patrols (discards unsaved edits)",
    "help": "Show this list",
    "quit": "Leave the shell",
}


# ========== Store helpers ==========


def build_store(args: argparse.Namespace) -> PatrolStore:
    """Create a store backed by the JSON gateway described by ``args``."""
    config = StoreConfig.from_file(args.config) if args.config else StoreConfig()
    gateway = JsonFileGateway(args.dir, generator=deal_into_patrols)
    return PatrolStore(gateway=gateway, tournament_id=args.tournament, config=config)


def load_store(args: argparse.Namespace) -> PatrolStore:
    store = build_store(args)
    result = asyncio.run(store.load())
    if not result:
        raise PatrolAssignException(result.error_message)
    return store


def save_store(store: PatrolStore) -> bool:
    result = asyncio.run(store.save())
    if result:
        print(f"{Colors.OKGREEN}Saved.{Colors.ENDC}")
        return True
    print(f"{Colors.FAIL}{result.error_message}{Colors.ENDC}")
    return False


# ========== Output ==========


def print_patrols(store: PatrolStore) -> None:
    participants = store.participants
    for patrol in store.sorted_patrols():
        print(f"\n{Colors.BOLD}Target {patrol.target_number}{Colors.ENDC} ({patrol.id})")
        for member_id in patrol.members:
            participant = participants.get(member_id)
            label = (
                f"{participant.name} [{participant.club}, {participant.division}, {participant.gender}]"
                if participant
                else member_id
            )
            role = patrol.role_of(member_id)
            marker = "" if role == ROLE_MEMBER else f" <{role}>"
            print(f"  {member_id:>8}  {label}{marker}")


def print_warnings(store: PatrolStore) -> None:
    warnings = store.warnings
    if not warnings:
        print(f"{Colors.OKGREEN}No warnings.{Colors.ENDC}")
        return
    for warning in warnings:
        color = SEVERITY_COLORS[warning.severity]
        print(
            f"{color}[{warning.severity.value:>7}]{Colors.ENDC} "
            f"{warning.patrol_id}: {warning.message} ({warning.type.value})"
        )


def print_stats(store: PatrolStore) -> None:
    stats = store.stats
    if stats is None:
        print("No statistics available.")
        return
    scores = stats.homogeneity_scores
    print(f"{'Participants:':<23}{stats.total_participants}")
    print(f"{'Average patrol size:':<23}{stats.average_patrol_size:.2f}")
    print(f"{'Club diversity:':<23}{stats.club_diversity_score:.1f}%")
    print(f"{'Division homogeneity:':<23}{scores.division:.1f}%")
    print(f"{'Gender homogeneity:':<23}{scores.gender:.1f}%")
    print(f"{'Category homogeneity:':<23}{scores.category:.1f}%")


def report_move(result) -> None:
    if not result.accepted:
        print(f"{Colors.FAIL}Move rejected: {result.reason}{Colors.ENDC}")
        return
    print(f"{Colors.OKGREEN}Member moved.{Colors.ENDC}")
    for warning in result.warnings:
        print(f"{Colors.WARNING}  note: {warning}{Colors.ENDC}")


# ========== Subcommands ==========


def run_generate_command(args: argparse.Namespace) -> int:
    config = RRGConfig(
        num_participants=args.participants,
        num_patrols=args.patrols,
        club_distribution=ClubDistribution(args.clubs),
        seed=args.seed,
    )
    roster = RandomRosterGenerator(config).generate_roster()
    store = build_store(args)
    store.load_roster(roster.patrols, roster.participants)
    if not save_store(store):
        return 1
    print(
        f"Generated {len(roster.patrols)} patrols for {len(roster.participants)} "
        f"participants in {store.gateway.path_for(args.tournament)}"
    )
    return 0


def run_check_command(args: argparse.Namespace) -> int:
    store = load_store(args)
    if args.json:
        payload = {
            "stats": store.stats.to_dict() if store.stats else None,
            "warnings": [w.to_dict() for w in store.warnings],
        }
        print(json.dumps(payload, indent=2))
    else:
        print_stats(store)
        print()
        print_warnings(store)
    return 1 if args.strict and store.state.error_count else 0


def run_move_command(args: argparse.Namespace) -> int:
    store = load_store(args)
    result = store.apply(MoveRequest(args.member, args.source, args.target))
    report_move(result)
    if not result.accepted:
        return 1
    return 0 if save_store(store) else 1


def run_role_command(args: argparse.Namespace) -> int:
    store = load_store(args)
    store.apply(RoleChangeRequest(args.patrol, args.member, args.role))
    print_warnings(store)
    return 0 if save_store(store) else 1


def run_regenerate_command(args: argparse.Namespace) -> int:
    store = build_store(args)
    result = asyncio.run(store.regenerate(confirmed=args.yes))
    if not result:
        print(f"{Colors.FAIL}{result.error_message}{Colors.ENDC}")
        return 1
    print(f"{Colors.OKGREEN}Regenerated {len(store.patrols)} patrols.{Colors.ENDC}")
    return 0


def run_print_command(args: argparse.Namespace) -> int:
    store = load_store(args)
    html = RosterPrinter(include_warnings=args.warnings).generate_roster_html(
        args.title or args.tournament,
        store.patrols,
        store.participants,
        warnings=store.warnings,
        stats=store.stats,
    )
    Path(args.output).write_text(html, encoding="utf-8")
    print(f"Roster written to {args.output}")
    return 0


def run_board_command(args: argparse.Namespace) -> int:
    # Qt is only needed for this subcommand
    from PyQt6 import QtWidgets

    from patrolassign.gui.views.patrol_board import PatrolBoardWindow

    store = load_store(args)
    app = QtWidgets.QApplication(sys.argv[:1])
    window = PatrolBoardWindow(store, args.tournament)
    window.show()
    return app.exec()


def run_shell_command(args: argparse.Namespace) -> int:
    store = load_store(args)
    session = PromptSession(
        completer=create_completer(store),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )
    stop_tracking = keep_completer_current(session, store)
    print(f"{Colors.BOLD}Patrol shell{Colors.ENDC} - {store.state.status_message}")
    print("Type 'help' for commands.")

    while True:
        try:
            line = session.prompt(f"patrols[{args.tournament}]> ")
        except (EOFError, KeyboardInterrupt):
            break
        if not execute_shell_line(store, line):
            break

    stop_tracking()

    if store.is_dirty:
        print(f"{Colors.WARNING}Leaving with unsaved changes.{Colors.ENDC}")
    return 0


# ========== Interactive shell ==========


def create_completer(store: PatrolStore) -> NestedCompleter:
    """Build completions for shell commands, member ids and patrol ids."""
    patrol_ids = {p.id: None for p in store.patrols}
    roles = {role: None for role in ROLE_CHANGES}
    options: Dict[str, Optional[dict]] = {name: None for name in SHELL_COMMANDS}
    options["move"] = {
        m: {p: patrol_ids for p in patrol_ids} for m in store.participants
    }
    options["role"] = {p: {m: roles for m in store.participants} for p in patrol_ids}
    options["regenerate"] = {"--yes": None}
    return NestedCompleter.from_nested_dict(options)


def keep_completer_current(
    session: PromptSession, store: PatrolStore
) -> Callable[[], None]:
    """Rebuild the session completer whenever the store swaps in a new roster.

    Returns the function that stops tracking the store.
    """

    def on_event(changed: PatrolStore, event: str) -> None:
        if event in (EVENT_LOADED, EVENT_REGENERATED):
            session.completer = create_completer(changed)

    return store.subscribe(on_event)


def execute_shell_line(store: PatrolStore, line: str) -> bool:
    """Execute one shell line against the store.

    Returns:
        False when the shell should exit, True otherwise
    """
    try:
        parts = shlex.split(line)
    except ValueError as e:
        print(f"{Colors.FAIL}{e}{Colors.ENDC}")
        return True
    if not parts:
        return True

    command, params = parts[0].lstrip("/"), parts[1:]
    handlers: Dict[str, Callable[[List[str]], None]] = {
        "show": lambda _: print_patrols(store),
        "warnings": lambda _: print_warnings(store),
        "stats": lambda _: (store.refresh_stats(), print_stats(store)),
        "move": lambda p: _shell_move(store, p),
        "role": lambda p: _shell_role(store, p),
        "save": lambda _: save_store(store),
        "regenerate": lambda p: _shell_regenerate(store, p),
        "help": lambda _: print_shell_help(),
    }

    if command in ("quit", "exit", "q"):
        return False
    handler = handlers.get(command)
    if handler is None:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        return True

    try:
        handler(params)
    except PatrolAssignException as e:
        print(f"{Colors.FAIL}{e}{Colors.ENDC}")
    return True


def print_shell_help() -> None:
    for name, description in SHELL_COMMANDS.items():
        print(f"  {Colors.BOLD}{name:<12}{Colors.ENDC} {description}")


def _shell_move(store: PatrolStore, params: List[str]) -> None:
    if len(params) != 3:
        print(f"Usage: {SHELL_COMMANDS['move']}")
        return
    report_move(store.apply(MoveRequest(*params)))


def _shell_role(store: PatrolStore, params: List[str]) -> None:
    if len(params) != 3:
        print(f"Usage: {SHELL_COMMANDS['role']}")
        return
    store.apply(RoleChangeRequest(*params))
    print(f"Role updated. {store.state.status_message}")


def _shell_regenerate(store: PatrolStore, params: List[str]) -> None:
    if params != ["--yes"]:
        print("This discards all patrols and unsaved edits. Run 'regenerate --yes' to continue.")
        return
    result = asyncio.run(store.regenerate(confirmed=True))
    if result:
        print(f"{Colors.OKGREEN}Regenerated {len(store.patrols)} patrols.{Colors.ENDC}")
    else:
        print(f"{Colors.FAIL}{result.error_message}{Colors.ENDC}")


# ========== Parser ==========


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Assign and edit tournament patrols",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate a random roster of 40 archers on 10 targets
  patrol-assign generate --tournament spring-cup --participants 40 --patrols 10

  # Show warnings and statistics
  patrol-assign check --tournament spring-cup

  # Move a member and make someone a judge
  patrol-assign move --tournament spring-cup u001 patrol-1 patrol-2
  patrol-assign role --tournament spring-cup patrol-2 u001 judge

  # Interactive editing
  patrol-assign shell --tournament spring-cup
        """,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--tournament", required=True, help="Tournament identifier")
    common.add_argument(
        "--dir", default=".", help="Directory holding roster files (default: .)"
    )
    common.add_argument("--config", help="Load store configuration from JSON file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    gen_parser = subparsers.add_parser(
        "generate", parents=[common], help="Generate a random roster"
    )
    gen_parser.add_argument("--participants", type=int, default=24)
    gen_parser.add_argument("--patrols", type=int, default=6)
    gen_parser.add_argument(
        "--clubs", choices=[c.value for c in ClubDistribution], default="uniform"
    )
    gen_parser.add_argument("--seed", type=int, help="Random seed for reproducibility")
    gen_parser.set_defaults(func=run_generate_command)

    check_parser = subparsers.add_parser(
        "check", parents=[common], help="Show warnings and statistics"
    )
    check_parser.add_argument("--json", action="store_true", help="Print JSON")
    check_parser.add_argument(
        "--strict", action="store_true", help="Exit 1 when error warnings exist"
    )
    check_parser.set_defaults(func=run_check_command)

    move_parser = subparsers.add_parser(
        "move", parents=[common], help="Move a member to another patrol"
    )
    move_parser.add_argument("member")
    move_parser.add_argument("source")
    move_parser.add_argument("target")
    move_parser.set_defaults(func=run_move_command)

    role_parser = subparsers.add_parser(
        "role", parents=[common], help="Change a member's role"
    )
    role_parser.add_argument("patrol")
    role_parser.add_argument("member")
    role_parser.add_argument("role", choices=ROLE_CHANGES)
    role_parser.set_defaults(func=run_role_command)

    regen_parser = subparsers.add_parser(
        "regenerate", parents=[common], help="Regenerate all patrols"
    )
    regen_parser.add_argument(
        "--yes", action="store_true", help="Confirm discarding the current patrols"
    )
    regen_parser.set_defaults(func=run_regenerate_command)

    print_parser = subparsers.add_parser(
        "print", parents=[common], help="Write a printable HTML roster"
    )
    print_parser.add_argument("--output", required=True)
    print_parser.add_argument("--title")
    print_parser.add_argument("--warnings", action="store_true")
    print_parser.set_defaults(func=run_print_command)

    board_parser = subparsers.add_parser(
        "board", parents=[common], help="Open the drag-and-drop patrol board"
    )
    board_parser.set_defaults(func=run_board_command)

    shell_parser = subparsers.add_parser(
        "shell", parents=[common], help="Interactive editing session"
    )
    shell_parser.set_defaults(func=run_shell_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except PatrolAssignException as e:
        logger.error("%s", e)
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
