"""
Command-Line Interface for the Degree Audit System.

This module provides the CLI for verifying study plans. It handles user
input and orchestrates the display of results.

COMMANDS:
---------
1. verify: Check a study plan against a requirement block
2. list:   Show the blocks a student may pick in a block class
3. fetch:  Mirror requirement documents from a remote repository

NOTE: Don't run this file directly. Run from the project root:
    python3 -m degree_audit verify plan.json --class primary
"""

import argparse
import logging
import sys

from .config import BLOCK_CLASSES, REQUIREMENTS_DIR
from .data import RequirementFetcher
from .errors import DegreeAuditError
from .ui import TerminalDisplay
from .verifier import PlanVerifier

logger = logging.getLogger(__name__)

EXIT_SATISFIED = 0
EXIT_NOT_SATISFIED = 1
EXIT_ERROR = 2


def setup_argparse(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="degree-audit",
        description="Verify study plans against degree requirement blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  degree-audit list --class primary
  degree-audit verify plan.json --class primary --block cs-hons-2020
  degree-audit verify plan.json --class minor          # pick interactively
  degree-audit fetch https://example.org/requirements
        """
    )
    parser.add_argument(
        "--requirements-dir",
        default=str(REQUIREMENTS_DIR),
        help="Directory holding the requirement documents (default: %(default)s)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Verbose mode: INFO logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.required = True

    verify = subparsers.add_parser("verify", help="Verify a study plan against a block")
    verify.add_argument("plan", help="Study plan JSON file")
    verify.add_argument("--class", dest="block_class", choices=BLOCK_CLASSES, required=True)
    verify.add_argument("--block", dest="block_id", help="Block ID (omit to pick interactively)")
    verify.add_argument("--json", dest="as_json", action="store_true", help="Print the result as JSON")

    list_cmd = subparsers.add_parser("list", help="List selectable blocks")
    list_cmd.add_argument("--class", dest="block_class", choices=BLOCK_CLASSES, required=True)

    fetch = subparsers.add_parser("fetch", help="Sync requirement documents from a mirror")
    fetch.add_argument("base_url", help="URL of the directory holding index.json")
    fetch.add_argument("--overwrite", action="store_true", help="Re-download existing documents")

    return parser.parse_args(argv)


def _select_block(verifier: PlanVerifier, block_class: str):
    """
    Let the user pick one of the selectable blocks interactively.

    Returns:
        The chosen block ID, or None if nothing was chosen
    """
    block_ids = verifier.list_selectable(block_class)
    TerminalDisplay.print_selectable(block_class, block_ids)
    if not block_ids:
        return None

    try:
        choice = input(f"\n  Enter number (1-{len(block_ids)}) or block ID: ").strip()
    except EOFError:
        return None

    if choice.isdigit():
        index = int(choice) - 1
        return block_ids[index] if 0 <= index < len(block_ids) else None
    return choice or None


def _run_verify(args) -> int:
    verifier = PlanVerifier(requirements_dir=args.requirements_dir)
    block_id = args.block_id or _select_block(verifier, args.block_class)
    if block_id is None:
        TerminalDisplay.print_error("no block selected")
        return EXIT_ERROR

    result = verifier.run_verification(args.plan, args.block_class, block_id, as_json=args.as_json)
    return EXIT_SATISFIED if result.is_satisfied else EXIT_NOT_SATISFIED


def _run_list(args) -> int:
    verifier = PlanVerifier(requirements_dir=args.requirements_dir)
    TerminalDisplay.print_selectable(args.block_class, verifier.list_selectable(args.block_class))
    return EXIT_SATISFIED


def _run_fetch(args) -> int:
    fetcher = RequirementFetcher(args.base_url, args.requirements_dir)
    report = fetcher.sync(overwrite=args.overwrite)
    TerminalDisplay.print_fetch_report(report)
    return EXIT_SATISFIED if report.ok else EXIT_NOT_SATISFIED


COMMANDS = {
    "verify": _run_verify,
    "list": _run_list,
    "fetch": _run_fetch,
}


def main(argv=None) -> int:
    """
    Command-line interface for the degree audit system.

    Exit codes: 0 satisfied (or success), 1 not satisfied (or failed
    downloads), 2 invalid requirements, plan or input.
    """
    args = setup_argparse(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return COMMANDS[args.command](args)
    except (DegreeAuditError, FileNotFoundError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        TerminalDisplay.print_error(str(e))
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
