"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the degree_audit package.

To create a different UI (web, PDF, etc.), create a new class with
the same method signatures but different output handling.
"""

import json

from ..models import SatisfierResult, module_codes, total_credits


class TerminalDisplay:
    """
    Pretty terminal output for verification results.

    ═══════════════════════════════════════════════════════════════════════════
    HOW TO REPLACE THIS UI
    ═══════════════════════════════════════════════════════════════════════════

    1. FOR WEB UI:
       Create a WebDisplay class with the same method signatures.
       Instead of print(), return HTML or render templates.

    2. FOR API RESPONSE:
       No new class needed: SatisfierResult.to_dict() is already JSON-ready.

    ═══════════════════════════════════════════════════════════════════════════
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"
    BG_RED = "\033[41m"

    INDENT = "    "

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def status_badge(cls, satisfied: bool) -> str:
        """Return a colored status badge."""
        if satisfied:
            return f"{cls.BG_GREEN}{cls.WHITE} ✓ SATISFIED {cls.RESET}"
        return f"{cls.BG_RED}{cls.WHITE} ✗ NOT SATISFIED {cls.RESET}"

    @staticmethod
    def _format_credits(credits) -> str:
        if isinstance(credits, float) and credits.is_integer():
            credits = int(credits)
        return f"{credits} MC"

    # =========================================================================
    # STUDY PLAN
    # =========================================================================

    @classmethod
    def print_plan(cls, modules: list):
        """Print the study plan as a two-column table."""
        cls.print_header("STUDY PLAN")
        if not modules:
            print(f"\n  {cls.DIM}(no modules){cls.RESET}")
            return

        print(f"\n  {cls.BOLD}{'MODULE':<14} {'CREDITS':>8}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 23}{cls.RESET}")
        for code, credits in modules:
            print(f"  {code:<14} {cls._format_credits(credits):>8}")
        print(f"  {cls.DIM}{'-' * 23}{cls.RESET}")
        print(f"  {cls.BOLD}{'TOTAL':<14} {cls._format_credits(total_credits(modules)):>8}{cls.RESET}")

    # =========================================================================
    # VERIFICATION RESULT
    # =========================================================================

    @classmethod
    def print_result(cls, result: SatisfierResult, depth: int = 0):
        """
        Print a result tree, one node per line.

        Each node shows its ref and whether it held; leaves that moved modules
        show which ones. Failure messages and info notes are printed under the
        node they belong to. A block reference's nested result is printed
        beneath it so the reader can see why the referenced block failed.
        """
        pad = "  " + cls.INDENT * depth
        icon = f"{cls.GREEN}✓{cls.RESET}" if result.is_satisfied else f"{cls.RED}✗{cls.RESET}"
        line = f"{pad}{icon} {cls.BOLD}{result.ref}{cls.RESET}"
        if result.added:
            line += f" {cls.DIM}+{', '.join(module_codes(result.added))}{cls.RESET}"
        if result.removed:
            line += f" {cls.YELLOW}-{', '.join(module_codes(result.removed))}{cls.RESET}"
        print(line)

        if result.info is not None and result.is_satisfied:
            print(f"{pad}  {cls.BLUE}ℹ {result.info}{cls.RESET}")
        if result.message is not None and not result.is_satisfied:
            print(f"{pad}  {cls.RED}└─ {result.message}{cls.RESET}")

        if isinstance(result.context, SatisfierResult):
            cls.print_result(result.context, depth + 1)
        for child in result.results:
            cls.print_result(child, depth + 1)

    @classmethod
    def print_summary(cls, result: SatisfierResult):
        """Print the verdict, the modules used and the notes that apply."""
        cls.print_header(f"VERIFICATION: {result.ref.upper()}")

        print(f"\n  {cls.BOLD}Overall Status:{cls.RESET} {cls.status_badge(result.is_satisfied)}")
        print(
            f"  {cls.BOLD}Modules Used:{cls.RESET} {len(result.assigned)} "
            f"({cls._format_credits(result.assigned_credits)})"
        )
        if result.assigned:
            print(f"    {cls.GREEN}{', '.join(module_codes(result.assigned))}{cls.RESET}")
        if result.remaining:
            print(f"  {cls.BOLD}Unused:{cls.RESET} {cls.DIM}{', '.join(module_codes(result.remaining))}{cls.RESET}")

        failures = result.failure_messages()
        if failures:
            cls.print_subheader("Why It Failed")
            for ref, message in failures:
                print(f"  {cls.RED}✗{cls.RESET} {ref}: {message}")

        infos = result.infos()
        if infos:
            cls.print_subheader("Notes")
            for info in infos:
                print(f"  {cls.BLUE}ℹ{cls.RESET} {info}")

    # =========================================================================
    # LISTINGS
    # =========================================================================

    @classmethod
    def print_selectable(cls, block_class: str, block_ids: list):
        """Print the blocks a student may choose from."""
        cls.print_header(f"SELECTABLE BLOCKS: {block_class.upper()}")
        if not block_ids:
            print(f"\n  {cls.DIM}(none){cls.RESET}")
            return
        print()
        for i, block_id in enumerate(block_ids, 1):
            print(f"  {cls.BOLD}{i:>3}.{cls.RESET} {block_id}")

    @classmethod
    def print_fetch_report(cls, report):
        """Print the outcome of a requirement sync."""
        cls.print_header("REQUIREMENT SYNC")
        print(f"\n  {cls.GREEN}Downloaded:{cls.RESET} {len(report.downloaded)}")
        print(f"  {cls.DIM}Skipped:{cls.RESET} {len(report.skipped)}")
        print(f"  {cls.RED}Failed:{cls.RESET} {len(report.failed)}")
        for path, reason in report.failed.items():
            print(f"    {cls.RED}✗{cls.RESET} {path}: {reason}")

    @staticmethod
    def print_json(data):
        """Print plain data as indented JSON (no colours, safe to pipe)."""
        print(json.dumps(data, indent=2))

    @classmethod
    def print_error(cls, message: str):
        print(f"\n  {cls.RED}Error: {message}{cls.RESET}")
