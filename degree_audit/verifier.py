"""
Plan Verifier - Main Orchestrator.

This module contains the PlanVerifier class that connects the requirement
engine to the presentation layer.

NOTE: Don't run this file directly. Run from the project root:
    python3 -m degree_audit verify plan.json --class primary
"""

import logging

from .config import REQUIREMENTS_DIR
from .data import RequirementLoader, StudyPlanParser
from .engines import verify_plan
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)


class PlanVerifier:
    """
    Main interface for the degree audit system.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    This class connects the Engine layer to the Presentation layer:

    1. Receives user input (study plan, block class, block ID)
    2. Calls the engine to get a SatisfierResult tree (pure data)
    3. Passes that data to the Presentation layer for display

    TO CHANGE THE UI:
    -----------------
    Pass a different display object:
        verifier = PlanVerifier(display=WebDisplay())

    Or skip display entirely and use verify(), which never prints:
        result = verifier.verify(modules, "primary", "cs-hons-2020")
        return result.to_dict()

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        verifier = PlanVerifier()

        # Verify a plan file with terminal display
        result = verifier.run_verification(
            plan_path="plan.json",
            block_class="primary",
            block_id="cs-hons-2020",
        )

        # Or just query the available blocks (no display needed)
        verifier.list_selectable("primary")
    """

    def __init__(self, requirements_dir=None, display=None):
        self.loader = RequirementLoader(requirements_dir or REQUIREMENTS_DIR)
        self.plan_parser = StudyPlanParser()
        self.display = display if display is not None else TerminalDisplay()

    def directory(self, block_class: str):
        """Directory of every block in a block class (loaded once)."""
        return self.loader.load_directory(block_class)

    def verify(self, modules: list, block_class: str, block_id: str):
        """
        Verify already-parsed modules against a block. Never prints.

        Raises:
            BlockNotFoundError: if the block (or a block it refers to) is missing
            BlockCycleError: if the block refers to itself
        """
        result = verify_plan(modules, self.directory(block_class), block_id)
        logger.info(
            "Verified %d module(s) against %s/%s: %s",
            len(modules), block_class, block_id,
            "satisfied" if result.is_satisfied else "not satisfied",
        )
        return result

    def run_verification(self, plan_path: str, block_class: str, block_id: str,
                         as_json: bool = False):
        """
        Run a complete verification and display results.

        Args:
            plan_path: Path to the study plan JSON file
            block_class: "primary", "second" or "minor"
            block_id: Full ID of the block to verify against
            as_json: Print the result tree as JSON instead of the terminal view

        Returns:
            The root SatisfierResult
        """
        # STEP 1: Load and parse the study plan
        modules = self.plan_parser.load(plan_path)

        # STEP 2: Evaluate
        result = self.verify(modules, block_class, block_id)

        # STEP 3: Display
        if as_json:
            self.display.print_json(result.to_dict())
        else:
            self.display.print_plan(modules)
            self.display.print_summary(result)
            self.display.print_subheader("Requirement Tree")
            self.display.print_result(result)
        return result

    def list_selectable(self, block_class: str) -> list:
        """List the blocks of a class that a student may pick."""
        return self.directory(block_class).retrieve_selectable()
