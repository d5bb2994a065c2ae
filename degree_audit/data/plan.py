"""
Study plan parsing.

This module turns a study plan file into the ordered module list the engine
evaluates.
"""

import json
import logging
import math
from collections import Counter
from numbers import Real

from ..errors import StudyPlanError
from ..models import Module

logger = logging.getLogger(__name__)


class StudyPlanParser:
    """
    Parses a study plan into an ordered list of Module objects.

    ACCEPTED FORMATS:
    -----------------
    A list of pairs:
        [["CS1101S", 4], ["CS1231S", 4]]

    Or an object with a "modules" list:
        {"student": "...", "modules": [{"code": "CS1101S", "credits": 4}]}

    ORDER MATTERS:
    --------------
    The engine assigns modules greedily in plan order, so the parser never
    sorts or deduplicates. A module listed twice stays listed twice (and
    both copies are eligible for matching); the parser only warns about it.
    """

    def parse(self, plan_data) -> list:
        """
        Parse already-loaded plan data.

        Raises:
            StudyPlanError: if the plan is malformed
        """
        if isinstance(plan_data, dict):
            entries = plan_data.get("modules")
            if not isinstance(entries, list):
                raise StudyPlanError("study plan object should have a 'modules' list")
        elif isinstance(plan_data, list):
            entries = plan_data
        else:
            raise StudyPlanError("study plan should be a list or an object")

        modules = [self._parse_module(i, entry) for i, entry in enumerate(entries)]

        duplicates = sorted(code for code, n in Counter(m.code for m in modules).items() if n > 1)
        if duplicates:
            logger.warning("Study plan lists some modules more than once: %s", ", ".join(duplicates))
        return modules

    def load(self, path) -> list:
        """Load and parse a JSON study plan file."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                plan_data = json.load(f)
            except json.JSONDecodeError as e:
                raise StudyPlanError(f"{path}: invalid JSON: {e}") from e
            except UnicodeDecodeError as e:
                raise StudyPlanError(f"{path}: not UTF-8 text: {e}") from e
        logger.info("Loaded study plan from %s", path)
        return self.parse(plan_data)

    def _parse_module(self, index: int, entry) -> Module:
        if isinstance(entry, dict):
            code, credits = entry.get("code"), entry.get("credits")
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            code, credits = entry
        else:
            raise StudyPlanError(
                f"module #{index + 1} should be a [code, credits] pair or a {{code, credits}} object"
            )

        if not isinstance(code, str) or not code.strip():
            raise StudyPlanError(f"module #{index + 1} has no code")
        if (isinstance(credits, bool) or not isinstance(credits, Real)
                or not math.isfinite(credits) or credits < 0):
            raise StudyPlanError(f"module {code} should have a non-negative, finite number of credits")
        return Module(code.strip().upper(), credits)
