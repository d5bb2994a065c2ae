"""
Module pattern compiler.

PATTERN GRAMMAR:
----------------
A pattern is a non-empty string over A-Z, 0-9, x and *:
    - A-Z, 0-9 match themselves (case-sensitive)
    - x matches exactly one digit
    - * matches any (possibly empty) run of A-Z and 0-9

Examples:
    "CS2*"     matches CS2100, CS2040S, CS2 (but not CS1010)
    "MA1xxx*"  matches MA1100, MA1101R (but not MA110)
    "CS2040S"  matches only CS2040S

Matches are anchored: "CS2*" never matches "XCS2100".
"""

import re

from ..config import PATTERN_GRAMMAR
from ..errors import InvalidPatternError


def is_valid_pattern(pattern) -> bool:
    return isinstance(pattern, str) and re.match(PATTERN_GRAMMAR, pattern) is not None


def pattern_to_regex(pattern: str) -> str:
    """Translate one pattern into (unanchored) regular expression source."""
    if not is_valid_pattern(pattern):
        raise InvalidPatternError(
            f"pattern {pattern!r} should be a non-empty string composed of A-Z, 0-9, x or *"
        )
    return pattern.replace("x", "[0-9]").replace("*", "[A-Z0-9]*")


def compile_patterns(*patterns: str) -> "re.Pattern":
    """
    Compile one or more patterns into a single anchored regular expression.

    A module code matches the result if it matches ANY of the patterns.

    Raises:
        ValueError: if no pattern is given
        InvalidPatternError: if a pattern is outside the grammar
    """
    if not patterns:
        raise ValueError("at least one pattern is required")
    alternatives = "|".join(pattern_to_regex(p) for p in patterns)
    return re.compile(f"^(?:{alternatives})$")
