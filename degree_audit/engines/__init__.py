"""
Requirement engines.

This package contains the pattern compiler, the match-rule and satisfier
evaluators and the block compiler that together perform the core logic of
the degree audit system.
"""

from .pattern import compile_patterns, is_valid_pattern
from .inequality import parse_inequality, inequality_satisfier
from .satisfier import evaluate_satisfier, and_branch, or_branch
from .match_rule import evaluate_match_rule, match_rule_satisfier
from .block import BlockSatisfierBuilder, build_satisfier, verify_plan

__all__ = [
    "compile_patterns",
    "is_valid_pattern",
    "parse_inequality",
    "inequality_satisfier",
    "evaluate_satisfier",
    "and_branch",
    "or_branch",
    "evaluate_match_rule",
    "match_rule_satisfier",
    "BlockSatisfierBuilder",
    "build_satisfier",
    "verify_plan",
]
