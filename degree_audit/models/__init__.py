"""
Data models for the degree audit system.

This package contains all dataclasses and enums used throughout the system.
These serve as "contracts" between different parts of the system.
"""

from .module import Module, module_codes, total_credits
from .rules import (
    PatternRule,
    AndMatchRule,
    OrMatchRule,
    MatchRule,
    InequalityDirection,
    Inequality,
    BlockReference,
    CreditConstraint,
    AndSatisfyRule,
    OrSatisfyRule,
    SatisfyRule,
)
from .block import Block
from .satisfier import (
    AssignOutcome,
    ConstraintOutcome,
    FilterOutcome,
    ReduceOutcome,
    AssignLeaf,
    ConstraintLeaf,
    FilterLeaf,
    Branch,
    Satisfier,
)
from .result import SatisfierResult, MatchResult

__all__ = [
    # Module models
    "Module",
    "module_codes",
    "total_credits",
    # Rules
    "PatternRule",
    "AndMatchRule",
    "OrMatchRule",
    "MatchRule",
    "InequalityDirection",
    "Inequality",
    "BlockReference",
    "CreditConstraint",
    "AndSatisfyRule",
    "OrSatisfyRule",
    "SatisfyRule",
    # Blocks
    "Block",
    # Satisfiers
    "AssignOutcome",
    "ConstraintOutcome",
    "FilterOutcome",
    "ReduceOutcome",
    "AssignLeaf",
    "ConstraintLeaf",
    "FilterLeaf",
    "Branch",
    "Satisfier",
    # Results
    "SatisfierResult",
    "MatchResult",
]
