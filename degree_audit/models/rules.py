"""
Rule data models.

Requirement documents describe two kinds of rules:

MATCH RULES decide which modules are ELIGIBLE for a block:
    - PatternRule:   "CS2*", optionally with exclusions ("MA1xxx*" minus "MA15xx")
    - AndMatchRule:  every child rule must match something
    - OrMatchRule:   at least one child rule must match something

SATISFY RULES decide whether the eligible modules are ENOUGH:
    - CreditConstraint: "mc: >=8" (at least) or "mc: <=12" (at most)
    - BlockReference:   the modules must also satisfy another block
    - AndSatisfyRule / OrSatisfyRule: logical composition

Each variant is its own dataclass; the evaluators dispatch on the class,
never on which keys happen to be present.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


# =============================================================================
# MATCH RULES
# =============================================================================

@dataclass(frozen=True)
class PatternRule:
    """
    A module pattern with optional exclusions.

    A bare pattern string in a requirement document becomes a PatternRule
    with no exclusions and no info.
    """
    pattern: str
    exclude: List[str] = field(default_factory=list)
    info: Optional[str] = None


@dataclass(frozen=True)
class AndMatchRule:
    rules: List["MatchRule"]


@dataclass(frozen=True)
class OrMatchRule:
    rules: List["MatchRule"]


MatchRule = Union[PatternRule, AndMatchRule, OrMatchRule]


# =============================================================================
# INEQUALITIES
# =============================================================================

class InequalityDirection(Enum):
    """
    Direction of an MC inequality.

    AT_LEAST: ">=n" - the assigned modules must total at least n MCs
    AT_MOST:  "<=n" - only the first modules fitting in n MCs are kept
    """
    AT_LEAST = ">="
    AT_MOST = "<="


@dataclass(frozen=True)
class Inequality:
    direction: InequalityDirection
    threshold: int

    def __str__(self):
        return f"{self.direction.value}{self.threshold}"


# =============================================================================
# SATISFY RULES
# =============================================================================

@dataclass(frozen=True)
class BlockReference:
    """The assigned modules must satisfy the block with this (partial) ID."""
    block_id: str
    info: Optional[str] = None


@dataclass(frozen=True)
class CreditConstraint:
    inequality: Inequality


@dataclass(frozen=True)
class AndSatisfyRule:
    rules: List["SatisfyRule"]


@dataclass(frozen=True)
class OrSatisfyRule:
    rules: List["SatisfyRule"]


SatisfyRule = Union[BlockReference, CreditConstraint, AndSatisfyRule, OrSatisfyRule]
