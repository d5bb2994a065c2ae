"""
Satisfier data models.

A satisfier is a node of the evaluation tree built from a block's rules.
There are four kinds:

    AssignLeaf      moves modules from `remaining` into `assigned`
    ConstraintLeaf  checks `assigned` without changing it
    FilterLeaf      moves modules from `assigned` back into `remaining`
    Branch          runs child satisfiers in order, optionally reducing
                    their results into a single verdict

Each leaf wraps a function returning an outcome object. The optional
`context` of an outcome is copied into the SatisfierResult so that the
presentation layer can show, for example, the nested result of a
referenced block.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union


@dataclass
class AssignOutcome:
    """One boolean per remaining module; True means "assign it"."""
    remaining_mask: List[bool]
    context: Any = None


@dataclass
class ConstraintOutcome:
    is_satisfied: bool
    context: Any = None


@dataclass
class FilterOutcome:
    """One boolean per assigned module; False means "unassign it"."""
    assigned_mask: List[bool]
    context: Any = None


@dataclass
class ReduceOutcome:
    """
    Verdict of a branch over its child results.

    `message` overrides the branch's own failure message when set.
    """
    is_satisfied: bool
    context: Any = None
    message: Optional[str] = None


@dataclass
class AssignLeaf:
    ref: str
    assign: Callable[[list], AssignOutcome]
    info: Optional[str] = None
    message: Optional[str] = None


@dataclass
class ConstraintLeaf:
    ref: str
    constraint: Callable[[list], ConstraintOutcome]
    message: str
    info: Optional[str] = None


@dataclass
class FilterLeaf:
    ref: str
    filter: Callable[[list], FilterOutcome]
    info: Optional[str] = None


@dataclass
class Branch:
    """
    Runs `satisfiers` left to right, threading assigned/remaining through.

    Without `reduce` the branch only sequences its children and is always
    satisfied. With `reduce`, a False verdict reverts every change made by
    the children and reports `message`.
    """
    ref: str
    satisfiers: List["Satisfier"] = field(default_factory=list)
    reduce: Optional[Callable[[list], ReduceOutcome]] = None
    message: Optional[str] = None
    info: Optional[str] = None


Satisfier = Union[AssignLeaf, ConstraintLeaf, FilterLeaf, Branch]
