"""
Evaluation result data models.

Contains the dataclasses returned by the satisfier and match-rule evaluators.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional

from .module import module_codes, total_credits


@dataclass
class SatisfierResult:
    """
    Result of evaluating a single satisfier.

    Results form a tree shaped exactly like the satisfier tree, so a UI can
    explain at every level of the requirement hierarchy why a plan passed or
    failed.

    Example for a block {match: "CS2*", satisfy: {mc: ">=8"}}:
        ref: "cs-core"
        assigned: [("CS2100", 4), ("CS2040S", 4)]
        remaining: [("GER1000", 4)]
        added: [("CS2100", 4), ("CS2040S", 4)]
        removed: []
        is_satisfied: True
        results: [<match result>, <satisfy result>]
    """
    ref: str
    assigned: list               # Modules assigned after this node ran
    remaining: list              # Modules still unassigned after this node ran
    added: list                  # Modules this node moved into `assigned`
    removed: list                # Modules this node moved out of `assigned`
    is_satisfied: bool
    results: List["SatisfierResult"] = field(default_factory=list)
    message: Optional[str] = None  # Why the node failed (only when unsatisfied)
    info: Optional[str] = None     # Note attached by the requirement author
    context: Any = None            # Extra data, e.g. a referenced block's result

    @property
    def assigned_credits(self):
        return total_credits(self.assigned)

    def walk(self) -> Iterator["SatisfierResult"]:
        """Yield this result and all nested results, depth first."""
        yield self
        for result in self.results:
            yield from result.walk()

    def infos(self) -> list:
        """
        Collect the info strings that still apply, in evaluation order.

        An unsatisfied node reverted its changes, so neither its info nor
        the infos of its children are collected.
        """
        if not self.is_satisfied:
            return []
        infos = [] if self.info is None else [self.info]
        for result in self.results:
            infos.extend(result.infos())
        return infos

    def failure_messages(self) -> list:
        """Collect (ref, message) pairs of every unsatisfied node."""
        return [
            (r.ref, r.message)
            for r in self.walk()
            if not r.is_satisfied and r.message is not None
        ]

    def to_dict(self) -> dict:
        """Convert to plain JSON-serialisable data."""
        data = {
            "ref": self.ref,
            "isSatisfied": self.is_satisfied,
            "assigned": [list(m) for m in self.assigned],
            "remaining": [list(m) for m in self.remaining],
            "added": [list(m) for m in self.added],
            "removed": [list(m) for m in self.removed],
            "results": [r.to_dict() for r in self.results],
        }
        if self.message is not None:
            data["message"] = self.message
        if self.info is not None:
            data["info"] = self.info
        if isinstance(self.context, SatisfierResult):
            data["context"] = self.context.to_dict()
        return data


@dataclass
class MatchResult:
    """
    Result of partitioning a module list with a match rule.

    Attributes:
        matched: Modules eligible under the rule, in the order they matched
        remaining: Modules not matched, in input order
        infos: Info notes of every rule that matched at least one module
        result: Full satisfier result tree, for explanation
    """
    matched: list
    remaining: list
    infos: list
    result: Optional[SatisfierResult] = None

    @property
    def matched_codes(self) -> list:
        return module_codes(self.matched)
