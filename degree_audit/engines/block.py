"""
Block-to-Satisfier Compiler.

This module builds the satisfier tree for a block and provides
verify_plan(), the entry point for checking a study plan.

BLOCK EVALUATION ORDER:
-----------------------
A block's satisfier is a branch with up to three children, always in this
order:

    1. ASSIGN  - for every block listed under `assign`, evaluate that block
                 and pull the modules it assigned into this block's pool.
    2. MATCH   - pull every remaining module eligible under `match` into
                 the pool.
    3. SATISFY - check the pool against `satisfy` (MC inequalities, other
                 blocks, and/or combinations). "<=n" rules may shrink the
                 pool; everything else only checks it.

The block is satisfied iff it has no `satisfy` clause or that clause is
satisfied. ASSIGN and MATCH never fail a block on their own.

BLOCK REFERENCES:
-----------------
A satisfy rule naming another block evaluates that block's full satisfier
over the modules assigned so far, and succeeds iff that block is satisfied.
References are resolved relative to the referring block, so "found" inside
"cs-hons-2020" finds "cs-hons-2020/found" when no top-level "found" exists.

Satisfiers are built eagerly, so every reference is resolved (and cycles are
detected) before any module is evaluated.
"""

from ..config import ROOT_PREFIX
from ..errors import BlockCycleError
from ..models import (
    AndSatisfyRule,
    AssignLeaf,
    AssignOutcome,
    BlockReference,
    Branch,
    ConstraintLeaf,
    ConstraintOutcome,
    CreditConstraint,
    Module,
    OrSatisfyRule,
    ReduceOutcome,
    SatisfierResult,
)
from .inequality import inequality_satisfier
from .match_rule import match_rule_satisfier
from .satisfier import and_branch, evaluate_satisfier, membership_mask, or_branch


class BlockSatisfierBuilder:
    """
    Compiles blocks of a Directory into satisfier trees.

    The builder keeps the chain of block IDs currently being compiled; a
    block appearing twice in that chain would recurse forever, so it is
    rejected with BlockCycleError.
    """

    def __init__(self, directory):
        self.directory = directory

    def build(self, prefix: str, ref: str, block_id: str, chain: tuple = ()) -> Branch:
        full_id, block = self.directory.find(prefix, block_id)
        if full_id in chain:
            cycle = " -> ".join(chain[chain.index(full_id):] + (full_id,))
            raise BlockCycleError(f"block '{full_id}' refers to itself: {cycle}")
        chain = chain + (full_id,)

        satisfiers = []
        if block.assign:
            satisfiers.append(self._assign_satisfier(full_id, f"{ref}/assign", block.assign, chain))
        if block.match is not None:
            satisfiers.append(match_rule_satisfier(f"{ref}/match", block.match))

        satisfy_index = None
        if block.satisfy is not None:
            satisfy_index = len(satisfiers)
            satisfiers.append(
                self.satisfy_rule_satisfier(full_id, f"{ref}/satisfy", block.satisfy, chain)
            )

        def reduce(results):
            if satisfy_index is None:
                return ReduceOutcome(is_satisfied=True)
            satisfy_result = results[satisfy_index]
            return ReduceOutcome(
                is_satisfied=satisfy_result.is_satisfied,
                message=satisfy_result.message,
            )

        return Branch(
            ref=ref,
            satisfiers=satisfiers,
            reduce=reduce,
            message=f"modules do not satisfy block '{full_id}'",
            info=block.info,
        )

    # =========================================================================
    # ASSIGN
    # =========================================================================

    def _assign_satisfier(self, prefix: str, ref: str, block_ids: list, chain: tuple) -> Branch:
        """Sequence one relocating leaf per assigned block; never fails."""
        return Branch(
            ref=ref,
            satisfiers=[
                self._assign_leaf(prefix, f"{ref}/{block_id}", block_id, chain)
                for block_id in block_ids
            ],
        )

    def _assign_leaf(self, prefix: str, ref: str, block_id: str, chain: tuple) -> AssignLeaf:
        satisfier = self.build(prefix, ref, block_id, chain)

        def assign(remaining):
            result = evaluate_satisfier([], remaining, satisfier)
            return AssignOutcome(
                remaining_mask=membership_mask(remaining, result.assigned),
                context=result,
            )

        return AssignLeaf(
            ref=ref,
            assign=assign,
            message=f"block '{block_id}' assigned no modules",
        )

    # =========================================================================
    # SATISFY
    # =========================================================================

    def satisfy_rule_satisfier(self, prefix: str, ref: str, rule, chain: tuple = ()):
        """
        Build the satisfier for a satisfy rule (or a list of them).

        Raises:
            TypeError: if `rule` is not a satisfy rule
        """
        if isinstance(rule, list):
            return self.satisfy_rule_satisfier(prefix, ref, AndSatisfyRule(rules=rule), chain)
        elif isinstance(rule, BlockReference):
            return self._block_reference_satisfier(prefix, f"{ref}/{rule.block_id}", rule, chain)
        elif isinstance(rule, CreditConstraint):
            return inequality_satisfier(f"{ref}/mc", rule.inequality)
        elif isinstance(rule, AndSatisfyRule):
            and_ref = f"{ref}/and"
            return and_branch(
                and_ref,
                [
                    self.satisfy_rule_satisfier(prefix, f"{and_ref}/{i}", r, chain)
                    for i, r in enumerate(rule.rules)
                ],
                message="modules were not satisfied by all rules",
            )
        elif isinstance(rule, OrSatisfyRule):
            or_ref = f"{ref}/or"
            return or_branch(
                or_ref,
                [
                    self.satisfy_rule_satisfier(prefix, f"{or_ref}/{i}", r, chain)
                    for i, r in enumerate(rule.rules)
                ],
                message="modules were not satisfied by any rule",
            )
        raise TypeError(f"satisfy rule is not well-defined: {rule!r}")

    def _block_reference_satisfier(self, prefix: str, ref: str, rule: BlockReference,
                                   chain: tuple) -> ConstraintLeaf:
        satisfier = self.build(prefix, ref, rule.block_id, chain)

        def constraint(assigned):
            result = evaluate_satisfier([], assigned, satisfier)
            return ConstraintOutcome(is_satisfied=result.is_satisfied, context=result)

        return ConstraintLeaf(
            ref=ref,
            constraint=constraint,
            message=f"modules do not satisfy block '{rule.block_id}'",
            info=rule.info,
        )


def build_satisfier(prefix: str, directory, ref: str, block_id: str) -> Branch:
    """
    Build the satisfier tree of a block.

    Args:
        prefix: Full ID of the referring block, or ROOT_PREFIX
        directory: Directory holding the block and everything it refers to
        ref: Reference string for the root of the result tree
        block_id: Full or `prefix`-relative ID of the block

    Raises:
        BlockNotFoundError: if the block or a block it refers to is missing
        BlockCycleError: if the block refers to itself
    """
    return BlockSatisfierBuilder(directory).build(prefix, ref, block_id)


def verify_plan(modules, directory, block_id: str) -> SatisfierResult:
    """
    Check a study plan against a block.

    Args:
        modules: Ordered list of (code, credits) pairs in the study plan
        directory: Directory containing the block
        block_id: Full ID of the block to check against

    Returns:
        SatisfierResult tree; `is_satisfied` on the root is the verdict and
        `assigned` holds the modules consumed by the block.
    """
    plan = [Module(code, credits) for code, credits in modules]
    satisfier = build_satisfier(ROOT_PREFIX, directory, block_id, block_id)
    return evaluate_satisfier([], plan, satisfier)
