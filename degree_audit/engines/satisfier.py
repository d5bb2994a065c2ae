"""
Satisfier Evaluator.

This module is the interpreter at the heart of the engine. It walks a
satisfier tree and records, for every node, how the pool of modules was
split between `assigned` and `remaining`.

THREADING:
----------
Every node receives the (assigned, remaining) state left by the node before
it and hands its own state to the node after it. Siblings are ALWAYS
evaluated left to right, so a module taken by an earlier sibling is no longer
available to later ones. This order is part of the contract: reordering
overlapping rules changes the outcome.

FAILURE:
--------
A failed leaf or branch leaves the state exactly as it found it. Nothing
partial leaks out of a failed node, but its child results stay in the tree
so the failure can still be explained.
"""

from collections import Counter

from ..models import (
    AssignLeaf,
    Branch,
    ConstraintLeaf,
    FilterLeaf,
    ReduceOutcome,
    SatisfierResult,
)


def membership_mask(modules: list, taken: list) -> list:
    """One boolean per module in `modules`, True for those in `taken` (as a multiset)."""
    budget = Counter(taken)
    mask = []
    for module in modules:
        if budget[module] > 0:
            budget[module] -= 1
            mask.append(True)
        else:
            mask.append(False)
    return mask


def _difference(modules: list, others: list) -> list:
    """Modules in `modules` but not in `others` (multiset difference, order kept)."""
    return [m for m, taken in zip(modules, membership_mask(modules, others)) if not taken]


def _check_mask(mask: list, modules: list, ref: str):
    if len(mask) != len(modules):
        raise ValueError(
            f"{ref}: mask has {len(mask)} entries for {len(modules)} modules"
        )


def _evaluate_assign(assigned: list, remaining: list, leaf: AssignLeaf) -> SatisfierResult:
    outcome = leaf.assign(remaining)
    _check_mask(outcome.remaining_mask, remaining, leaf.ref)

    added = [m for m, take in zip(remaining, outcome.remaining_mask) if take]
    if not added:
        return SatisfierResult(
            ref=leaf.ref,
            assigned=list(assigned),
            remaining=list(remaining),
            added=[],
            removed=[],
            is_satisfied=False,
            message=leaf.message,
            context=outcome.context,
        )

    return SatisfierResult(
        ref=leaf.ref,
        assigned=list(assigned) + added,
        remaining=[m for m, take in zip(remaining, outcome.remaining_mask) if not take],
        added=added,
        removed=[],
        is_satisfied=True,
        info=leaf.info,
        context=outcome.context,
    )


def _evaluate_constraint(assigned: list, remaining: list, leaf: ConstraintLeaf) -> SatisfierResult:
    outcome = leaf.constraint(assigned)
    return SatisfierResult(
        ref=leaf.ref,
        assigned=list(assigned),
        remaining=list(remaining),
        added=[],
        removed=[],
        is_satisfied=outcome.is_satisfied,
        message=None if outcome.is_satisfied else leaf.message,
        info=leaf.info if outcome.is_satisfied else None,
        context=outcome.context,
    )


def _evaluate_filter(assigned: list, remaining: list, leaf: FilterLeaf) -> SatisfierResult:
    outcome = leaf.filter(assigned)
    _check_mask(outcome.assigned_mask, assigned, leaf.ref)

    removed = [m for m, keep in zip(assigned, outcome.assigned_mask) if not keep]
    return SatisfierResult(
        ref=leaf.ref,
        assigned=[m for m, keep in zip(assigned, outcome.assigned_mask) if keep],
        remaining=list(remaining) + removed,
        added=[],
        removed=removed,
        is_satisfied=True,
        info=leaf.info,
        context=outcome.context,
    )


def _evaluate_branch(assigned: list, remaining: list, branch: Branch) -> SatisfierResult:
    results = []
    current_assigned, current_remaining = list(assigned), list(remaining)
    for satisfier in branch.satisfiers:
        result = evaluate_satisfier(current_assigned, current_remaining, satisfier)
        results.append(result)
        current_assigned, current_remaining = result.assigned, result.remaining

    if branch.reduce is not None:
        outcome = branch.reduce(results)
        if not outcome.is_satisfied:
            # Revert: the branch contributes nothing
            return SatisfierResult(
                ref=branch.ref,
                assigned=list(assigned),
                remaining=list(remaining),
                added=[],
                removed=[],
                is_satisfied=False,
                results=results,
                message=outcome.message or branch.message,
                info=branch.info,
                context=outcome.context,
            )
        context = outcome.context
    else:
        context = None

    return SatisfierResult(
        ref=branch.ref,
        assigned=list(current_assigned),
        remaining=list(current_remaining),
        added=_difference(current_assigned, assigned),
        removed=_difference(assigned, current_assigned),
        is_satisfied=True,
        results=results,
        info=branch.info,
        context=context,
    )


def evaluate_satisfier(assigned, remaining, satisfier) -> SatisfierResult:
    """
    Evaluate a satisfier tree.

    Args:
        assigned: Modules already assigned before this satisfier runs
        remaining: Modules still available for assignment
        satisfier: An AssignLeaf, ConstraintLeaf, FilterLeaf or Branch

    Returns:
        SatisfierResult tree mirroring the satisfier tree. The input lists
        are never mutated.

    Raises:
        TypeError: if `satisfier` is not one of the four satisfier kinds
    """
    if isinstance(satisfier, AssignLeaf):
        return _evaluate_assign(assigned, remaining, satisfier)
    elif isinstance(satisfier, ConstraintLeaf):
        return _evaluate_constraint(assigned, remaining, satisfier)
    elif isinstance(satisfier, FilterLeaf):
        return _evaluate_filter(assigned, remaining, satisfier)
    elif isinstance(satisfier, Branch):
        return _evaluate_branch(assigned, remaining, satisfier)
    raise TypeError(f"satisfier is not well-defined: {satisfier!r}")


# =============================================================================
# BRANCH COMBINATORS
# =============================================================================

def and_branch(ref: str, satisfiers: list, message: str, info=None) -> Branch:
    """Branch satisfied iff every child is satisfied."""
    return Branch(
        ref=ref,
        satisfiers=satisfiers,
        reduce=lambda results: ReduceOutcome(all(r.is_satisfied for r in results)),
        message=message,
        info=info,
    )


def or_branch(ref: str, satisfiers: list, message: str, info=None) -> Branch:
    """Branch satisfied iff at least one child is satisfied."""
    return Branch(
        ref=ref,
        satisfiers=satisfiers,
        reduce=lambda results: ReduceOutcome(any(r.is_satisfied for r in results)),
        message=message,
        info=info,
    )
