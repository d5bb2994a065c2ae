"""
MC Inequalities.

Credit rules come in two flavors that behave very differently:

AT LEAST (">=n"): a CONSTRAINT. It only checks that the assigned modules
                  total at least n MCs and never moves a module.

AT MOST ("<=n"):  a FILTER. It keeps the assigned modules, in the order they
                  were assigned, for as long as they fit within n MCs. The
                  first module that does not fit, and every module after it,
                  goes back to the remaining pool. It never fails.

Example for "<=6" over [(A, 4), (B, 4), (C, 4)]:
    A fits (4 <= 6), B does not (8 > 6) -> keep [A], return [B, C]
"""

import re

from ..config import INEQUALITY_GRAMMAR
from ..errors import InvalidInequalityError
from ..models import (
    ConstraintLeaf,
    ConstraintOutcome,
    FilterLeaf,
    FilterOutcome,
    Inequality,
    InequalityDirection,
    total_credits,
)


def parse_inequality(text) -> Inequality:
    """
    Parse ">=n" or "<=n".

    Raises:
        InvalidInequalityError: if `text` is not of either form
    """
    match = re.match(INEQUALITY_GRAMMAR, text) if isinstance(text, str) else None
    if match is None:
        raise InvalidInequalityError(
            f"inequality {text!r} is invalid; only '>=n' and '<=n' are allowed"
        )
    sign, threshold = match.groups()
    return Inequality(direction=InequalityDirection(sign), threshold=int(threshold))


def at_least_satisfier(ref: str, threshold: int) -> ConstraintLeaf:
    return ConstraintLeaf(
        ref=ref,
        constraint=lambda assigned: ConstraintOutcome(
            is_satisfied=total_credits(assigned) >= threshold
        ),
        message=f"modules do not meet minimum MC requirement of {threshold}",
    )


def at_most_mask(assigned, threshold: int) -> list:
    """Keep-mask truncating `assigned` at the first module exceeding the budget."""
    mask = []
    total = 0
    exceeded = False
    for _, credits in assigned:
        if not exceeded and total + credits <= threshold:
            total += credits
            mask.append(True)
        else:
            exceeded = True
            mask.append(False)
    return mask


def at_most_satisfier(ref: str, threshold: int) -> FilterLeaf:
    return FilterLeaf(
        ref=ref,
        filter=lambda assigned: FilterOutcome(
            assigned_mask=at_most_mask(assigned, threshold)
        ),
    )


def inequality_satisfier(ref: str, inequality):
    """
    Build the satisfier for an inequality (or its string form).
    """
    if isinstance(inequality, str):
        inequality = parse_inequality(inequality)
    if inequality.direction == InequalityDirection.AT_LEAST:
        return at_least_satisfier(ref, inequality.threshold)
    return at_most_satisfier(ref, inequality.threshold)
