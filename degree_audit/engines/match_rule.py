"""
Match-Rule Evaluator.

This module turns match rules into satisfiers and partitions module lists
into matched / remaining.

MATCH RULE LOGIC:
-----------------
PatternRule: every remaining module whose code matches the pattern (and no
             exclude pattern) is matched. Fails if nothing matched.

AndMatchRule: children run left to right, each one only seeing what the
              previous children left unmatched. Every child must match at
              least one module, otherwise the whole rule matches nothing.

OrMatchRule:  same threading, but one matching child is enough.

A list of rules is treated as an OrMatchRule.

Because children consume modules as they go, order matters. With
    or: ["CS2*", "CS*"]
CS2100 is attributed to "CS2*", never to "CS*".
"""

from ..models import (
    AndMatchRule,
    AssignLeaf,
    AssignOutcome,
    MatchResult,
    OrMatchRule,
    PatternRule,
)
from .pattern import compile_patterns
from .satisfier import and_branch, evaluate_satisfier, or_branch


def pattern_rule_satisfier(ref: str, rule: PatternRule) -> AssignLeaf:
    """
    Build an assign leaf taking every remaining module matching `rule`.

    The leaf's info is only reported when at least one module matched, so
    notes about irrelevant rules never reach the user.
    """
    regex = compile_patterns(rule.pattern)
    exclude_regex = compile_patterns(*rule.exclude) if rule.exclude else None

    def is_match(code: str) -> bool:
        if not regex.match(code):
            return False
        return exclude_regex is None or not exclude_regex.match(code)

    return AssignLeaf(
        ref=f"{ref}/{rule.pattern}",
        assign=lambda remaining: AssignOutcome(
            remaining_mask=[is_match(code) for code, _ in remaining]
        ),
        info=rule.info,
        message=f"no modules match pattern '{rule.pattern}'",
    )


def match_rule_satisfier(ref: str, rule):
    """
    Build the satisfier for a match rule (or a list of match rules).

    Raises:
        TypeError: if `rule` is not a match rule
    """
    if isinstance(rule, list):
        return match_rule_satisfier(ref, OrMatchRule(rules=rule))
    elif isinstance(rule, PatternRule):
        return pattern_rule_satisfier(ref, rule)
    elif isinstance(rule, AndMatchRule):
        and_ref = f"{ref}/and"
        return and_branch(
            and_ref,
            [match_rule_satisfier(f"{and_ref}/{i}", r) for i, r in enumerate(rule.rules)],
            message="modules do not match all rules",
        )
    elif isinstance(rule, OrMatchRule):
        or_ref = f"{ref}/or"
        return or_branch(
            or_ref,
            [match_rule_satisfier(f"{or_ref}/{i}", r) for i, r in enumerate(rule.rules)],
            message="modules do not match any rule",
        )
    raise TypeError(f"match rule is not well-defined: {rule!r}")


def evaluate_match_rule(modules, rule, ref: str = "match") -> MatchResult:
    """
    Partition `modules` into those matched by `rule` and the rest.

    Args:
        modules: Ordered list of (code, credits) pairs
        rule: A match rule or a list of match rules
        ref: Reference prefix used in the result tree

    Returns:
        MatchResult whose `matched` and `remaining` together hold exactly
        the input modules.
    """
    result = evaluate_satisfier([], list(modules), match_rule_satisfier(ref, rule))
    return MatchResult(
        matched=result.assigned,
        remaining=result.remaining,
        infos=result.infos(),
        result=result,
    )
