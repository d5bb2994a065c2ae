"""Tests for the match-rule evaluator."""

import pytest

from degree_audit.engines import evaluate_match_rule, match_rule_satisfier
from degree_audit.models import AndMatchRule, Module, OrMatchRule, PatternRule

PLAN = [
    Module("CS1101S", 4),
    Module("CS2100", 4),
    Module("MA1521", 4),
    Module("MA1100", 4),
    Module("GER1000", 4),
]


class TestPatternRule:
    def test_matches_in_input_order(self):
        result = evaluate_match_rule(PLAN, PatternRule("CS*"))
        assert result.matched_codes == ["CS1101S", "CS2100"]
        assert [code for code, _ in result.remaining] == ["MA1521", "MA1100", "GER1000"]

    def test_exclude(self):
        result = evaluate_match_rule(PLAN, PatternRule("MA1xxx*", exclude=["MA15xx"]))
        assert result.matched_codes == ["MA1100"]

    def test_no_match(self):
        result = evaluate_match_rule(PLAN, PatternRule("LSM*"))
        assert result.matched == []
        assert result.remaining == PLAN
        assert result.result.message == "no modules match pattern 'LSM*'"

    def test_info_only_when_matched(self):
        assert evaluate_match_rule(PLAN, PatternRule("CS*", info="cs")).infos == ["cs"]
        assert evaluate_match_rule(PLAN, PatternRule("LSM*", info="lsm")).infos == []

    def test_ref(self):
        result = evaluate_match_rule(PLAN, PatternRule("CS*"), ref="cs/match")
        assert result.result.ref == "cs/match/CS*"


class TestOrMatchRule:
    def test_earlier_rule_claims_module(self):
        rule = OrMatchRule([PatternRule("CS2*"), PatternRule("CS*")])
        result = evaluate_match_rule(PLAN, rule)
        first, second = result.result.results
        assert [m.code for m in first.added] == ["CS2100"]
        assert [m.code for m in second.added] == ["CS1101S"]
        assert result.matched_codes == ["CS2100", "CS1101S"]

    def test_list_is_or(self):
        result = evaluate_match_rule(PLAN, [PatternRule("LSM*"), PatternRule("GER*")])
        assert result.matched_codes == ["GER1000"]
        assert result.result.ref == "match/or"

    def test_nothing_matches(self):
        result = evaluate_match_rule(PLAN, [PatternRule("LSM*"), PatternRule("PC*")])
        assert result.matched == []
        assert result.result.message == "modules do not match any rule"

    def test_infos_of_matching_children_only(self):
        rule = OrMatchRule([PatternRule("CS*", info="cs"), PatternRule("LSM*", info="lsm")])
        assert evaluate_match_rule(PLAN, rule).infos == ["cs"]


class TestAndMatchRule:
    def test_all_children_must_match(self):
        rule = AndMatchRule([PatternRule("CS*"), PatternRule("LSM*")])
        result = evaluate_match_rule(PLAN, rule)
        assert result.matched == []
        assert result.remaining == PLAN
        assert result.result.message == "modules do not match all rules"

    def test_all_children_match(self):
        rule = AndMatchRule([PatternRule("CS*"), PatternRule("MA*")])
        result = evaluate_match_rule(PLAN, rule)
        assert result.matched_codes == ["CS1101S", "CS2100", "MA1521", "MA1100"]

    def test_child_refs_are_indexed(self):
        rule = AndMatchRule([PatternRule("CS*"), PatternRule("MA*")])
        result = evaluate_match_rule(PLAN, rule)
        assert [r.ref for r in result.result.results] == ["match/and/0/CS*", "match/and/1/MA*"]


class TestPartition:
    @pytest.mark.parametrize("rule", [
        PatternRule("CS*"),
        OrMatchRule([PatternRule("MA*"), PatternRule("CS2*")]),
        AndMatchRule([PatternRule("GER*"), PatternRule("LSM*")]),
    ])
    def test_matched_plus_remaining_is_input(self, rule):
        result = evaluate_match_rule(PLAN, rule)
        assert sorted(result.matched + result.remaining) == sorted(PLAN)

    def test_duplicates_both_matched(self):
        plan = [Module("CS2100", 4), Module("CS2100", 4)]
        assert evaluate_match_rule(plan, PatternRule("CS2100")).matched == plan

    def test_empty_plan(self):
        result = evaluate_match_rule([], PatternRule("CS*"))
        assert result.matched == [] and result.remaining == []

    def test_unknown_rule(self):
        with pytest.raises(TypeError):
            match_rule_satisfier("match", "CS*")
