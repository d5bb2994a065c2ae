"""Tests for study plan parsing."""

import logging

import pytest

from degree_audit.data import StudyPlanParser
from degree_audit.errors import StudyPlanError
from degree_audit.models import Module


@pytest.fixture
def plan_parser():
    return StudyPlanParser()


class TestParse:
    def test_list_of_pairs(self, plan_parser):
        modules = plan_parser.parse([["CS1101S", 4], ["MA1521", 4]])
        assert modules == [Module("CS1101S", 4), Module("MA1521", 4)]

    def test_object_with_modules(self, plan_parser):
        modules = plan_parser.parse({"modules": [{"code": "CS1101S", "credits": 4}]})
        assert modules == [Module("CS1101S", 4)]

    def test_codes_normalised(self, plan_parser):
        assert plan_parser.parse([[" cs2040s ", 4]])[0].code == "CS2040S"

    def test_order_preserved(self, plan_parser):
        codes = [m.code for m in plan_parser.parse([["B", 4], ["A", 4], ["C", 4]])]
        assert codes == ["B", "A", "C"]

    def test_fractional_and_zero_credits(self, plan_parser):
        modules = plan_parser.parse([["A", 2.5], ["B", 0]])
        assert [m.credits for m in modules] == [2.5, 0]

    def test_duplicates_kept_with_warning(self, plan_parser, caplog):
        with caplog.at_level(logging.WARNING, logger="degree_audit.data.plan"):
            modules = plan_parser.parse([["CS2100", 4], ["CS2100", 4]])
        assert len(modules) == 2
        assert "CS2100" in caplog.text

    def test_empty_plan(self, plan_parser):
        assert plan_parser.parse([]) == []

    @pytest.mark.parametrize("plan_data", [
        "CS1101S",
        None,
        {"student": "no modules"},
        {"modules": "CS1101S"},
        [["CS1101S"]],
        [["CS1101S", 4, "extra"]],
        [["", 4]],
        [[None, 4]],
        [["CS1101S", -4]],
        [["CS1101S", "4"]],
        [["CS1101S", True]],
        [{"code": "CS1101S"}],
        [["CS1101S", float("nan")]],
        [["CS1101S", float("inf")]],
    ])
    def test_invalid(self, plan_parser, plan_data):
        with pytest.raises(StudyPlanError):
            plan_parser.parse(plan_data)


class TestLoad:
    def test_load_json(self, plan_parser, plan_file):
        modules = plan_parser.load(plan_file)
        assert [m.code for m in modules] == ["CS1101S", "CS2100", "GER1000", "CS3243"]

    def test_invalid_json(self, plan_parser, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("{not json")
        with pytest.raises(StudyPlanError, match="invalid JSON"):
            plan_parser.load(path)

    def test_not_utf8(self, plan_parser, tmp_path):
        path = tmp_path / "plan.json"
        path.write_bytes(b'[["MA1521", 4], ["\xff", 4]]')
        with pytest.raises(StudyPlanError, match="not UTF-8 text"):
            plan_parser.load(path)

    def test_nan_credits_in_file(self, plan_parser, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text('[["CS1101S", NaN]]')
        with pytest.raises(StudyPlanError, match="finite"):
            plan_parser.load(path)

    def test_missing_file(self, plan_parser, tmp_path):
        with pytest.raises(FileNotFoundError):
            plan_parser.load(tmp_path / "missing.json")
