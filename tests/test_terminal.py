"""Tests for terminal rendering."""

import json

from degree_audit.data import FetchReport
from degree_audit.engines import verify_plan
from degree_audit.ui import TerminalDisplay


class TestStatusBadge:
    def test_satisfied(self):
        assert "SATISFIED" in TerminalDisplay.status_badge(True)
        assert "NOT" not in TerminalDisplay.status_badge(True)

    def test_not_satisfied(self):
        assert "NOT SATISFIED" in TerminalDisplay.status_badge(False)


class TestPrintPlan:
    def test_lists_modules_and_total(self, capsys, cs_modules):
        TerminalDisplay.print_plan(cs_modules)
        out = capsys.readouterr().out
        assert "CS2040S" in out
        assert "12 MC" in out

    def test_empty(self, capsys):
        TerminalDisplay.print_plan([])
        assert "(no modules)" in capsys.readouterr().out


class TestPrintResult:
    def test_summary_of_failure(self, capsys, cs_directory):
        result = verify_plan([("CS2100", 4), ("GER1000", 4)], cs_directory, "cs")
        TerminalDisplay.print_summary(result)
        out = capsys.readouterr().out
        assert "VERIFICATION: CS" in out
        assert "NOT SATISFIED" in out
        assert "modules do not meet minimum MC requirement of 8" in out

    def test_tree_shows_every_node(self, capsys, cs_directory, cs_modules):
        TerminalDisplay.print_result(verify_plan(cs_modules, cs_directory, "cs"))
        out = capsys.readouterr().out
        assert "cs/match/CS2*" in out
        assert "cs/satisfy/mc" in out
        assert "+CS2100, CS2040S" in out

    def test_tree_includes_referenced_block(self, capsys, make_directory):
        directory = make_directory({
            "cs": {"match": "CS*", "satisfy": "core", "core": {"match": "CS2*"}},
        })
        TerminalDisplay.print_result(verify_plan([("CS2100", 4)], directory, "cs"))
        out = capsys.readouterr().out
        assert "cs/satisfy/core/match/CS2*" in out

    def test_notes(self, capsys, make_directory, cs_modules):
        directory = make_directory({"cs": {"info": "Check the handbook", "match": "CS*"}})
        TerminalDisplay.print_summary(verify_plan(cs_modules, directory, "cs"))
        assert "Check the handbook" in capsys.readouterr().out


class TestListings:
    def test_selectable(self, capsys):
        TerminalDisplay.print_selectable("primary", ["cs-hons-2020", "ulr-2015"])
        out = capsys.readouterr().out
        assert "SELECTABLE BLOCKS: PRIMARY" in out
        assert "2." in out and "ulr-2015" in out

    def test_selectable_empty(self, capsys):
        TerminalDisplay.print_selectable("minor", [])
        assert "(none)" in capsys.readouterr().out

    def test_fetch_report(self, capsys):
        report = FetchReport(downloaded=["a.yml"], failed={"b.yml": "HTTP 404"})
        TerminalDisplay.print_fetch_report(report)
        out = capsys.readouterr().out
        assert "b.yml: HTTP 404" in out

    def test_json(self, capsys):
        TerminalDisplay.print_json({"isSatisfied": True})
        assert json.loads(capsys.readouterr().out) == {"isSatisfied": True}
