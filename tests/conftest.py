"""Shared test fixtures for degree_audit."""

import textwrap

import pytest

from degree_audit.data import Directory, RequirementParser
from degree_audit.models import Module


@pytest.fixture
def cs_modules():
    return [Module("CS2100", 4), Module("CS2040S", 4), Module("GER1000", 4)]


@pytest.fixture
def parser():
    return RequirementParser()


@pytest.fixture
def make_directory(parser):
    """Build a Directory from {block_id: document} mappings."""
    def _make(documents):
        directory = Directory()
        for block_id, contents in documents.items():
            directory.add_block(block_id, parser.parse_block(contents, block_id))
        return directory
    return _make


@pytest.fixture
def cs_directory(make_directory):
    return make_directory({"cs": {"match": "CS2*", "satisfy": {"mc": ">=8"}}})


@pytest.fixture
def requirements_dir(tmp_path):
    """A small requirements tree with one document per block class."""
    root = tmp_path / "requirements"
    (root / "primary" / "cs-hons-2020").mkdir(parents=True)
    (root / "minor").mkdir()

    (root / "primary" / "cs-hons-2020.yml").write_text(textwrap.dedent("""\
        name: Computer Science (Honours)
        isSelectable: true
        assign: [core, ulr-2015]
        satisfy:
          - core
          - mc: ">=12"
        core:
          match: ["CS1101S", "CS2*"]
          satisfy:
            mc: ">=8"
    """))
    (root / "primary" / "ulr-2015.yml").write_text(textwrap.dedent("""\
        name: University Level Requirements
        match: GER1000
    """))
    (root / "primary" / "cs-hons-2020" / "cs-hons-2020-ai.yaml").write_text(textwrap.dedent("""\
        isSelectable: true
        assign: cs-hons-2020
        match: CS3243
        satisfy:
          - cs-hons-2020
          - mc: ">=16"
    """))
    (root / "minor" / "ma-2019.yml").write_text(textwrap.dedent("""\
        isSelectable: true
        match: MA*
        satisfy:
          mc: 8
    """))
    (root / "primary" / "README.txt").write_text("not a requirement document\n")
    return root


@pytest.fixture
def plan_file(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text(
        '{"student": "Test", "modules": ['
        '{"code": "CS1101S", "credits": 4}, '
        '{"code": "cs2100 ", "credits": 4}, '
        '{"code": "GER1000", "credits": 4}, '
        '{"code": "CS3243", "credits": 4}]}'
    )
    return path
