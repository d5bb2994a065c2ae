"""Tests for the block directory."""

import pytest

from degree_audit.data import Directory, decompose_block
from degree_audit.errors import BlockNotFoundError, DuplicateBlockError
from degree_audit.models import Block


def nested_block():
    algo = Block(name="Algorithms")
    found = Block(name="Foundation", subblocks={"algo": algo})
    return Block(name="CS", is_selectable=True, subblocks={"found": found, "breadth": Block()})


class TestDecomposeBlock:
    def test_depth_first_order(self):
        ids = [block_id for block_id, _ in decompose_block("cs", nested_block())]
        assert ids == ["cs", "cs/found", "cs/found/algo", "cs/breadth"]

    def test_subblocks_stripped(self):
        assert all(not b.subblocks for _, b in decompose_block("cs", nested_block()))

    def test_input_block_untouched(self):
        block = nested_block()
        decompose_block("cs", block)
        assert set(block.subblocks) == {"found", "breadth"}


class TestAddBlock:
    def test_registers_every_subblock(self):
        directory = Directory()
        directory.add_block("cs", nested_block())
        assert len(directory) == 4
        assert "cs/found/algo" in directory

    def test_duplicate_rejected_atomically(self):
        directory = Directory()
        directory.add_block("cs/breadth", Block())
        with pytest.raises(DuplicateBlockError, match="block 'cs/breadth' already exists"):
            directory.add_block("cs", nested_block())
        assert directory.block_ids() == ["cs/breadth"]

    def test_selectable_tracked(self):
        directory = Directory()
        directory.add_block("cs", nested_block())
        directory.add_block("ma", Block(is_selectable=True))
        assert directory.retrieve_selectable() == ["cs", "ma"]


class TestFind:
    @pytest.fixture
    def directory(self):
        directory = Directory()
        directory.add_block("cs", nested_block())
        return directory

    def test_full_id(self, directory):
        block_id, block = directory.find("", "cs/found")
        assert block_id == "cs/found"
        assert block.name == "Foundation"

    def test_relative_id(self, directory):
        assert directory.find("cs", "found")[0] == "cs/found"
        assert directory.find("cs/found", "algo")[0] == "cs/found/algo"

    def test_exact_id_wins_over_relative(self, directory):
        directory.add_block("found", Block(name="Top-level"))
        block_id, block = directory.find("cs", "found")
        assert block_id == "found"
        assert block.name == "Top-level"

    def test_missing_from_root(self, directory):
        with pytest.raises(BlockNotFoundError, match="block 'nope' does not exist"):
            directory.find("", "nope")

    def test_missing_names_both_candidates(self, directory):
        with pytest.raises(BlockNotFoundError, match="neither block 'nope' nor block 'cs/nope' exists"):
            directory.find("cs", "nope")

    def test_not_found_is_lookup_error(self, directory):
        with pytest.raises(LookupError):
            directory.find("", "nope")
