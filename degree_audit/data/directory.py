"""
Block directory.

This module flattens hierarchical requirement blocks into a single
namespace of slash-separated block IDs and resolves references to them.
"""

import logging

from ..config import ROOT_PREFIX, join_block_id
from ..errors import BlockNotFoundError, DuplicateBlockError
from ..models import Block

logger = logging.getLogger(__name__)


def decompose_block(prefix: str, block: Block) -> list:
    """
    Flatten a block and its subblocks into (block_id, block) pairs.

    The parent comes first, followed by each subblock (depth first, in
    document order). Every returned block has its subblocks stripped.

    Example for prefix "cs" and a block with subblocks "found" and
    "found/algo":
        [("cs", ...), ("cs/found", ...), ("cs/found/algo", ...)]
    """
    entries = [(prefix, block.without_subblocks())]
    for name, subblock in block.subblocks.items():
        entries.extend(decompose_block(join_block_id(prefix, name), subblock))
    return entries


class Directory:
    """
    Registry of all blocks loaded for one block class.

    FLATTENING:
    -----------
    Adding the block "cs-hons-2020" with subblocks "found" and "breadth"
    registers three entries:
        cs-hons-2020, cs-hons-2020/found, cs-hons-2020/breadth

    Every block ID is unique; registering one twice is an error.

    RESOLUTION:
    -----------
    Blocks refer to each other with full or partial IDs. find(prefix, id)
    first tries `id` as a full ID, then `id` relative to `prefix`:
        find("cs-hons-2020", "found")  ->  "found" if it exists,
                                           else "cs-hons-2020/found"

    Usage:
        directory = Directory()
        directory.add_block("cs-hons-2020", block)
        block_id, block = directory.find("cs-hons-2020", "found")
    """

    def __init__(self):
        self._blocks = {}
        self._selectable = []

    def add_block(self, prefix: str, block: Block) -> None:
        """
        Register `block` under `prefix`, and each subblock under prefix/name.

        The directory is left untouched if any of the IDs already exists.

        Raises:
            DuplicateBlockError: if any resulting block ID is already taken
        """
        entries = decompose_block(prefix, block)

        seen = set()
        for block_id, _ in entries:
            if block_id in self._blocks or block_id in seen:
                raise DuplicateBlockError(f"block '{block_id}' already exists")
            seen.add(block_id)

        for block_id, flat_block in entries:
            self._blocks[block_id] = flat_block
            if flat_block.is_selectable:
                self._selectable.append(block_id)
        logger.debug("Registered %d block(s) under '%s'", len(entries), prefix)

    def find(self, prefix: str, block_id: str) -> tuple:
        """
        Resolve a (possibly partial) block ID.

        Args:
            prefix: Full ID of the block making the reference (ROOT_PREFIX
                    when resolving from outside any block)
            block_id: Full ID, or ID relative to `prefix`

        Returns:
            (full block ID, Block)

        Raises:
            BlockNotFoundError: if neither candidate is registered
        """
        if block_id in self._blocks:
            return block_id, self._blocks[block_id]

        joined = join_block_id(prefix, block_id)
        if joined in self._blocks:
            return joined, self._blocks[joined]

        if prefix == ROOT_PREFIX or joined == block_id:
            raise BlockNotFoundError(f"block '{block_id}' does not exist")
        raise BlockNotFoundError(
            f"neither block '{block_id}' nor block '{joined}' exists"
        )

    def retrieve_selectable(self) -> list:
        """List the full IDs of all selectable blocks, in registration order."""
        return list(self._selectable)

    def block_ids(self) -> list:
        return list(self._blocks)

    def __contains__(self, block_id) -> bool:
        return block_id in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)
