"""
Block data model.

A block is one node of a requirement hierarchy. A programme such as
"cs-hons-2020" is a block; its "found" (foundation) and "breadth" sections
are subblocks, which may nest further.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Union

from .rules import MatchRule, SatisfyRule


@dataclass
class Block:
    """
    A requirement block.

    A block has no identity of its own: its ID is the path of keys leading
    to it, assigned when the block is registered in a Directory.

    Attributes:
        name: Human-readable name (e.g., "Computer Science Foundation")
        academic_year: Academic year the requirements apply to ("ay")
        assign: IDs of blocks whose assigned modules are pulled into this one
        match: Rule(s) deciding which modules are eligible (a list means OR)
        satisfy: Rule(s) the eligible modules must meet (a list means AND)
        url: Link to the official requirement page
        info: Note shown alongside this block's result
        is_selectable: True if users may pick this block as a target
        subblocks: Nested blocks, keyed by their name within this block
    """
    name: Optional[str] = None
    academic_year: Optional[int] = None
    assign: List[str] = field(default_factory=list)
    match: Optional[Union[MatchRule, List[MatchRule]]] = None
    satisfy: Optional[Union[SatisfyRule, List[SatisfyRule]]] = None
    url: Optional[str] = None
    info: Optional[str] = None
    is_selectable: bool = False
    subblocks: Dict[str, "Block"] = field(default_factory=dict)

    def without_subblocks(self) -> "Block":
        """Return a copy holding only this block's own properties."""
        return replace(self, subblocks={})
