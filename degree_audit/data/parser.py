"""
Requirement document parsing.

This module compiles raw requirement documents (mappings loaded from YAML)
into Block objects whose rules are explicit dataclass variants.
"""

from ..config import BLOCK_ID_SEPARATOR, RESERVED_PROPERTIES, ROOT_PREFIX, join_block_id
from ..engines.inequality import parse_inequality
from ..engines.pattern import is_valid_pattern
from ..errors import InvalidInequalityError, RequirementDocumentError
from ..models import (
    AndMatchRule,
    AndSatisfyRule,
    Block,
    BlockReference,
    CreditConstraint,
    Inequality,
    InequalityDirection,
    OrMatchRule,
    OrSatisfyRule,
    PatternRule,
)


class RequirementParser:
    """
    Parses requirement documents into Block objects.

    KEY RESPONSIBILITY: Reject malformed documents before they reach the
    engine, and give every rule an explicit type so that the engine never
    has to guess what a rule is from the keys it happens to contain.

    DOCUMENT SHAPE:
    ---------------
        name: Computer Science (Honours)
        ay: 2020
        isSelectable: true
        satisfy: [found, {mc: ">=160"}]
        found:                      # any other key is a subblock
          match: [CS1101S, CS1231S, "CS2*"]
          satisfy: {mc: ">=36"}

    MATCH RULE FORMS:
    -----------------
        "CS2*"                                  pattern
        ["CS2*", "CS3*"]                        OR of the list
        {and: [...]} / {or: [...]}              logical composition
        {pattern: "MA1xxx*", exclude: "MA15xx", info: "..."}
        {"MA1xxx*": null, info: "..."}          key form of a pattern

    SATISFY RULE FORMS:
    -------------------
        found                                   block reference
        [found, {mc: ">=8"}]                    AND of the list
        {mc: ">=8"} / {mc: "<=12"} / {mc: 8}    MC inequality (8 means >=8)
        {and: [...]} / {or: [...]}              logical composition
        {blockId: found, info: "..."}           block reference with info
        {found: null, info: "..."}              key form of a reference

    Every error names the block it was found in, e.g.
        "cs-hons-2020/found: match rule 'cs2*' is not a valid pattern"
    """

    def parse_block(self, contents, block_id: str = ROOT_PREFIX) -> Block:
        """
        Parse one requirement document (or subblock) into a Block.

        Raises:
            RequirementDocumentError: if the document is malformed
        """
        where = block_id or "<root>"
        if not isinstance(contents, dict):
            raise RequirementDocumentError(
                f"{where}: block should be a mapping, got {type(contents).__name__}"
            )

        block = Block()
        for key, entry in contents.items():
            if not isinstance(key, str) or not key:
                raise RequirementDocumentError(f"{where}: block keys should be non-empty strings")

            if key == "name" or key == "url" or key == "info":
                setattr(block, key, self._parse_string(where, key, entry))
            elif key == "ay":
                if isinstance(entry, bool) or not isinstance(entry, int):
                    raise RequirementDocumentError(f"{where}: 'ay' should be an integer")
                block.academic_year = entry
            elif key == "isSelectable":
                if not isinstance(entry, bool):
                    raise RequirementDocumentError(f"{where}: 'isSelectable' should be a boolean")
                block.is_selectable = entry
            elif key == "assign":
                block.assign = self._parse_assign(where, entry)
            elif key == "match":
                block.match = self.parse_match_rule(entry, where)
            elif key == "satisfy":
                block.satisfy = self.parse_satisfy_rule(entry, where)
            else:
                block.subblocks[key] = self._parse_subblock(where, block_id, key, entry)
        return block

    # =========================================================================
    # BLOCK PROPERTIES
    # =========================================================================

    def _parse_string(self, where: str, key: str, entry) -> str:
        if not isinstance(entry, str):
            raise RequirementDocumentError(f"{where}: '{key}' should be a string")
        return entry

    def _parse_assign(self, where: str, entry) -> list:
        if isinstance(entry, str) and entry:
            return [entry]
        if (
            isinstance(entry, list)
            and entry
            and all(isinstance(block_id, str) and block_id for block_id in entry)
        ):
            return list(entry)
        raise RequirementDocumentError(
            f"{where}: 'assign' should be a block ID or a non-empty list of block IDs"
        )

    def _parse_subblock(self, where: str, block_id: str, key: str, entry) -> Block:
        if key in RESERVED_PROPERTIES:
            raise RequirementDocumentError(f"{where}: '{key}' is a reserved keyword")
        if BLOCK_ID_SEPARATOR in key:
            raise RequirementDocumentError(
                f"{where}: subblock name '{key}' should not contain '{BLOCK_ID_SEPARATOR}'"
            )
        if not isinstance(entry, dict):
            raise RequirementDocumentError(f"{where}: subblock '{key}' should be a mapping")
        return self.parse_block(entry, join_block_id(block_id, key))

    # =========================================================================
    # MATCH RULES
    # =========================================================================

    def parse_match_rule(self, contents, where: str = "<root>"):
        """Parse a match rule; a list becomes an OrMatchRule."""
        if isinstance(contents, str):
            return PatternRule(pattern=self._parse_pattern(where, contents))
        if isinstance(contents, list):
            return OrMatchRule(rules=self._parse_match_rules(where, "match", contents))
        if not isinstance(contents, dict) or not contents:
            raise RequirementDocumentError(
                f"{where}: match rule should be a pattern, a list or a non-empty mapping"
            )

        keys = set(contents)
        if keys == {"and"} or keys == {"or"}:
            (key, entry), = contents.items()
            rules = self._parse_match_rules(where, key, entry)
            return AndMatchRule(rules=rules) if key == "and" else OrMatchRule(rules=rules)

        if "pattern" in keys:
            unknown = keys - {"pattern", "exclude", "info"}
            if unknown:
                raise RequirementDocumentError(
                    f"{where}: pattern match rule has unexpected keys {sorted(unknown)}"
                )
            return PatternRule(
                pattern=self._parse_pattern(where, contents["pattern"]),
                exclude=self._parse_exclude(where, contents.get("exclude", [])),
                info=self._parse_info(where, contents),
            )

        # Key form: {PATTERN: null} or {PATTERN: null, info: "..."}
        pattern_keys = keys - {"info"}
        if len(pattern_keys) != 1:
            raise RequirementDocumentError(
                f"{where}: match rule has too many keys {sorted(keys)}"
            )
        pattern, = pattern_keys
        if pattern in RESERVED_PROPERTIES:
            raise RequirementDocumentError(f"{where}: '{pattern}' is a reserved keyword")
        if contents[pattern] is not None:
            raise RequirementDocumentError(
                f"{where}: pattern key '{pattern}' should not have a value"
            )
        return PatternRule(
            pattern=self._parse_pattern(where, pattern),
            info=self._parse_info(where, contents),
        )

    def _parse_match_rules(self, where: str, key: str, entry) -> list:
        if not isinstance(entry, list) or not entry:
            raise RequirementDocumentError(
                f"{where}: '{key}' should be a non-empty list of match rules"
            )
        return [self.parse_match_rule(rule, where) for rule in entry]

    def _parse_pattern(self, where: str, pattern) -> str:
        if not is_valid_pattern(pattern):
            raise RequirementDocumentError(
                f"{where}: match rule {pattern!r} is not a valid pattern "
                f"(non-empty string composed of A-Z, 0-9, x or *)"
            )
        return pattern

    def _parse_exclude(self, where: str, entry) -> list:
        patterns = [entry] if isinstance(entry, str) else entry
        if not isinstance(patterns, list):
            raise RequirementDocumentError(
                f"{where}: 'exclude' should be a pattern or a list of patterns"
            )
        return [self._parse_pattern(where, p) for p in patterns]

    def _parse_info(self, where: str, contents: dict):
        if "info" not in contents:
            return None
        return self._parse_string(where, "info", contents["info"])

    # =========================================================================
    # SATISFY RULES
    # =========================================================================

    def parse_satisfy_rule(self, contents, where: str = "<root>"):
        """Parse a satisfy rule; a list becomes an AndSatisfyRule."""
        if isinstance(contents, str) and contents:
            return BlockReference(block_id=contents)
        if isinstance(contents, list):
            return AndSatisfyRule(rules=self._parse_satisfy_rules(where, "satisfy", contents))
        if not isinstance(contents, dict) or not contents:
            raise RequirementDocumentError(
                f"{where}: satisfy rule should be a block ID, a list or a non-empty mapping"
            )

        keys = set(contents)
        if keys == {"mc"}:
            return CreditConstraint(inequality=self._parse_mc(where, contents["mc"]))
        if keys == {"and"} or keys == {"or"}:
            (key, entry), = contents.items()
            rules = self._parse_satisfy_rules(where, key, entry)
            return AndSatisfyRule(rules=rules) if key == "and" else OrSatisfyRule(rules=rules)

        if "blockId" in keys:
            unknown = keys - {"blockId", "info"}
            if unknown:
                raise RequirementDocumentError(
                    f"{where}: block satisfy rule has unexpected keys {sorted(unknown)}"
                )
            block_id = contents["blockId"]
            if not isinstance(block_id, str) or not block_id:
                raise RequirementDocumentError(f"{where}: 'blockId' should be a non-empty string")
            return BlockReference(block_id=block_id, info=self._parse_info(where, contents))

        # Key form: {BLOCK_ID: null} or {BLOCK_ID: null, info: "..."}
        block_keys = keys - {"info"}
        if len(block_keys) != 1:
            raise RequirementDocumentError(
                f"{where}: satisfy rule has too many keys {sorted(keys)}"
            )
        block_id, = block_keys
        if block_id in RESERVED_PROPERTIES:
            raise RequirementDocumentError(f"{where}: '{block_id}' is a reserved keyword")
        if contents[block_id] is not None:
            raise RequirementDocumentError(
                f"{where}: block key '{block_id}' should not have a value"
            )
        return BlockReference(block_id=block_id, info=self._parse_info(where, contents))

    def _parse_satisfy_rules(self, where: str, key: str, entry) -> list:
        if not isinstance(entry, list) or not entry:
            raise RequirementDocumentError(
                f"{where}: '{key}' should be a non-empty list of satisfy rules"
            )
        return [self.parse_satisfy_rule(rule, where) for rule in entry]

    def _parse_mc(self, where: str, entry) -> Inequality:
        # A bare positive integer is shorthand for ">=n"
        if isinstance(entry, int) and not isinstance(entry, bool):
            if entry <= 0:
                raise RequirementDocumentError(f"{where}: 'mc' should be a positive integer")
            return Inequality(direction=InequalityDirection.AT_LEAST, threshold=entry)
        try:
            return parse_inequality(entry)
        except InvalidInequalityError as e:
            raise RequirementDocumentError(f"{where}: {e}") from e
