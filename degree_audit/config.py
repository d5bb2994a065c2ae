"""
Configuration constants for the degree audit system.

This module contains all configuration values and constants used throughout
the requirement engine. Centralizing these makes it easy to adjust
behavior as requirement documents evolve.
"""

from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

# Base directory (relative to this file's location)
BASE_DIR = Path(__file__).parent.parent
REQUIREMENTS_DIR = BASE_DIR / "requirements"

# Requirement documents are YAML files; both suffixes are accepted
REQUIREMENT_FILE_SUFFIXES = (".yml", ".yaml")


# =============================================================================
# BLOCK CLASSES
# =============================================================================
# Each block class gets its own directory (and its own Directory instance):
#   - primary: first majors / honours programmes (e.g. cs-hons-2020)
#   - second:  second majors
#   - minor:   minors

BLOCK_CLASSES = ("primary", "second", "minor")


# =============================================================================
# BLOCK IDENTIFIERS
# =============================================================================

# Hierarchy separator inside a flattened block ID ("cs-hons-2020/found")
BLOCK_ID_SEPARATOR = "/"

# Prefix used when resolving a block from outside any block
ROOT_PREFIX = ""


def join_block_id(prefix: str, block_id: str) -> str:
    """Join a parent block ID and a (partial) child ID."""
    if prefix == ROOT_PREFIX:
        return block_id
    return f"{prefix}{BLOCK_ID_SEPARATOR}{block_id}"


# =============================================================================
# REQUIREMENT DOCUMENT KEYWORDS
# =============================================================================

# Keys holding a block's own properties; every other key is a subblock
BLOCK_PROPERTIES = (
    "name",
    "ay",
    "assign",
    "match",
    "satisfy",
    "url",
    "info",
    "isSelectable",
)

MATCH_RULE_PROPERTIES = ("and", "or", "pattern", "exclude", "info")
SATISFY_RULE_PROPERTIES = ("and", "or", "mc", "blockId", "info")

# Keywords that can never be used as a subblock name
RESERVED_PROPERTIES = frozenset(
    BLOCK_PROPERTIES + MATCH_RULE_PROPERTIES + SATISFY_RULE_PROPERTIES
)


# =============================================================================
# GRAMMARS
# =============================================================================
# Pattern:    uppercase letters, digits, x (any digit) and * (any run)
# Inequality: ">=n" (at least n MCs) or "<=n" (at most n MCs)

PATTERN_GRAMMAR = r"^[A-Z0-9x*]+$"
INEQUALITY_GRAMMAR = r"^([<>]=)(\d+)$"


# =============================================================================
# REQUIREMENT FETCHING
# =============================================================================

# The remote mirror lists its documents in this file (JSON list of paths)
FETCH_MANIFEST_NAME = "index.json"
FETCH_TIMEOUT = 15
FETCH_RETRIES = 5
FETCH_BACKOFF_FACTOR = 2  # Wait 2s, 4s, 8s, 16s... on 429 errors
FETCH_STATUS_FORCELIST = (429, 500, 502, 503, 504)
FETCH_DELAY_RANGE = (0.5, 1.5)  # Seconds slept between downloads
FETCH_USER_AGENT = "degree-audit/1.0 (+requirement-sync)"
