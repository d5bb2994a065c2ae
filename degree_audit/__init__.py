"""
Degree Audit Package
====================

Verifies a student's study plan against degree requirements written as
YAML requirement documents.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                            DATA LAYER                                    │
│                     (file and network I/O, parsing)                      │
│                                                                         │
│  ┌───────────────────┐  ┌──────────────────┐  ┌─────────────────────┐  │
│  │ RequirementLoader │  │ RequirementParser│  │ RequirementFetcher  │  │
│  │ (YAML -> Directory│  │ (mapping -> Block│  │ (remote mirror)     │  │
│  └───────────────────┘  └──────────────────┘  └─────────────────────┘  │
│  ┌───────────────────┐  ┌──────────────────┐                           │
│  │ Directory         │  │ StudyPlanParser  │                           │
│  │ (flat block IDs)  │  │ (plan -> Modules)│                           │
│  └───────────────────┘  └──────────────────┘                           │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                           ENGINE LAYER                                   │
│        (Pure logic - returns data structures, NO UI/printing)           │
│                                                                         │
│   pattern -> match_rule -> satisfier <- inequality <- block             │
│                                                                         │
│   verify_plan(modules, directory, block_id) -> SatisfierResult          │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   │ Returns dataclasses
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      PRESENTATION LAYER                                  │
│           (UI only - can be swapped without touching the engine)        │
│                                                                         │
│                          TerminalDisplay                                │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                          PlanVerifier                                    │
│          (Orchestrator - connects the engine to presentation)           │
└─────────────────────────────────────────────────────────────────────────┘

PACKAGE STRUCTURE
-----------------

degree_audit/
├── __init__.py          # This file - main exports
├── __main__.py          # python -m degree_audit
├── config.py            # Configuration constants
├── errors.py            # Exception hierarchy
├── verifier.py          # PlanVerifier orchestrator
├── cli.py               # Command-line interface
│
├── models/              # Data classes and enums
│   ├── module.py        # Module
│   ├── rules.py         # Match and satisfy rules
│   ├── block.py         # Block
│   ├── satisfier.py     # Satisfier tree nodes
│   └── result.py        # SatisfierResult, MatchResult
│
├── data/                # Data loading and parsing
│   ├── directory.py     # Directory
│   ├── parser.py        # RequirementParser
│   ├── loader.py        # RequirementLoader
│   ├── fetcher.py       # RequirementFetcher
│   └── plan.py          # StudyPlanParser
│
├── engines/             # Requirement evaluation
│   ├── pattern.py       # Pattern compiler
│   ├── satisfier.py     # Satisfier evaluator
│   ├── match_rule.py    # Match-rule evaluator
│   ├── inequality.py    # MC inequalities
│   └── block.py         # Block compiler, verify_plan
│
└── ui/                  # User interface implementations
    └── terminal.py      # TerminalDisplay

USAGE
-----

    from degree_audit import Directory, RequirementParser, verify_plan

    directory = Directory()
    directory.add_block("cs", RequirementParser().parse_block({
        "match": "CS2*",
        "satisfy": {"mc": ">=8"},
    }, "cs"))

    result = verify_plan([("CS2100", 4), ("CS2040S", 4)], directory, "cs")
    result.is_satisfied   # True

Running from command line:

    python -m degree_audit verify plan.json --class primary --block cs-hons-2020

"""

# Version
__version__ = "1.0.0"

# Main exports
from .verifier import PlanVerifier
from .cli import main

# Model exports (for programmatic use)
from .models import (
    Module,
    Block,
    PatternRule,
    AndMatchRule,
    OrMatchRule,
    Inequality,
    InequalityDirection,
    BlockReference,
    CreditConstraint,
    AndSatisfyRule,
    OrSatisfyRule,
    SatisfierResult,
    MatchResult,
)

# Engine exports (for advanced use)
from .engines import (
    compile_patterns,
    parse_inequality,
    evaluate_match_rule,
    evaluate_satisfier,
    build_satisfier,
    verify_plan,
)

# Data exports
from .data import (
    Directory,
    RequirementLoader,
    RequirementParser,
    RequirementFetcher,
    StudyPlanParser,
)

# UI exports
from .ui import TerminalDisplay

# Error exports
from .errors import (
    DegreeAuditError,
    InvalidPatternError,
    InvalidInequalityError,
    RequirementDocumentError,
    DuplicateBlockError,
    BlockNotFoundError,
    BlockCycleError,
    StudyPlanError,
    RequirementFetchError,
)

# Configuration exports
from .config import (
    REQUIREMENTS_DIR,
    BLOCK_CLASSES,
    ROOT_PREFIX,
)

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "PlanVerifier",
    "main",
    # Models
    "Module",
    "Block",
    "PatternRule",
    "AndMatchRule",
    "OrMatchRule",
    "Inequality",
    "InequalityDirection",
    "BlockReference",
    "CreditConstraint",
    "AndSatisfyRule",
    "OrSatisfyRule",
    "SatisfierResult",
    "MatchResult",
    # Engines
    "compile_patterns",
    "parse_inequality",
    "evaluate_match_rule",
    "evaluate_satisfier",
    "build_satisfier",
    "verify_plan",
    # Data
    "Directory",
    "RequirementLoader",
    "RequirementParser",
    "RequirementFetcher",
    "StudyPlanParser",
    # UI
    "TerminalDisplay",
    # Errors
    "DegreeAuditError",
    "InvalidPatternError",
    "InvalidInequalityError",
    "RequirementDocumentError",
    "DuplicateBlockError",
    "BlockNotFoundError",
    "BlockCycleError",
    "StudyPlanError",
    "RequirementFetchError",
    # Config
    "REQUIREMENTS_DIR",
    "BLOCK_CLASSES",
    "ROOT_PREFIX",
]
