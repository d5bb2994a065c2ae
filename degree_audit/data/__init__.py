"""
Data loading and parsing module.

This package handles all file I/O: requirement documents, study plans and
the remote requirement mirror.
"""

from .directory import Directory, decompose_block
from .fetcher import FetchReport, RequirementFetcher, create_retry_session
from .loader import RequirementLoader
from .parser import RequirementParser
from .plan import StudyPlanParser

__all__ = [
    "Directory",
    "decompose_block",
    "FetchReport",
    "RequirementFetcher",
    "create_retry_session",
    "RequirementLoader",
    "RequirementParser",
    "StudyPlanParser",
]
