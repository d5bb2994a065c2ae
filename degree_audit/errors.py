"""
Construction-time errors.

Everything raised here means a requirement document, a study plan or a block
reference is malformed and has to be fixed upstream. Failing to satisfy a
requirement is NOT an error: it is reported as data in SatisfierResult.

Each error also subclasses the closest built-in, so callers can keep
catching ValueError / LookupError.
"""


class DegreeAuditError(Exception):
    """Base class for all errors raised by the degree audit package."""


class InvalidPatternError(DegreeAuditError, ValueError):
    """A module pattern is not composed of A-Z, 0-9, x and *."""


class InvalidInequalityError(DegreeAuditError, ValueError):
    """An MC inequality is not of the form '>=n' or '<=n'."""


class RequirementDocumentError(DegreeAuditError, ValueError):
    """A requirement document does not have the expected shape."""


class DuplicateBlockError(DegreeAuditError, ValueError):
    """A block ID is registered twice in the same directory."""


class BlockNotFoundError(DegreeAuditError, LookupError):
    """A block ID could not be resolved by the directory."""


class BlockCycleError(DegreeAuditError, ValueError):
    """A block refers (directly or indirectly) to itself."""


class StudyPlanError(DegreeAuditError, ValueError):
    """A study plan file does not have the expected shape."""


class RequirementFetchError(DegreeAuditError, IOError):
    """The remote requirement mirror could not be read."""
