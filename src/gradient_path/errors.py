"""Exception taxonomy for the gradient path core.

All errors derive from ``GradientPathError`` (itself a ``ValueError``) so
callers that already guard config loading with ``except ValueError`` keep
working. Every error is raised before any output is produced; there is no
partial-result mode and no retry, since all operations are deterministic.
"""


class GradientPathError(ValueError):
    """Base class for all gradient path failures."""


class InvalidConfiguration(GradientPathError):
    """Segment/sample counts, width or precision outside their valid range."""


class DegenerateSampling(GradientPathError):
    """Sampling would produce zero intervals (division by zero)."""


class DegenerateSegment(GradientPathError):
    """Outline requested for a segment with fewer than two samples."""


class GeometryUnavailable(GradientPathError):
    """The path geometry cannot report a length or a point."""
