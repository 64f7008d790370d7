"""Exceptions raised by the lookup pipeline.

All exceptions derive from HanziLookupError so callers can catch the whole
family at the boundary. Each also derives from the closest built-in type
(ValueError, RuntimeError) so generic handlers keep working.

An empty result list is not an error: it simply means no candidate cleared
the feasibility threshold.
"""


class HanziLookupError(Exception):
    """Base class for lookup errors."""


class MalformedInputError(HanziLookupError, ValueError):
    """The drawn character cannot be analyzed.

    Raised for a character without strokes, a stroke without points, a point
    that does not have two numeric coordinates, or a negative result limit.
    """


class UninitializedDatabaseError(HanziLookupError, RuntimeError):
    """A non-blocking lookup ran before the reference database was built."""


class DatabaseFormatError(HanziLookupError, ValueError):
    """A reference record does not follow the database schema."""
