"""Service layer for lookups.

The module exports:
    LookupService: Reusable lookup service bound to one database.
    lookup: One-shot lookup function.

Example usage::

    from hanzi_lib.api import LookupService

    service = LookupService(database)
    results = service.lookup_dicts(strokes, limit=10)
"""

from .services import LookupService, lookup

__all__ = ['LookupService', 'lookup']
