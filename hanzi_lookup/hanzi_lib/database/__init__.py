"""Reference database and its one-time construction.

The module exports:
    Database: Immutable, stroke-count indexed collection of references.
    DatabaseProvider: Thread-safe, at-most-once database construction.

Example usage::

    from hanzi_lib.database import Database, DatabaseProvider

    provider = DatabaseProvider(lambda: Database.from_records(records))
    database = provider.initialize()
"""

from .provider import DatabaseProvider
from .reference import Database

__all__ = ['Database', 'DatabaseProvider']
