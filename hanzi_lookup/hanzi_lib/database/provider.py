"""At-most-once construction of the reference database.

The surrounding application creates one DatabaseProvider at startup, hands
it a loader callable, and passes the provider down to every component that
performs lookups. The first caller that needs the database runs the loader
under a lock; every other caller either waits for that construction to
finish or, in non-blocking mode, fails fast with UninitializedDatabaseError.
No caller ever sees a partially built database.

If the loader raises, nothing is published and the exception propagates to
the caller that triggered construction. The next call tries again.

Example usage::

    from hanzi_lib.database import Database, DatabaseProvider

    provider = DatabaseProvider(lambda: Database.from_records(load_records()))
    provider.initialize()           # eager, at startup
    database = provider.get()       # shared, read-only
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from ..errors import UninitializedDatabaseError
from .reference import Database

logger = logging.getLogger(__name__)


class DatabaseProvider:
    """Owns the single Database instance of a process or application.

    Attributes:
        _loader: Callable building the Database. Called at most once
            successfully.
        _database: The constructed Database, None until initialized.
        _lock: Guards construction.
    """

    def __init__(self, loader: Callable[[], Database]):
        self._loader = loader
        self._database: Database | None = None
        self._lock = threading.Lock()

    @classmethod
    def of(cls, database: Database) -> DatabaseProvider:
        """Wrap an already constructed database."""
        provider = cls(lambda: database)
        provider._database = database
        return provider

    @property
    def is_initialized(self) -> bool:
        return self._database is not None

    def initialize(self) -> Database:
        """Construct the database now if needed and return it."""
        return self.get(block=True)

    def get(self, block: bool = True) -> Database:
        """Return the database, constructing it on first use.

        Args:
            block: If True, run the loader (or wait for a concurrent run) when
                the database is not ready yet. If False, never wait.

        Returns:
            The fully constructed Database.

        Raises:
            UninitializedDatabaseError: If block is False and the database
                has not been constructed yet.
            TypeError: If the loader returns something other than a Database.
        """
        database = self._database
        if database is not None:
            return database
        if not block:
            raise UninitializedDatabaseError("Reference database is not initialized")

        with self._lock:
            if self._database is None:
                logger.info("Initializing reference database")
                database = self._loader()
                if not isinstance(database, Database):
                    raise TypeError(
                        f"Database loader returned {type(database).__name__}, expected Database")
                self._database = database
                logger.info("Reference database ready: %d characters", len(database))
            return self._database
