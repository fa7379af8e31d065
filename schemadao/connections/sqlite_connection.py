##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
SQLite connection context manager for schemadao.

This module defines the `SQLiteConnection` class, which opens a configured
`sqlite3` connection for the lifetime of a `with` block, commits the work done
inside the block if it finishes cleanly, rolls it back otherwise, and always
closes the connection on exit.
"""

import logging
import sqlite3
from pathlib import Path
from types import TracebackType
from typing import Type


LOG = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


class SQLiteConnection:
    """
    Context manager for establishing and safely closing a SQLite database connection.

    Connections are created with:
    - WAL mode for better concurrency (file databases only)
    - Foreign key constraint enforcement
    - Index and name based column access via `sqlite3.Row`

    Attributes:
        db_path (str): The database file, or `:memory:`.
        conn (sqlite3.Connection): The active SQLite connection used within the context.

    Methods:
        __enter__:
            Opens and configures the SQLite connection when entering the context.

        __exit__:
            Commits or rolls back, then closes the SQLite connection.
    """

    def __init__(self, db_path: str = None):
        """
        Initialize the SQLiteConnection context manager.

        Args:
            db_path: The database file. Defaults to `database.path` from the app config.
        """
        self.db_path: str = db_path
        self.conn: sqlite3.Connection = None

    def __enter__(self) -> sqlite3.Connection:
        """
        Enters the runtime context related to this object and creates a sqlite connection.

        Returns:
            A sqlite connection.
        """
        if self.db_path is None:
            from schemadao.config.configfile import get_config  # pylint: disable=import-outside-toplevel

            self.db_path = get_config().database.path

        if self.db_path != MEMORY_DB:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        LOG.debug(f"Opening SQLite database at {self.db_path}")
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)

        if self.db_path != MEMORY_DB:
            self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA foreign_keys=ON")

        # This enables name-based access to columns
        self.conn.row_factory = sqlite3.Row

        return self.conn

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        """
        Exits the runtime context and performs cleanup.

        Pending work is committed if the block exited cleanly and rolled back
        otherwise. The connection is then closed.

        Args:
            exc_type: The exception type raised, if any.
            exc_value: The exception instance raised, if any.
            traceback: The traceback object, if an exception was raised.
        """
        if not self.conn:
            return
        try:
            if exc_type is None:
                self.conn.commit()
            else:
                self.conn.rollback()
        finally:
            self.conn.close()
            self.conn = None
