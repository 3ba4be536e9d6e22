"""
Data Backend

A Backend opens one connection per request and hands out a Database
handle. Driver exceptions are re-raised as BackendError with the driver's
own text, which the pages then show verbatim (VULNERABLE: information
disclosure).
"""

import logging
import sqlite3
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from vtcs_shop.queries import UnsafeQuery

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
Command = Union[UnsafeQuery, str]


class BackendError(Exception):
    """The backend rejected a command"""


class ConnectionFailed(BackendError):
    """The backend could not be reached"""


class Database:
    """Connection handle for the duration of one request"""

    def __init__(self, connection: Any, backend: "Backend"):
        self.connection = connection
        self.backend = backend

    def _run(self, command: Command, fetch: bool) -> List[Row]:
        sql = str(command)
        name = command.name if isinstance(command, UnsafeQuery) else "raw"
        logger.debug(f"[{name}] {sql}")

        try:
            cursor = self.connection.cursor()
            try:
                cursor.execute(sql)
                rows = cursor.fetchall() if fetch else []
            finally:
                cursor.close()
        except self.backend.errors as e:
            raise BackendError(str(e)) from e

        return [dict(row) for row in rows]

    def query(self, command: Command) -> List[Row]:
        """Run a command and return every row, in backend order"""
        return self._run(command, fetch=True)

    def first(self, command: Command) -> Optional[Row]:
        rows = self.query(command)
        return rows[0] if rows else None

    def execute(self, statement: Command) -> None:
        self._run(statement, fetch=False)

    def commit(self) -> None:
        try:
            self.connection.commit()
        except self.backend.errors as e:
            raise BackendError(str(e)) from e

    def close(self) -> None:
        self.backend.release(self.connection)


class Backend:
    """Base class for backend implementations"""

    name = "abstract"
    errors: Tuple[Type[BaseException], ...] = ()

    def init_app(self, app) -> None:
        pass

    def _open(self) -> Any:
        raise NotImplementedError

    def release(self, connection: Any) -> None:
        connection.close()

    def connect(self) -> Database:
        try:
            connection = self._open()
        except self.errors as e:
            raise ConnectionFailed(str(e)) from e
        return Database(connection, self)


class SQLiteBackend(Backend):
    """File-backed SQLite, for local runs and the test suite"""

    name = "sqlite"
    errors = (sqlite3.Error,)

    def __init__(self, path: Optional[str] = None):
        self.path = path

    def init_app(self, app) -> None:
        if self.path is None:
            self.path = app.config.get('SQLITE_PATH')

    def _open(self) -> sqlite3.Connection:
        connection = sqlite3.connect(str(self.path))
        connection.row_factory = sqlite3.Row
        return connection


def backend_from_config(config: Mapping[str, Any]) -> Backend:
    """Pick a backend implementation from DB_ENGINE"""
    engine = config.get('DB_ENGINE', 'mysql')

    if engine == 'sqlite':
        return SQLiteBackend(config.get('SQLITE_PATH'))
    if engine == 'mysql':
        from vtcs_shop.mysql_backend import MySQLBackend
        return MySQLBackend()

    raise ValueError(f"Unsupported DB_ENGINE: {engine}")
