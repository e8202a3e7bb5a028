"""
sqlwrapper Access - Main Access Class
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Convenience wrapper around a single MariaDB/MySQL connection.

:copyright: (c) 2024-present sqlwrapper contributors
"""

from typing import Any, Dict, Iterable, List, Optional
import mariadb
from sqlwrapper.config import env_flag, load_conn_params
from sqlwrapper.logging_config import DatabaseLogger
from .base import (
    DatabaseError, UnsupportedParameterType, StatementPrepareFailed, StatementExecuteFailed,
    ConnectionFailed, AutocommitConfigFailed, CommitFailed, RollbackFailed
)
from .params import infer_types, bind_values
from .query import Query, Names, build_insert, build_delete, build_select, build_update
from .result import Result, Table


class Access:
    """
    Wrapper around a MariaDB connection that makes simple operations quicker.

    The connection is opened on construction and closed exactly once, by
    ``close()``, on leaving a ``with`` block or when the object is collected.

    With ``debug`` set, queries and connection events are printed on stdout
    whatever ``LOG_LEVEL`` is; they always go to the log files when
    ``LOG_DIR`` is set.

    Example:
        with Access('localhost', 'user', 'password', 'shop', debug=True) as db:
            db.insert('items', ['name', 'price'], ['pen', 1.5])
            db.select('items', '*', ['name'], ['pen'], limit=1)
            rows = db.rows_as_mappings()
    """

    def __init__(
        self,
        host: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        database: Optional[str] = None,
        port: Optional[int] = None,
        debug: bool = False
    ):
        """
        Connect to a database.

        Args:
            host: Host name or IP address
            user: The MariaDB/MySQL user name
            password: User password
            database: Default database
            port: Server port, the driver default when omitted
            debug: Log every query and connection event to stdout
        """
        self._debug = debug
        self._closed = True
        self._connection = None
        self._last_result: Optional[Result] = None
        self._last_rows: Optional[List[Dict[str, Any]]] = None
        self._last_column_names: Optional[List[str]] = None

        self.db_logger = DatabaseLogger(verbose=debug)
        self.logger = self.db_logger.logger

        conn_params = {
            'host': host,
            'user': user,
            'password': password,
            'database': database,
            'port': port,
        }
        try:
            self._connection = mariadb.connect(
                **{key: value for key, value in conn_params.items() if value is not None}
            )
        except mariadb.Error as e:
            self.db_logger.log_error("connect", e)
            raise ConnectionFailed(f"Connection failed: {e}") from e

        self._closed = False
        self.db_logger.log_connection(f"connected to {database}")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, debug: Optional[bool] = None) -> 'Access':
        """Connect using DB_* settings from the environment (see ``load_conn_params``)."""
        conn_params = load_conn_params(env_file)
        if debug is None:
            debug = env_flag('DB_DEBUG')
        return cls(**conn_params, debug=debug)

    # Accessors

    @property
    def connection(self):
        """The underlying driver connection."""
        return self._connection

    @property
    def last_result(self) -> Optional[Result]:
        return self._last_result

    @property
    def last_rows(self) -> Optional[List[Dict[str, Any]]]:
        return self._last_rows

    @property
    def last_column_names(self) -> Optional[List[str]]:
        return self._last_column_names

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def closed(self) -> bool:
        return self._closed

    # Execution

    def _check_open(self) -> None:
        if self._closed:
            raise DatabaseError("Connection is closed")

    def execute(
        self,
        query: Query,
        wants_result: bool = False,
        blob_overrides: Optional[Iterable[int]] = None
    ) -> Optional[Result]:
        """
        Prepare, bind and execute a built query.

        The result (or ``None`` for statements without a row set) replaces
        the last stored result.

        Args:
            query: Statement and values from one of the builders
            wants_result: Return the result instead of only storing it
            blob_overrides: Value positions bound as BLOBs

        Returns:
            The result when ``wants_result`` is set, otherwise ``None``
        """
        self._check_open()
        try:
            types = infer_types(query.values, blob_overrides)
            params = bind_values(query.values, types)
        except UnsupportedParameterType as e:
            self.db_logger.log_error(f"{query.verb} bind", e)
            raise

        self.db_logger.log_query(query.sql, params)

        try:
            cursor = self._connection.cursor(prepared=True)
        except mariadb.Error as e:
            self.db_logger.log_error(f"{query.verb} prepare", e)
            raise StatementPrepareFailed(query.table, query.verb, query.sql, types, e) from e

        try:
            cursor.execute(query.sql, params)
            result = Result.from_cursor(cursor) if cursor.description else None
        except mariadb.ProgrammingError as e:
            self.db_logger.log_error(f"{query.verb} prepare", e)
            raise StatementPrepareFailed(query.table, query.verb, query.sql, types, e) from e
        except mariadb.Error as e:
            self.db_logger.log_error(f"{query.verb} execute", e)
            raise StatementExecuteFailed(query.table, query.verb, query.sql, types, e) from e
        finally:
            cursor.close()

        self._last_result = result
        if result is not None:
            self.logger.debug(f"{query.verb} on {query.table} returned {len(result)} rows")
        return result if wants_result else None

    def insert(
        self,
        table: str,
        columns: Names,
        values,
        blob_overrides: Optional[Iterable[int]] = None
    ) -> None:
        """Insert one row. ``blob_overrides`` forces value positions to BLOB."""
        self.execute(build_insert(table, columns, values), False, blob_overrides)

    def delete(self, table: str, conditions: Names, values) -> None:
        """Delete rows where every condition column equals its value."""
        self.execute(build_delete(table, conditions, values), False)

    def select(
        self,
        table: str,
        columns: Names,
        conditions: Optional[Names] = None,
        values=None,
        sort_by: Optional[str] = None,
        sort: Optional[str] = 'ASC',
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> Optional[Result]:
        """Select rows; see ``build_select`` for the arguments."""
        query = build_select(table, columns, conditions, values, sort_by, sort, limit, offset)
        return self.execute(query, True)

    def update(
        self,
        table: str,
        columns: Names,
        values,
        conditions: Optional[Names] = None,
        condition_values=None,
        blob_overrides: Optional[Iterable[int]] = None
    ) -> None:
        """Update ``columns`` to ``values`` in rows matching the conditions."""
        query = build_update(table, columns, values, conditions, condition_values)
        self.execute(query, False, blob_overrides)

    # Result shaping

    def _resolve(self, result: Optional[Result]) -> Optional[Result]:
        return result if result is not None else self._last_result

    def column_names(self, result: Optional[Result] = None) -> Optional[List[str]]:
        """Column names of ``result`` (or the last result); ``None`` if there is none."""
        result = self._resolve(result)
        if result is None:
            return None
        self._last_column_names = result.column_names()
        return self._last_column_names

    def rows_as_mappings(self, result: Optional[Result] = None) -> Optional[List[Dict[str, Any]]]:
        """Rows of ``result`` (or the last result) as dicts; ``None`` if there is none."""
        result = self._resolve(result)
        if result is None:
            return None
        self._last_rows = result.as_mappings()
        return self._last_rows

    def table(self, result: Optional[Result] = None) -> Optional[Table]:
        """Columns and rows of ``result`` (or the last result) as a ``Table``."""
        result = self._resolve(result)
        if result is None:
            return None
        return Table.from_result(result)

    # Transactions

    def autocommit(self, on: bool) -> None:
        """
        Enable or disable autocommit.

        While disabled, changes are only persisted by ``commit()``.
        """
        self._check_open()
        try:
            self._connection.autocommit = on
        except mariadb.Error as e:
            self.db_logger.log_error("autocommit", e)
            raise AutocommitConfigFailed(f"Can't configure auto commit: {e}") from e
        self.db_logger.log_connection("enabling autocommit" if on else "disabling autocommit")

    def commit(self) -> None:
        """Commit changes made while autocommit was off."""
        self._check_open()
        try:
            self._connection.commit()
        except mariadb.Error as e:
            self.db_logger.log_error("commit", e)
            raise CommitFailed(f"Can't commit transactions: {e}") from e
        self.db_logger.log_connection("committing stored transactions")

    def rollback(self) -> None:
        """Discard changes made while autocommit was off."""
        self._check_open()
        try:
            self._connection.rollback()
        except mariadb.Error as e:
            self.db_logger.log_error("rollback", e)
            raise RollbackFailed(f"Can't roll back transactions: {e}") from e
        self.db_logger.log_connection("rolling back stored transactions")

    def health_check(self) -> bool:
        """Check database connection health."""
        if self._closed:
            return False
        try:
            cursor = self._connection.cursor()
            try:
                cursor.execute("SELECT 1")
                cursor.fetchall()
            finally:
                cursor.close()
            return True
        except mariadb.Error as e:
            self.logger.warning(f"Health check failed: {e}")
            return False

    # Lifecycle

    def close(self) -> None:
        """Close the connection. Further calls do nothing."""
        self._close(raise_errors=True)

    def _close(self, raise_errors: bool) -> None:
        if self._closed:
            return
        self._closed = True
        self.db_logger.log_connection("closing connection")
        try:
            self._connection.close()
        except mariadb.Error as e:
            self.db_logger.log_error("close", e)
            if raise_errors:
                raise DatabaseError(f"Closing the connection failed: {e}") from e

    def __enter__(self) -> 'Access':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        # A failed close is only logged so it cannot replace an error from the block
        self._close(raise_errors=False)

    def __del__(self):
        """Cleanup when the instance is destroyed."""
        if not getattr(self, '_closed', True):
            self._close(raise_errors=False)

    def __repr__(self) -> str:
        state = 'closed' if self._closed else 'open'
        return f"<Access {state} debug={self._debug}>"


__all__ = ['Access']
