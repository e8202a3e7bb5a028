"""
sqlwrapper Access - Base Components
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Exceptions raised by the wrapper.

:copyright: (c) 2024-present sqlwrapper contributors
"""


class DatabaseError(Exception):
    """Base exception for database operations."""
    pass


class UnsupportedParameterType(DatabaseError, TypeError):
    """A bound value is not a bool, int, float, str or Param, or does not fit its tag."""

    def __init__(self, value, tag: str = None):
        self.value = value
        self.tag = tag
        if tag is None:
            message = (
                f"Error when processing data type of {value!r} ({type(value).__name__}). "
                "Available types: Integers, Floats, Strings and Booleans."
            )
        else:
            message = f"Can't bind {value!r} ({type(value).__name__}) as type {tag!r}"
        super().__init__(message)


class StatementError(DatabaseError):
    """A statement built for ``table`` failed in the driver."""

    stage = 'Statement'

    def __init__(self, table: str, verb: str, sql: str, types: str, reason):
        self.table = table
        self.verb = verb
        self.sql = sql
        self.types = types
        super().__init__(
            f"{self.stage} failed for {verb} on {table}: {reason}\n"
            f"QUERY: {sql}\nTYPES: {types}"
        )


class StatementPrepareFailed(StatementError):
    stage = 'Prepare'


class StatementExecuteFailed(StatementError):
    stage = 'Execute'


class ConnectionFailed(DatabaseError):
    """Connecting to the server failed."""
    pass


class AutocommitConfigFailed(DatabaseError):
    pass


class CommitFailed(DatabaseError):
    pass


class RollbackFailed(DatabaseError):
    pass
