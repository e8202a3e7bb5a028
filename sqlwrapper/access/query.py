"""
sqlwrapper Access - Query Builders
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Builds parameterized SQL for the four supported verbs. Builders are pure:
they return a ``Query`` and never touch the connection.

:copyright: (c) 2024-present sqlwrapper contributors
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union
from .params import as_list

Names = Union[Sequence[str], str]

SORT_DIRECTIONS = ('ASC', 'DESC')


@dataclass
class Query:
    """A statement ready to be prepared, with its bound values."""

    table: str
    verb: str
    sql: str
    values: List[Any] = field(default_factory=list)


def _join_names(names: Names) -> str:
    return names if isinstance(names, str) else ','.join(names)


def format_conditions(names: Names, separator: str) -> str:
    """
    Create ``name=?`` pairs for WHERE and SET clauses.

    Names containing a space are taken as literal tokens (``"id > 3"``,
    ``"OR"``) and passed through as they are.
    """
    if isinstance(names, str):
        return f"{names}=?"
    return separator.join(name if ' ' in name else f"{name}=?" for name in names)


def build_insert(table: str, columns: Names, values) -> Query:
    """INSERT INTO table (columns) VALUES (?,...)"""
    count = 1 if isinstance(columns, str) else len(columns)
    values = as_list(values)
    if len(values) != count:
        raise ValueError(f"INSERT into {table} has {count} columns but {len(values)} values")

    placeholders = ','.join('?' * count)
    sql = f"INSERT INTO {table} ({_join_names(columns)}) VALUES ({placeholders})"
    return Query(table, 'INSERT', sql, values)


def build_delete(table: str, conditions: Names, values) -> Query:
    """DELETE FROM table WHERE conditions"""
    sql = f"DELETE FROM {table} WHERE {format_conditions(conditions, ' AND ')}"
    return Query(table, 'DELETE', sql, as_list(values))


def build_select(
    table: str,
    columns: Names,
    conditions: Optional[Names] = None,
    values=None,
    sort_by: Optional[str] = None,
    sort: Optional[str] = 'ASC',
    limit: Optional[int] = None,
    offset: Optional[int] = None
) -> Query:
    """
    SELECT columns FROM table [WHERE ...] [ORDER BY ...] [LIMIT ? [OFFSET ?]]

    Args:
        table: Table name
        columns: Column names, or a raw column string such as ``"*"``
        conditions: Column names used for WHERE
        values: Values bound to the conditions
        sort_by: Column used for ORDER BY
        sort: ``ASC`` or ``DESC``; any other value adds no direction
        limit: Maximum number of rows
        offset: Rows to skip, only used together with ``limit``
    """
    values = as_list(values)
    sql = f"SELECT {_join_names(columns)} FROM {table}"

    if conditions is not None:
        sql += f" WHERE {format_conditions(conditions, ' AND ')}"

    if sort_by is not None:
        sql += f" ORDER BY {sort_by}"
        if sort in SORT_DIRECTIONS:
            sql += f" {sort}"

    if limit is not None:
        values.append(limit)
        sql += " LIMIT ?"

        # Offset requires limit
        if offset is not None:
            values.append(offset)
            sql += " OFFSET ?"

    return Query(table, 'SELECT', sql, values)


def build_update(
    table: str,
    columns: Names,
    values,
    conditions: Optional[Names] = None,
    condition_values=None
) -> Query:
    """UPDATE table SET col=?, ... [WHERE ...]"""
    sql = f"UPDATE {table} SET {format_conditions(columns, ', ')}"
    bound = as_list(values)

    if conditions is not None:
        sql += f" WHERE {format_conditions(conditions, ' AND ')}"
        bound.extend(as_list(condition_values))

    return Query(table, 'UPDATE', sql, bound)
