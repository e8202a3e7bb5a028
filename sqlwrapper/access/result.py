"""
sqlwrapper Access - Results
~~~~~~~~~~~~~~~~~~~~~~~~~~~

Buffered row sets returned by executed statements.

:copyright: (c) 2024-present sqlwrapper contributors
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple


class Result:
    """Rows fetched from a cursor, kept after the cursor is closed."""

    def __init__(self, columns: Sequence[str], rows: Sequence[Sequence[Any]]):
        self._columns = list(columns)
        self._rows = [tuple(row) for row in rows]

    @classmethod
    def from_cursor(cls, cursor) -> 'Result':
        """Buffer everything the cursor returned."""
        columns = [description[0] for description in cursor.description]
        return cls(columns, cursor.fetchall())

    def column_names(self) -> List[str]:
        return list(self._columns)

    def rows(self) -> List[Tuple[Any, ...]]:
        return list(self._rows)

    def as_mappings(self) -> List[Dict[str, Any]]:
        """Rows as ``{column: value}`` dicts, in column order."""
        return [dict(zip(self._columns, row)) for row in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self.as_mappings())

    def __repr__(self) -> str:
        return f"<Result columns={self._columns!r} rows={len(self._rows)}>"


@dataclass
class Table:
    """Column names together with the row mappings they index."""

    columns: List[str] = field(default_factory=list)
    values: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_result(cls, result: Result) -> 'Table':
        values = result.as_mappings()
        columns = list(values[0].keys()) if values else result.column_names()
        return cls(columns, values)
