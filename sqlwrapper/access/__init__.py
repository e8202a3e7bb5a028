"""
Access Module for sqlwrapper
~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Query building and execution over a single MariaDB/MySQL connection.

:copyright: (c) 2024-present sqlwrapper contributors
"""

from .access import Access
from .base import (
    DatabaseError, UnsupportedParameterType, StatementError,
    StatementPrepareFailed, StatementExecuteFailed, ConnectionFailed,
    AutocommitConfigFailed, CommitFailed, RollbackFailed
)
from .params import Param, infer_type, infer_types
from .query import (
    Query, format_conditions, build_insert, build_delete, build_select, build_update
)
from .result import Result, Table

__all__ = [
    'Access',
    'DatabaseError',
    'UnsupportedParameterType',
    'StatementError',
    'StatementPrepareFailed',
    'StatementExecuteFailed',
    'ConnectionFailed',
    'AutocommitConfigFailed',
    'CommitFailed',
    'RollbackFailed',
    'Param',
    'infer_type',
    'infer_types',
    'Query',
    'format_conditions',
    'build_insert',
    'build_delete',
    'build_select',
    'build_update',
    'Result',
    'Table'
]
