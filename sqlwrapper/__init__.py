"""
sqlwrapper
~~~~~~~~~~

A small wrapper around MariaDB/MySQL prepared statements.

:copyright: (c) 2024-present sqlwrapper contributors
"""

__title__ = 'sqlwrapper'
__author__ = 'sqlwrapper contributors'
__license__ = 'MIT'
__version__ = '0.2.0'
__copyright__ = 'Copyright 2024-present sqlwrapper contributors'

from .access import (
    Access, Param, Result, Table, DatabaseError, UnsupportedParameterType,
    StatementPrepareFailed, StatementExecuteFailed, ConnectionFailed,
    AutocommitConfigFailed, CommitFailed, RollbackFailed
)

__all__ = [
    'Access',
    'Param',
    'Result',
    'Table',
    'DatabaseError',
    'UnsupportedParameterType',
    'StatementPrepareFailed',
    'StatementExecuteFailed',
    'ConnectionFailed',
    'AutocommitConfigFailed',
    'CommitFailed',
    'RollbackFailed'
]
