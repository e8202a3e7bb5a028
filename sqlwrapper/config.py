"""
Connection settings read from the environment.
"""

import logging
import os
from typing import Any, Dict, Optional
from dotenv import load_dotenv
from sqlwrapper.logging_config import log_function_call

REQUIRED_KEYS = ['host', 'user', 'password', 'database']
TRUTHY = ('1', 'true', 'yes', 'on')

logger = logging.getLogger('sqlwrapper.config')


def validate_conn_params(conn_params: Dict[str, Any]) -> None:
    """Validate database connection parameters."""
    for key in REQUIRED_KEYS:
        if conn_params.get(key) is None:
            raise KeyError(f'No {key.title()} provided for DB connection')


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY


@log_function_call(logger)
def load_conn_params(env_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load connection parameters from the environment.

    Reads DB_HOST, DB_USER, DB_PASS, DB_DATABASE and the optional DB_PORT,
    after loading ``env_file`` (or a ``.env`` file) with python-dotenv.
    Variables already set in the environment take precedence.

    Returns:
        Keyword arguments for ``Access``
    """
    load_dotenv(env_file)

    port = os.getenv('DB_PORT')
    conn_params = {
        'host': os.getenv('DB_HOST'),
        'user': os.getenv('DB_USER'),
        'password': os.getenv('DB_PASS'),
        'database': os.getenv('DB_DATABASE'),
        'port': int(port) if port else None,
    }
    validate_conn_params(conn_params)
    return conn_params
