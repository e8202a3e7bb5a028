"""
sqlwrapper Access - Bound Parameters
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Type tags for values bound to prepared statements.

Every bound value is described by a single-character tag:

    ``i``  booleans and integers
    ``d``  floats
    ``s``  strings
    ``b``  blobs (only through ``blob_overrides`` or ``Param.blob``)

:copyright: (c) 2024-present sqlwrapper contributors
"""

from typing import Any, Iterable, List, NamedTuple, Optional, Union
from .base import UnsupportedParameterType

INTEGER = 'i'
DOUBLE = 'd'
STRING = 's'
BLOB = 'b'


class Param(NamedTuple):
    """A bound value whose tag was chosen by the caller."""

    tag: str
    value: Any

    @classmethod
    def boolean(cls, value: bool) -> 'Param':
        return cls(INTEGER, value)

    @classmethod
    def integer(cls, value: int) -> 'Param':
        return cls(INTEGER, value)

    @classmethod
    def real(cls, value: float) -> 'Param':
        return cls(DOUBLE, value)

    @classmethod
    def string(cls, value: str) -> 'Param':
        return cls(STRING, value)

    @classmethod
    def blob(cls, value: Union[bytes, str]) -> 'Param':
        return cls(BLOB, value)


def as_list(values) -> List[Any]:
    """Treat ``None`` as no values and a scalar as a one-element list."""
    if values is None:
        return []
    if isinstance(values, (list, tuple)) and not isinstance(values, Param):
        return list(values)
    return [values]


def infer_type(value: Any) -> str:
    """Get the tag for a single bound value."""
    if isinstance(value, Param):
        return value.tag
    # bool is a subclass of int, both bind as integers
    if isinstance(value, int):
        return INTEGER
    if isinstance(value, float):
        return DOUBLE
    if isinstance(value, str):
        return STRING
    raise UnsupportedParameterType(value)


def infer_types(values, blob_overrides: Optional[Iterable[int]] = None) -> str:
    """
    Build the type string for a list of bound values.

    Args:
        values: Bound values, or a single scalar value
        blob_overrides: Positions whose tag is forced to ``b``. No checks are
            made on the original type; positions out of range are ignored.

    Returns:
        One tag per value, in order
    """
    types = [infer_type(value) for value in as_list(values)]
    for pos in blob_overrides or ():
        if -len(types) <= pos < len(types):
            types[pos] = BLOB
    return ''.join(types)


def coerce(value: Any, tag: str) -> Any:
    """Convert a value to what the driver should bind for ``tag``."""
    if isinstance(value, Param):
        value = value.value
    if tag == INTEGER:
        return int(value)
    if tag == DOUBLE:
        return float(value)
    if tag == STRING:
        return str(value)
    if tag == BLOB:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        return str(value).encode('utf-8')
    raise ValueError(f"Unknown type tag: {tag!r}")


def bind_values(values, types: str) -> tuple:
    """Coerce every value with its tag from ``types``."""
    bound = []
    for value, tag in zip(as_list(values), types):
        try:
            bound.append(coerce(value, tag))
        except (TypeError, ValueError) as e:
            raise UnsupportedParameterType(value, tag) from e
    return tuple(bound)
