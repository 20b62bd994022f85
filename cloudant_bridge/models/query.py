"""
Operation and query mode enums.

Values match the identifiers stored in flow node configurations.
"""

from enum import Enum


class Operation(str, Enum):
    """Write operation performed by an outbound node."""

    INSERT = "insert"
    DELETE = "delete"


class QueryMode(str, Enum):
    """Read strategy used by an inbound node."""

    BY_ID = "_id_"
    BY_INDEX = "_idx_"
    ALL = "_all_"
