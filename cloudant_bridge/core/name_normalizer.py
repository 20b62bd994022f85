"""
Database name normalization.

Backend database names must be lowercase, must not start with an
underscore, and may not contain whitespace or path separators.

Dependencies: re (stdlib)
System role: Turns a user-supplied database name into a legal one
"""

import re

from cloudant_bridge.core.exceptions import DatabaseNameWarning

_SEPARATORS = re.compile(r"[\s\\/]+")


def normalize_database_name(raw: str) -> str:
    """
    Sanitize a database name.

    Lowercases, strips leading underscores, and collapses every run of
    whitespace or slashes into a single hyphen. Idempotent.

    Args:
        raw: Database name as configured

    Returns:
        str: Backend-legal database name
    """
    name = raw.lower().lstrip("_")
    return _SEPARATORS.sub("-", name)


def clean_database_name(raw: str) -> tuple[str, DatabaseNameWarning | None]:
    """
    Normalize a database name and report whether it changed.

    Args:
        raw: Database name as configured

    Returns:
        tuple: (normalized name, warning when the name was altered)
    """
    name = normalize_database_name(raw)
    if name != raw:
        return name, DatabaseNameWarning(raw, name)
    return name, None
