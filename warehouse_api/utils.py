"""
Utility functions for the Warehouse Read API.

Common helpers used by the lookup services and the CLI.
"""

import re
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy import inspect


_RECORD_ID_PATTERN = re.compile(r'^[+-]?\d+$')

# Signed 64-bit range of integer primary keys
MIN_RECORD_ID = -(2 ** 63)
MAX_RECORD_ID = 2 ** 63 - 1


def parse_record_id(raw_id: Any) -> Optional[int]:
    """
    Parse a primary key received from a request path.

    Args:
        raw_id: Identifier as received (usually a string)

    Returns:
        int: Parsed identifier, or None if it is not a base-10 integer
            that fits a 64-bit primary key
    """
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        return raw_id if MIN_RECORD_ID <= raw_id <= MAX_RECORD_ID else None

    if raw_id is None:
        return None

    candidate = str(raw_id).strip()
    if not _RECORD_ID_PATTERN.match(candidate):
        logger.debug(f"Rejecting non-integer record id: {raw_id!r}")
        return None

    record_id = int(candidate)
    if not MIN_RECORD_ID <= record_id <= MAX_RECORD_ID:
        logger.debug(f"Rejecting out-of-range record id: {raw_id!r}")
        return None

    return record_id


def record_to_dict(record: Any) -> Dict[str, Any]:
    """
    Convert an ORM instance to a plain dict of its column values.

    Args:
        record: Mapped ORM instance

    Returns:
        dict: Column name to value, in mapper column order
    """
    mapper = inspect(record).mapper
    return {attr.key: getattr(record, attr.key) for attr in mapper.column_attrs}


def redact_detail(detail: str, expose: bool) -> str:
    """Return the error detail to show to clients."""
    if expose and detail:
        return detail
    return "internal error"
