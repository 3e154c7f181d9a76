"""
Input validation for player lookups.

Every lookup keyed by a public id goes through validate_public_id before any
store is touched.
"""

import re
from typing import Optional

from tracker.constants import LookupConstants
from tracker.utils.exceptions import InvalidPublicIdError

_PUBLIC_ID_PATTERN = re.compile(r'[A-Za-z0-9]+')


def validate_public_id(public_id: Optional[str]) -> str:
    """
    Trim and validate a public id.

    Args:
        public_id: Raw id as supplied by the caller

    Returns:
        The trimmed id

    Raises:
        InvalidPublicIdError: if the id is missing, blank, longer than
            MAX_PUBLIC_ID_LENGTH or contains anything but ASCII letters and digits
    """
    if public_id is None:
        raise InvalidPublicIdError()

    trimmed = public_id.strip()
    if not trimmed or len(trimmed) > LookupConstants.MAX_PUBLIC_ID_LENGTH:
        raise InvalidPublicIdError()
    if not _PUBLIC_ID_PATTERN.fullmatch(trimmed):
        raise InvalidPublicIdError()

    return trimmed


def normalize_player_id(player_id: str) -> str:
    """Left-pad a stored player id with zeros to PLAYER_ID_WIDTH."""
    return player_id.rjust(LookupConstants.PLAYER_ID_WIDTH, '0')
