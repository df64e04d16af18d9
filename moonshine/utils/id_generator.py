"""
ID and timestamp helpers for Moonshine.

Mash IDs are plain UUID4 strings so they stay compatible with the
desktop application that shares the database. Timestamps are
millisecond epoch integers.
"""

import time
from uuid import uuid4


def generate_mash_id() -> str:
    """
    Generate unique Mash ID.

    Returns:
        UUID4 string, e.g. "3f2b8c1e-..."
    """
    return str(uuid4())


def now_ms() -> int:
    """Current time as milliseconds since the epoch."""
    return int(time.time() * 1000)
