"""
Core Utilities.

Shared clock helpers. Notes are stamped in integer milliseconds since
the Unix epoch; everything else in the application uses naive UTC
datetimes.
"""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC time as timezone-naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def now_ms() -> int:
    """Return the current time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000
