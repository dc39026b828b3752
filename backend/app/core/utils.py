"""
Utility functions
"""

import math
from typing import Optional
from datetime import datetime, timezone


def format_timestamp_with_timezone(timestamp: Optional[datetime]) -> Optional[str]:
    """Format a timestamp, making sure it carries the UTC 'Z' suffix"""
    if not timestamp:
        return None
    # Stored timestamps are naive UTC, the frontend needs the 'Z'
    return timestamp.isoformat() + 'Z'


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, e.g. 6.25 -> 6.3 and 2.5 -> 3"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def utc_now() -> datetime:
    """Naive UTC now, the format every timestamp column stores"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
