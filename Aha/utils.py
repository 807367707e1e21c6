from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:16]}"


def as_utc(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values pass through."""
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return as_utc(dt)


def days_between(earlier: Optional[datetime], later: datetime) -> float:
    if earlier is None:
        return 0.0
    return (later - earlier).total_seconds() / 86400.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
