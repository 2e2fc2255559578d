from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def parse_sportmonks_datetime(value: Any, *, timestamp: Any = None) -> datetime | None:
    """
    Parse a SportMonks kickoff into a tz-aware UTC datetime.

    Supports:
      - `starting_at_timestamp` (epoch seconds), preferred when present
      - "YYYY-MM-DD HH:MM:SS" (UTC without offset)
      - ISO strings: "2024-12-26T15:00:00Z" / "+00:00"

    Returns None instead of raising on bad input.
    """
    if isinstance(timestamp, int) and not isinstance(timestamp, bool):
        return datetime.fromtimestamp(timestamp, tz=UTC)

    if not isinstance(value, str) or not value.strip():
        return None

    v = value.strip().replace(" ", "T", 1)
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(v)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
