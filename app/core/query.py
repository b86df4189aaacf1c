"""Small helpers shared by the Supabase-backed services."""
from datetime import datetime, timezone
from typing import Iterable, Optional
import re

# Characters with meaning inside a PostgREST or=() filter
_FILTER_SPECIAL = re.compile(r"[,()%*\\]")


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def ilike_any(columns: Iterable[str], term: Optional[str]) -> Optional[str]:
    """
    Build an or=() filter matching `term` case-insensitively as a substring
    of any of the columns. Returns None for blank terms.
    """
    if not term:
        return None
    cleaned = _FILTER_SPECIAL.sub(" ", term).strip()
    if not cleaned:
        return None
    return ",".join(f"{column}.ilike.%{cleaned}%" for column in columns)


def first_row(result) -> Optional[dict]:
    """Row from a maybe_single()/single() or list response, tolerating a None response."""
    if result is None or not result.data:
        return None
    if isinstance(result.data, list):
        return result.data[0]
    return result.data


def parse_timestamp(value) -> Optional[datetime]:
    """Parse a timestamptz string (or datetime) as an aware datetime; naive values are UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
