"""
Purpose:
- Append-only visit log kept in a redis list (LPUSH to write, LRANGE to read).
- Newest entry sits at the head, so a 0..N-1 range is most-recent-first.

Notes:
- No retention policy: the list grows without bound (LTRIM deliberately not applied).
- A stored value that is not a valid entry comes back as a sentinel, never an exception.
"""

from __future__ import annotations
import json
from datetime import datetime, timezone
from typing import List, Optional

import redis
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.settings import settings

def utc_now_iso() -> str:
    # ISO-8601 with milliseconds and a Z suffix (what the browser's toISOString emits)
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

class VisitLogEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ip: str
    timestamp: str
    user_agent: str = Field(alias="userAgent")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def parse_error(cls) -> "VisitLogEntry":
        return cls(ip="error", timestamp=utc_now_iso(), user_agent="Parse Error")

def decode_entry(raw) -> VisitLogEntry:
    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        data = json.loads(raw) if isinstance(raw, str) else raw
        return VisitLogEntry.model_validate(data)
    except (UnicodeDecodeError, ValueError, TypeError, ValidationError):
        return VisitLogEntry.parse_error()

class VisitLogStore:
    def __init__(self, client: redis.Redis, key: Optional[str] = None, fetch_limit: Optional[int] = None):
        self.client = client
        self.key = key or settings.visit_log_key
        self.fetch_limit = fetch_limit or settings.visit_log_fetch_limit

    def append(self, entry: VisitLogEntry) -> None:
        self.client.lpush(self.key, entry.to_json())

    def recent(self) -> List[VisitLogEntry]:
        raw_entries = self.client.lrange(self.key, 0, self.fetch_limit - 1)
        return [decode_entry(r) for r in raw_entries]

_STORE_SINGLETON: Optional[VisitLogStore] = None

def get_visit_store() -> VisitLogStore:
    """
    Return a cached store bound to settings.redis_url (FastAPI dependency).
    """
    global _STORE_SINGLETON
    if _STORE_SINGLETON is None:
        _STORE_SINGLETON = VisitLogStore(redis.Redis.from_url(settings.redis_url, decode_responses=True))
    return _STORE_SINGLETON
