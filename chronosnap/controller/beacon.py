"""
Purpose:
- Client side of the visit log: one POST to /api/log-visit when the app mounts.
- No body; the server derives everything from transport headers.
"""

from __future__ import annotations
from typing import Optional
import httpx

from ..core.settings import settings

class VisitBeacon:
    def __init__(self, url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None,
                 timeout: float = 10.0):
        self.url = url or settings.visit_beacon_url
        self._client = client
        self.timeout = timeout

    async def send(self) -> None:
        """Raises on transport errors or a non-2xx answer; the caller decides what to swallow."""
        headers = {"Content-Type": "application/json"}
        if self._client is not None:
            r = await self._client.post(self.url, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(self.url, headers=headers)
        r.raise_for_status()
