"""
Purpose:
- /api/log-visit : record one page load (POST only).
- /api/get-stats : last 100 visits, most recent first (GET only).

Both routes accept every verb so a mismatch answers 405 with the JSON error body
before the store is touched.
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
import redis

from ..visits.store import VisitLogEntry, VisitLogStore, get_visit_store, utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["visits"])

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

def _method_not_allowed() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})

def _client_origin(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded
    if request.client and request.client.host:
        return request.client.host
    return "unknown"

@router.api_route("/log-visit", methods=ALL_METHODS)
def log_visit(request: Request, store: VisitLogStore = Depends(get_visit_store)):
    if request.method != "POST":
        return _method_not_allowed()

    entry = VisitLogEntry(
        ip=_client_origin(request),
        timestamp=utc_now_iso(),
        user_agent=request.headers.get("user-agent") or "unknown",
    )
    try:
        store.append(entry)
    except redis.RedisError:
        logger.exception("Redis logging error")
        return JSONResponse(status_code=500, content={"error": "Failed to log visit"})
    return {"success": True}

@router.api_route("/get-stats", methods=ALL_METHODS)
def get_stats(request: Request, store: VisitLogStore = Depends(get_visit_store)):
    if request.method != "GET":
        return _method_not_allowed()

    try:
        logs = store.recent()
    except redis.RedisError:
        logger.exception("Redis fetch error")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch stats"})
    return {"logs": [e.model_dump(by_alias=True) for e in logs]}
