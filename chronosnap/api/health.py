
# Common language: Environment/ops probe that surfaces version pins, credential presence and store status.
# Use this before/after upgrades to confirm no silent drift.

from fastapi import APIRouter, Depends
import sys, importlib
import redis

from ..core.settings import settings
from ..catalog.eras import ERAS, all_scenes
from ..generation.client import ImageGenerationClient, get_generation_client
from ..visits.store import VisitLogStore, get_visit_store

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except Exception:
        return "not-installed"

def _store_status(store: VisitLogStore) -> dict:
    try:
        store.client.ping()
        return {"reachable": True, "key": store.key, "length": store.client.llen(store.key)}
    except redis.RedisError as e:
        return {"reachable": False, "key": store.key, "error": repr(e)}

@router.get("/healthz")
def healthz(
    gen: ImageGenerationClient = Depends(get_generation_client),
    store: VisitLogStore = Depends(get_visit_store),
):
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "pydantic_settings": _ver("pydantic_settings"),
            "httpx": _ver("httpx"),
            "PIL": _ver("PIL"),
            "redis": _ver("redis"),
            "google.genai": _ver("google.genai"),
        },
        "config": {
            "image_model": gen.model,
            "visit_log_key": settings.visit_log_key,
        },
        "env_keys_present": {
            "API_KEY": gen.configured,
        },
        "catalog": {"eras": len(ERAS), "scenes": len(all_scenes())},
        "visit_store": _store_status(store),
    }
