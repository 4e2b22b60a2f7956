"""
Dev-only maintenance endpoints for the JSON store.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.config import Settings, get_env_presence
from app.store import load_db, save_db, seed_jobs
from core.backfill import patch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


class ReseedRequest(BaseModel):
    count: Optional[int] = None
    seed: Optional[int] = None


def _require_dev() -> None:
    if not Settings.is_dev():
        raise HTTPException(status_code=403, detail="Admin endpoints only available in dev mode")


@router.get("/config/env")
async def config_env():
    _require_dev()
    return get_env_presence()


@router.post("/reseed")
async def reseed(body: Optional[ReseedRequest] = None):
    """Replace all jobs with a freshly generated dataset (clears saved lists)."""
    _require_dev()
    count = body.count if body and body.count is not None else Settings.seed_count()
    seed = body.seed if body and body.seed is not None else Settings.seed_value()

    db = load_db()
    total = seed_jobs(db, count, seed)
    save_db(db)

    logger.info(f"[admin] Reseeded {total} jobs (seed={seed})")
    return {"status": "ok", "data": {"total": total, "seed": seed}, "error": None}


@router.post("/backfill")
async def backfill():
    """Fill missing apply links; only writes when something changed."""
    _require_dev()
    db = load_db()
    db["jobs"], changed = patch(db["jobs"])
    if changed:
        save_db(db)
    return {"status": "ok", "data": {"changed": changed, "total": len(db["jobs"])}, "error": None}
