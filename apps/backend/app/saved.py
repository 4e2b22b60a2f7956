"""
Saved-jobs API endpoints.

Per-user lists of saved job ids, persisted in the JSON store.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.store import find_job, load_db, save_db, saved_ids
from security.auth import user_required

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/saved", tags=["saved"])


class SavedToggleResponse(BaseModel):
    saved: bool
    job_id: str


def _require_job(db: Dict[str, Any], job_id: str) -> None:
    if find_job(db, job_id) is None:
        raise HTTPException(status_code=404, detail="Job not found")


@router.get("")
async def get_saved(user: dict = Depends(user_required)) -> dict:
    """
    Get the user's saved jobs, most recently saved last.

    Returns:
        {job_ids: [str], items: [job]}
    """
    db = load_db()
    job_ids = saved_ids(db, user["id"])

    items = []
    for job_id in job_ids:
        job = find_job(db, job_id)
        # Jobs deleted after being saved are skipped
        if job is not None:
            items.append(job)

    return {"job_ids": job_ids, "items": items}


@router.post("/{job_id}", response_model=SavedToggleResponse)
async def save_job(job_id: str, user: dict = Depends(user_required)) -> dict:
    db = load_db()
    _require_job(db, job_id)

    job_ids = saved_ids(db, user["id"])
    if job_id not in job_ids:
        job_ids.append(job_id)
        db["saved"][user["id"]] = job_ids
        save_db(db)

    return {"saved": True, "job_id": job_id}


@router.delete("/{job_id}", response_model=SavedToggleResponse)
async def unsave_job(job_id: str, user: dict = Depends(user_required)) -> dict:
    db = load_db()

    job_ids = saved_ids(db, user["id"])
    if job_id in job_ids:
        db["saved"][user["id"]] = [saved_id for saved_id in job_ids if saved_id != job_id]
        save_db(db)

    return {"saved": False, "job_id": job_id}


@router.post("/{job_id}/toggle", response_model=SavedToggleResponse)
async def toggle_saved(job_id: str, user: dict = Depends(user_required)) -> dict:
    """
    Toggle a job in the user's saved list.

    Returns:
        {saved: bool, job_id: str}
    """
    db = load_db()
    job_ids = saved_ids(db, user["id"])

    if job_id in job_ids:
        db["saved"][user["id"]] = [saved_id for saved_id in job_ids if saved_id != job_id]
        saved = False
    else:
        _require_job(db, job_id)
        db["saved"][user["id"]] = job_ids + [job_id]
        saved = True

    save_db(db)
    logger.info(f"[saved] {user['id']} {'saved' if saved else 'removed'} job {job_id}")
    return {"saved": saved, "job_id": job_id}
