"""
Job listing API.

Public list/detail endpoints plus create/edit/delete for company accounts.
Edits and deletes are restricted to the account that posted the job.
"""
import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from pydantic import BaseModel

from app.listing import normalize_filters, query_jobs
from app.rate_limit import limiter, RATE_LIMIT_SEARCH, RATE_LIMIT_SUBMIT
from app.store import find_job, load_db, remove_job, save_db
from core.backfill import ensure_apply_url
from core.generator import SCORE_BANDS, format_timestamp
from core.vocabulary import JOB_TYPES, VERDICTS
from security.auth import company_required

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])

DEFAULT_JOB_TYPE = "Full-time"
DEFAULT_VERDICT = "pending"
EDITABLE_FIELDS = (
    "title",
    "company",
    "location",
    "type",
    "salary",
    "availability",
    "description",
    "apply_url",
    "posted_at",
    "verdict",
    "verification_score",
    "source_urls",
    "source_names",
    "easy_apply",
)


class JobCreateRequest(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    salary: Optional[str] = None
    availability: Optional[str] = None
    description: Optional[str] = None
    apply_url: Optional[str] = None
    posted_at: Optional[str] = None
    verdict: Optional[str] = None
    verification_score: Optional[int] = None
    source_urls: Optional[List[str]] = None
    source_names: Optional[List[str]] = None
    easy_apply: Optional[bool] = None


class JobUpdateRequest(JobCreateRequest):
    pass


def _clean(value: Optional[str]) -> str:
    return str(value or "").strip()


def normalize_job_type(value: Optional[str]) -> str:
    """Map a job type onto the canonical spelling. Raises 400 on unknown types."""
    if not _clean(value):
        return DEFAULT_JOB_TYPE
    wanted = _clean(value).lower().replace(" ", "-")
    for job_type in JOB_TYPES:
        if job_type.lower() == wanted:
            return job_type
    raise HTTPException(
        status_code=400,
        detail=f"type must be one of: {', '.join(JOB_TYPES)}"
    )


def normalize_verdict(value: Optional[str]) -> str:
    if not _clean(value):
        return DEFAULT_VERDICT
    verdict = _clean(value).lower()
    if verdict not in VERDICTS:
        raise HTTPException(
            status_code=400,
            detail=f"verdict must be one of: {', '.join(VERDICTS)}"
        )
    return verdict


def normalize_score(verdict: str, score: Optional[int]) -> int:
    """Keep a score inside its verdict band, defaulting to the band floor."""
    low, high = SCORE_BANDS[verdict]
    if score is None or not low <= score <= high:
        return low
    return score


def build_job(body: JobCreateRequest, owner_id: str) -> Dict[str, Any]:
    title = _clean(body.title)
    company = _clean(body.company)
    if not title or not company:
        raise HTTPException(
            status_code=400,
            detail='Both "title" and "company" are required fields.'
        )

    verdict = normalize_verdict(body.verdict)
    job = {
        "id": secrets.token_hex(12),
        "title": title,
        "company": company,
        "location": _clean(body.location),
        "type": normalize_job_type(body.type),
        "salary": _clean(body.salary),
        "posted_at": _clean(body.posted_at) or format_timestamp(datetime.now(timezone.utc)),
        "verdict": verdict,
        "verification_score": normalize_score(verdict, body.verification_score),
        "description": _clean(body.description),
        "apply_url": _clean(body.apply_url),
        "source_urls": list(body.source_urls or []),
        "source_names": list(body.source_names or []),
        "easy_apply": bool(body.easy_apply),
        "postedBy": owner_id,
    }
    if _clean(body.availability):
        job["availability"] = _clean(body.availability)

    job, _ = ensure_apply_url(job)
    return job


def apply_updates(job: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Merge a partial update into a job. id and postedBy never change."""
    updated = dict(job)

    for field in EDITABLE_FIELDS:
        if field not in updates:
            continue
        value = updates[field]
        if field in ("title", "company"):
            if not _clean(value):
                raise HTTPException(status_code=400, detail=f'"{field}" cannot be empty')
            updated[field] = _clean(value)
        elif field == "type":
            updated["type"] = normalize_job_type(value)
        elif field == "verdict":
            updated["verdict"] = normalize_verdict(value)
        elif field in ("source_urls", "source_names"):
            updated[field] = list(value or [])
        elif field == "easy_apply":
            updated[field] = bool(value)
        elif field == "verification_score":
            updated[field] = value
        else:
            updated[field] = _clean(value)

    if "verdict" in updates or "verification_score" in updates:
        updated["verification_score"] = normalize_score(
            updated["verdict"], updated.get("verification_score")
        )

    updated, _ = ensure_apply_url(updated)
    return updated


def _owned_job(db: Dict[str, Any], job_id: str, user: Dict[str, Any]) -> Dict[str, Any]:
    job = find_job(db, job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.get("postedBy") != user["id"]:
        raise HTTPException(status_code=403, detail="Only the posting account can modify this job")
    return job


@router.get("")
@limiter.limit(RATE_LIMIT_SEARCH)
async def list_jobs(
    request: Request,
    q: Optional[str] = Query(None, description="Search title and company"),
    location: Optional[str] = Query(None, description="Substring match on location"),
    job_type: Optional[str] = Query(None, alias="type", description="Employment type"),
    verdict: Optional[str] = Query(None, description="certified, pending or rejected"),
    certified: Optional[bool] = Query(None, description="Only certified jobs"),
    easy_apply: Optional[bool] = Query(None, description="Filter by easy apply"),
    posted_by: Optional[str] = Query(None, description="Filter by posting account"),
    sort: Optional[str] = Query(None, description="Sort order: recent, score, company"),
    page: int = Query(1, description="Page number"),
    size: int = Query(20, description="Page size"),
):
    filters = normalize_filters(
        q=q,
        location=location,
        job_type=job_type,
        verdict=verdict,
        certified=certified,
        easy_apply=easy_apply,
        posted_by=posted_by,
    )
    result = query_jobs(load_db()["jobs"], filters, sort=sort, page=page, size=size)
    return {
        "status": "ok",
        "data": result,
        "error": None,
    }


@router.get("/{job_id}")
async def get_job(job_id: str):
    job = find_job(load_db(), job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("", status_code=201)
@limiter.limit(RATE_LIMIT_SUBMIT)
async def create_job(
    request: Request,
    body: JobCreateRequest,
    user: dict = Depends(company_required),
):
    """Post a new job as the signed-in company."""
    job = build_job(body, user["id"])

    db = load_db()
    db["jobs"].append(job)
    save_db(db)

    logger.info(f"[jobs] {user['id']} posted job {job['id']}")
    return job


@router.patch("/{job_id}")
async def update_job(
    job_id: str,
    body: JobUpdateRequest,
    user: dict = Depends(company_required),
):
    """Partially update a job owned by the signed-in company."""
    db = load_db()
    job = _owned_job(db, job_id, user)
    updated = apply_updates(job, body.model_dump(exclude_unset=True))

    db["jobs"] = [updated if existing is job else existing for existing in db["jobs"]]
    save_db(db)

    logger.info(f"[jobs] {user['id']} updated job {job_id}")
    return updated


@router.delete("/{job_id}", status_code=204)
async def delete_job(
    job_id: str,
    user: dict = Depends(company_required),
):
    db = load_db()
    _owned_job(db, job_id, user)
    remove_job(db, job_id)
    save_db(db)

    logger.info(f"[jobs] {user['id']} deleted job {job_id}")
    return Response(status_code=204)
