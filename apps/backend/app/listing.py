"""
Job list filtering, sorting and pagination.

All matching is linear over the in-memory job list:
- q: case-insensitive substring of "title company"
- location: case-insensitive substring
- type / verdict: case-insensitive exact match
"""
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("recent", "score", "company")
DEFAULT_SORT = "recent"
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def clamp_page(page: Optional[int]) -> int:
    return max(1, page or 1)


def clamp_size(size: Optional[int]) -> int:
    if size is None:
        return DEFAULT_PAGE_SIZE
    return min(MAX_PAGE_SIZE, max(1, size))


def normalize_sort(sort: Optional[str]) -> str:
    sort = (sort or "").strip().lower()
    return sort if sort in SORT_OPTIONS else DEFAULT_SORT


def parse_posted_at(value: Any) -> datetime:
    """Parse posted_at for ordering; unparseable values sort as oldest."""
    if not value:
        return _EPOCH
    try:
        parsed = date_parser.isoparse(str(value))
    except (ValueError, OverflowError):
        try:
            parsed = date_parser.parse(str(value))
        except (ValueError, OverflowError):
            return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_filters(
    q: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    verdict: Optional[str] = None,
    certified: Optional[bool] = None,
    easy_apply: Optional[bool] = None,
    posted_by: Optional[str] = None,
) -> Dict[str, Any]:
    """Drop empty filters and lower-case the text ones."""
    filters: Dict[str, Any] = {}

    if q and q.strip():
        filters["q"] = q.strip().lower()
    if location and location.strip():
        filters["location"] = location.strip().lower()
    if job_type and job_type.strip():
        filters["type"] = job_type.strip().lower()
    if certified:
        filters["verdict"] = "certified"
    elif verdict and verdict.strip():
        filters["verdict"] = verdict.strip().lower()
    if easy_apply is not None:
        filters["easy_apply"] = easy_apply
    if posted_by:
        filters["posted_by"] = posted_by

    return filters


def matches(job: Dict[str, Any], filters: Dict[str, Any]) -> bool:
    if "q" in filters:
        haystack = f"{job.get('title') or ''} {job.get('company') or ''}".lower()
        if filters["q"] not in haystack:
            return False
    if "location" in filters:
        if filters["location"] not in str(job.get("location") or "").lower():
            return False
    if "type" in filters:
        if str(job.get("type") or "").lower() != filters["type"]:
            return False
    if "verdict" in filters:
        if str(job.get("verdict") or "").lower() != filters["verdict"]:
            return False
    if "easy_apply" in filters:
        if bool(job.get("easy_apply")) != filters["easy_apply"]:
            return False
    if "posted_by" in filters:
        if job.get("postedBy") != filters["posted_by"]:
            return False
    return True


def sort_jobs(jobs: List[Dict[str, Any]], sort: str) -> List[Dict[str, Any]]:
    if sort == "score":
        return sorted(jobs, key=lambda j: j.get("verification_score") or 0, reverse=True)
    if sort == "company":
        return sorted(jobs, key=lambda j: (str(j.get("company") or "").lower(), str(j.get("title") or "").lower()))
    return sorted(jobs, key=lambda j: parse_posted_at(j.get("posted_at")), reverse=True)


def query_jobs(
    jobs: List[Dict[str, Any]],
    filters: Dict[str, Any],
    sort: Optional[str] = None,
    page: Optional[int] = None,
    size: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Filter, sort and slice a job list.

    Returns:
        {items, total, page, size, pages, sort}
    """
    page = clamp_page(page)
    size = clamp_size(size)
    sort = normalize_sort(sort)

    matched = [job for job in jobs if matches(job, filters)]
    ordered = sort_jobs(matched, sort)
    start = (page - 1) * size

    return {
        "items": ordered[start:start + size],
        "total": len(ordered),
        "page": page,
        "size": size,
        "pages": math.ceil(len(ordered) / size) if ordered else 0,
        "sort": sort,
    }
