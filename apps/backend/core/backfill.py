"""
Apply-link backfill for job records.

Imported or hand-edited records can arrive without an apply link. Instead
of rejecting them, this pass derives one from the company name and fills
the source lists so every job stays actionable:

1. apply_url: search-engine query for the company's careers page
2. source_urls: [apply_url] when empty
3. source_names: padded or trimmed so it stays parallel to source_urls

No other field is touched, and running the pass twice is a no-op.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple
from urllib.parse import quote_plus

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.google.com/search?q={query}"
DEFAULT_SOURCE_NAME = "Careers Search"


def build_apply_url(company: str) -> str:
    """Search URL for a company's careers page. Never empty."""
    company = (company or "").strip()
    query = f"{company} careers" if company else "jobs"
    return SEARCH_URL.format(query=quote_plus(query))


def ensure_apply_url(job: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """
    Fill apply_url, source_urls and source_names on a single job.

    Returns:
        (job copy, whether anything was filled in)
    """
    fixed = dict(job)
    changed = False

    apply_url = fixed.get("apply_url")
    if not isinstance(apply_url, str) or not apply_url.strip():
        fixed["apply_url"] = build_apply_url(str(fixed.get("company") or ""))
        changed = True

    source_urls = fixed.get("source_urls")
    if not isinstance(source_urls, list) or not source_urls:
        fixed["source_urls"] = [fixed["apply_url"]]
        changed = True

    source_names = fixed.get("source_names")
    if not isinstance(source_names, list):
        source_names = []
        changed = True
    if len(source_names) < len(fixed["source_urls"]):
        missing = len(fixed["source_urls"]) - len(source_names)
        source_names = list(source_names) + [DEFAULT_SOURCE_NAME] * missing
        changed = True
    elif len(source_names) > len(fixed["source_urls"]):
        # Names without a matching url are dropped
        source_names = list(source_names[:len(fixed["source_urls"])])
        changed = True
    fixed["source_names"] = source_names

    return fixed, changed


def patch(existing: Sequence[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], bool]:
    """
    Backfill apply links across a dataset.

    Args:
        existing: Job records, left unmodified. Non-dict entries are dropped.

    Returns:
        (patched copies, True if any record needed a fix)
    """
    patched = []
    repaired = 0
    for job in existing:
        if not isinstance(job, dict):
            repaired += 1
            continue
        fixed, changed = ensure_apply_url(job)
        patched.append(fixed)
        if changed:
            repaired += 1

    if repaired:
        logger.info(f"[backfill] Filled apply links on {repaired} of {len(patched)} jobs")
    return patched, repaired > 0
