"""
Deterministic synthetic job dataset.

generate(count, seed) always returns the same records for the same inputs,
so the "seed if empty" bootstrap produces an identical dataset across
restarts instead of a fresh random one each time.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from core.backfill import DEFAULT_SOURCE_NAME, build_apply_url
from core.prng import SeededStream, to_int
from core.vocabulary import CITIES, COMPANIES, JOB_TYPES, LEVELS, SKILLS, TITLES, WORK_MODES

logger = logging.getLogger(__name__)

ID_WIDTH = 5
MAX_DAYS_AGO = 45
EASY_APPLY_PROBABILITY = 0.55

# Cumulative upper bounds of the verdict roll: 65% / 25% / 10%
VERDICT_THRESHOLDS = (
    (0.65, "certified"),
    (0.90, "pending"),
    (1.00, "rejected"),
)

SCORE_BANDS = {
    "certified": (80, 99),
    "pending": (55, 85),
    "rejected": (20, 60),
}

# Annual salary bands in $k, keyed by level
SALARY_BANDS = {
    "Junior": (80, 115),
    "Associate": (95, 135),
    "Mid": (115, 165),
    "Senior": (150, 220),
    "Staff": (190, 280),
}
DEFAULT_SALARY_BAND = (25, 35)
HOURLY_BAND = (18, 30)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def start_of_day(value: Optional[datetime] = None) -> datetime:
    """Midnight UTC of the given (or current) day."""
    value = value or datetime.now(timezone.utc)
    return value.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)


def roll_verdict(stream: SeededStream) -> str:
    roll = stream.next()
    for threshold, verdict in VERDICT_THRESHOLDS:
        if roll < threshold:
            return verdict
    return VERDICT_THRESHOLDS[-1][1]


def make_title(base_title: str, level: str) -> str:
    if level == "Intern":
        return f"{base_title} Intern"
    return f"{level} {base_title}"


def make_salary(stream: SeededStream, job_type: str, level: str) -> str:
    if job_type == "Internship":
        low = stream.randint(*HOURLY_BAND)
        high = low + stream.randint(4, 12)
        return f"${low}–${high}/hr"

    band_low, band_high = SALARY_BANDS.get(level, DEFAULT_SALARY_BAND)
    spread = band_high - band_low
    low = band_low + stream.randint(0, spread // 2)
    high = band_high - stream.randint(0, spread // 4)
    return f"${low}k–${high}k"


def pick_distinct(stream: SeededStream, items, n: int) -> List[str]:
    """Draw n different items, re-drawing on a repeat."""
    picked: List[str] = []
    while len(picked) < min(n, len(set(items))):
        item = stream.pick(items)
        if item not in picked:
            picked.append(item)
    return picked


def make_description(company: str, title: str, city: str, mode: str, job_type: str, skills: List[str]) -> str:
    return (
        f"{company} is hiring a {title} based in {city}. "
        f"You will work day to day with {skills[0]}, {skills[1]} and {skills[2]} "
        f"as part of a {mode.lower()} team. "
        f"This is a {job_type.lower()} position."
    )


def generate(count: int, seed: int, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """
    Build `count` synthetic job postings from a seeded stream.

    Args:
        count: Number of records; zero, negative or non-numeric yields an empty list
        seed: Integer seed (reduced mod 2^32; non-numeric seeds act as 0)
        now: Reference time for posted_at; defaults to midnight UTC today

    Returns:
        Job dicts with ids "00001", "00002", ...
    """
    stream = SeededStream(seed)
    anchor = now if now is not None else start_of_day()
    jobs = []

    for i in range(1, max(to_int(count), 0) + 1):
        company = stream.pick(COMPANIES)
        base_title = stream.pick(TITLES)
        level = stream.pick(LEVELS)
        job_type = stream.pick(JOB_TYPES)
        city = stream.pick(CITIES)
        mode = stream.pick(WORK_MODES)

        title = make_title(base_title, level)
        days_ago = stream.randint(0, MAX_DAYS_AGO)
        easy_apply = stream.chance(EASY_APPLY_PROBABILITY)
        verdict = roll_verdict(stream)
        score = stream.randint(*SCORE_BANDS[verdict])
        salary = make_salary(stream, job_type, level)
        skills = pick_distinct(stream, SKILLS, 3)

        apply_url = build_apply_url(company)
        jobs.append({
            "id": str(i).zfill(ID_WIDTH),
            "title": title,
            "company": company,
            "location": f"{city} ({mode})",
            "type": job_type,
            "salary": salary,
            "posted_at": format_timestamp(anchor - timedelta(days=days_ago)),
            "verdict": verdict,
            "verification_score": score,
            "description": make_description(company, title, city, mode, job_type, skills),
            "apply_url": apply_url,
            "source_urls": [apply_url],
            "source_names": ["Easy Apply" if easy_apply else DEFAULT_SOURCE_NAME],
            "easy_apply": easy_apply,
        })

    logger.info(f"[generator] Generated {len(jobs)} jobs (seed={seed})")
    return jobs
