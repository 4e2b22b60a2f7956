"""
Flat JSON file "database" for jobs, users and saved lists.

The whole document is re-read at the start and rewritten at the end of
every mutating request. There is no locking and no durability guarantee.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from app.config import Settings
from core.backfill import patch
from core.generator import generate

logger = logging.getLogger(__name__)

DB_KEYS = ("jobs", "users", "saved")


def empty_db() -> Dict[str, Any]:
    return {"jobs": [], "users": [], "saved": {}}


def load_db() -> Dict[str, Any]:
    """Load the database document. Missing or unreadable files yield an empty one."""
    path = Settings.db_file()
    if not path.exists():
        return empty_db()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except Exception as e:
        logger.warning(f"[store] Error reading {path}: {e}, starting fresh")
        return empty_db()

    # Early iterations stored a bare list of jobs
    if isinstance(data, list):
        data = {"jobs": data}
    if not isinstance(data, dict):
        logger.warning(f"[store] Unexpected document type in {path}, starting fresh")
        return empty_db()

    db = empty_db()
    for key in DB_KEYS:
        if isinstance(data.get(key), type(db[key])):
            db[key] = data[key]

    # Drop malformed records instead of failing later on .get()
    for key in ("jobs", "users"):
        records = [record for record in db[key] if isinstance(record, dict)]
        if len(records) < len(db[key]):
            logger.warning(f"[store] Dropped {len(db[key]) - len(records)} malformed {key} records from {path}")
        db[key] = records

    saved = {}
    for user_id, job_ids in db["saved"].items():
        if isinstance(job_ids, list):
            saved[user_id] = [str(job_id) for job_id in job_ids]
        else:
            logger.warning(f"[store] Dropped malformed saved list for {user_id} in {path}")
    db["saved"] = saved
    return db


def save_db(db: Dict[str, Any]) -> None:
    path = Settings.db_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(db, f, indent=2, ensure_ascii=False)


def find_job(db: Dict[str, Any], job_id: str) -> Optional[Dict[str, Any]]:
    for job in db["jobs"]:
        if str(job.get("id")) == job_id:
            return job
    return None


def find_user(db: Dict[str, Any], user_id: Optional[str] = None, email: Optional[str] = None) -> Optional[Dict[str, Any]]:
    for user in db["users"]:
        if user_id is not None and user.get("id") == user_id:
            return user
        if email is not None and user.get("email") == email:
            return user
    return None


def remove_job(db: Dict[str, Any], job_id: str) -> bool:
    """Delete a job and strip it from every saved list."""
    before = len(db["jobs"])
    db["jobs"] = [job for job in db["jobs"] if str(job.get("id")) != job_id]
    for user_id, job_ids in db["saved"].items():
        db["saved"][user_id] = [saved_id for saved_id in job_ids if saved_id != job_id]
    return len(db["jobs"]) < before


def saved_ids(db: Dict[str, Any], user_id: str) -> List[str]:
    return list(db["saved"].get(user_id, []))


def seed_jobs(db: Dict[str, Any], count: int, seed: int) -> int:
    db["jobs"] = generate(count, seed)
    db["saved"] = {}
    return len(db["jobs"])


def bootstrap() -> Dict[str, Any]:
    """
    Idempotent startup step.

    Seeds the job list when it is empty, then backfills apply links and
    writes the file only when something changed.
    """
    db = load_db()
    seeded = False

    if not db["jobs"]:
        count = Settings.seed_count()
        seed = Settings.seed_value()
        if count > 0:
            seed_jobs(db, count, seed)
            seeded = True
            logger.info(f"[store] Seeded {count} jobs (seed={seed})")

    db["jobs"], patched = patch(db["jobs"])

    if seeded or patched:
        save_db(db)

    return {
        "seeded": seeded,
        "patched": patched,
        "total": len(db["jobs"]),
    }
