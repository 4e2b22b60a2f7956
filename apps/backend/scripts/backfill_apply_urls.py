"""
Backfill apply links for jobs imported or edited without one.
Only rewrites the database file when a record actually changed.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from app.config import Settings
from app.store import load_db, save_db
from core.backfill import patch


def backfill_apply_urls(dry_run: bool = False) -> bool:
    db = load_db()
    print(f"Database: {Settings.db_file()} ({len(db['jobs'])} jobs)")

    missing = sum(1 for job in db["jobs"] if not job.get("apply_url"))
    print(f"Found {missing} jobs without an apply_url")

    db["jobs"], changed = patch(db["jobs"])
    if not changed:
        print("✅ Nothing to backfill")
        return False

    if dry_run:
        print("DRY RUN MODE - No updates will be made")
        return True

    save_db(db)
    print("✅ Backfilled apply links")
    return True


if __name__ == '__main__':
    import argparse

    load_dotenv()

    parser = argparse.ArgumentParser(description='Backfill apply_url/source_urls for existing jobs')
    parser.add_argument('--dry-run', action='store_true', help='Dry run mode (no file writes)')

    args = parser.parse_args()

    backfill_apply_urls(dry_run=args.dry_run)
