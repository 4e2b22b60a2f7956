"""
Write a generated job dataset into the JSON store.
Leaves an existing non-empty job list alone unless --force is given.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from app.config import Settings
from app.store import load_db, save_db, seed_jobs


def seed(count: int, seed_value: int, force: bool = False, dry_run: bool = False) -> int:
    """
    Seed the job list.

    Args:
        count: Number of jobs to generate
        seed_value: Seed for the deterministic generator
        force: Replace existing jobs (clears saved lists)
        dry_run: If True, don't write the database file

    Returns:
        Number of jobs written (0 when nothing was done)
    """
    db = load_db()
    existing = len(db["jobs"])
    print(f"Database: {Settings.db_file()} ({existing} jobs)")

    if existing and not force:
        print("Job list is not empty; use --force to replace it")
        return 0

    total = seed_jobs(db, count, seed_value)

    if dry_run:
        print(f"DRY RUN MODE - would write {total} jobs (seed={seed_value})")
        return 0

    save_db(db)
    print(f"✅ Wrote {total} jobs (seed={seed_value})")
    return total


if __name__ == '__main__':
    import argparse

    load_dotenv()

    parser = argparse.ArgumentParser(description='Seed the job database with a generated dataset')
    parser.add_argument('--count', type=int, default=Settings.seed_count(), help='Number of jobs to generate')
    parser.add_argument('--seed', type=int, default=Settings.seed_value(), help='Generator seed')
    parser.add_argument('--force', action='store_true', help='Replace existing jobs')
    parser.add_argument('--dry-run', action='store_true', help='Dry run mode (no file writes)')

    args = parser.parse_args()

    seed(args.count, args.seed, force=args.force, dry_run=args.dry_run)
