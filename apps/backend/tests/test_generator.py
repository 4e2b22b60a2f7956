"""
Unit tests for core/generator.py

Tests the synthetic dataset properties:
- Reproducibility for a fixed (count, seed)
- apply_url / source_urls invariants
- Score bands per verdict
- Salary formats per employment type
"""

import re
from datetime import datetime, timezone

import pytest
from core.generator import (
    SCORE_BANDS,
    generate,
    make_salary,
    make_title,
    pick_distinct,
    roll_verdict,
    start_of_day,
)
from core.prng import SeededStream
from core.vocabulary import CITIES, COMPANIES, JOB_TYPES, SKILLS, VERDICTS, WORK_MODES

NOW = datetime(2026, 10, 16, 0, 0, 0, tzinfo=timezone.utc)
HOURLY_RE = re.compile(r"^\$\d+–\$\d+/hr$")
ANNUAL_RE = re.compile(r"^\$\d+k–\$\d+k$")
SKILLS_RE = re.compile(r"with (.+), (.+) and (.+) as part of")

FIELDS = {
    "id", "title", "company", "location", "type", "salary", "posted_at",
    "verdict", "verification_score", "description", "apply_url",
    "source_urls", "source_names", "easy_apply",
}


@pytest.fixture(scope="module")
def dataset():
    return generate(2000, 250, now=NOW)


class TestReproducibility:
    def test_same_inputs_same_dataset(self):
        assert generate(300, 42, now=NOW) == generate(300, 42, now=NOW)

    def test_example_first_record_stable(self):
        first = generate(5, 250)
        second = generate(5, 250)
        for field in ("title", "company", "posted_at"):
            assert first[0][field] == second[0][field]

    def test_different_seed_different_dataset(self):
        assert generate(50, 1, now=NOW) != generate(50, 2, now=NOW)

    def test_prefix_property(self):
        """A longer run starts with the shorter run's records."""
        assert generate(100, 7, now=NOW)[:20] == generate(20, 7, now=NOW)


class TestShape:
    def test_count_and_ids(self):
        jobs = generate(12, 250, now=NOW)
        assert len(jobs) == 12
        assert [job["id"] for job in jobs] == [str(i).zfill(5) for i in range(1, 13)]

    @pytest.mark.parametrize("count", [0, -3])
    def test_degenerate_count_is_empty(self, count):
        assert generate(count, 250, now=NOW) == []

    @pytest.mark.parametrize("count", [None, "abc", float("nan"), float("inf")])
    def test_non_numeric_count_is_empty(self, count):
        assert generate(count, 250, now=NOW) == []

    def test_numeric_string_count(self):
        assert generate("3", 250, now=NOW) == generate(3, 250, now=NOW)

    @pytest.mark.parametrize("seed", [None, "abc", float("nan")])
    def test_non_numeric_seed_acts_as_zero(self, seed):
        assert generate(5, seed, now=NOW) == generate(5, 0, now=NOW)

    def test_fields(self, dataset):
        for job in dataset:
            assert set(job) == FIELDS

    def test_vocabulary(self, dataset):
        for job in dataset:
            assert job["company"] in COMPANIES
            assert job["type"] in JOB_TYPES
            assert job["verdict"] in VERDICTS
            city, _, mode = job["location"].rpartition(" (")
            assert city in CITIES
            assert mode.rstrip(")") in WORK_MODES

    def test_posted_within_45_days(self, dataset):
        for job in dataset:
            posted = datetime.strptime(job["posted_at"], "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
            assert 0 <= (NOW - posted).days <= 45


class TestInvariants:
    def test_apply_url_never_empty(self, dataset):
        for job in dataset:
            assert job["apply_url"]
            assert len(job["source_urls"]) >= 1
            assert len(job["source_urls"]) == len(job["source_names"])

    def test_apply_url_derived_from_company(self):
        a, b = generate(2, 250, now=NOW)
        assert a["apply_url"].startswith("https://www.google.com/search?q=")
        if a["company"] == b["company"]:
            assert a["apply_url"] == b["apply_url"]

    def test_score_within_verdict_band(self, dataset):
        for job in dataset:
            low, high = SCORE_BANDS[job["verdict"]]
            assert low <= job["verification_score"] <= high
            assert isinstance(job["verification_score"], int)

    def test_salary_format_by_type(self, dataset):
        for job in dataset:
            if job["type"] == "Internship":
                assert HOURLY_RE.match(job["salary"]), job["salary"]
            else:
                assert ANNUAL_RE.match(job["salary"]), job["salary"]

    def test_description_mentions_company(self, dataset):
        for job in dataset[:50]:
            assert job["company"] in job["description"]

    def test_description_skills_are_distinct(self, dataset):
        for job in dataset:
            skills = SKILLS_RE.search(job["description"]).groups()
            assert len(set(skills)) == 3, job["description"]
            assert set(skills) <= set(SKILLS)

    def test_verdict_mix_roughly_matches_thresholds(self, dataset):
        certified = sum(1 for job in dataset if job["verdict"] == "certified") / len(dataset)
        rejected = sum(1 for job in dataset if job["verdict"] == "rejected") / len(dataset)
        assert 0.58 < certified < 0.72
        assert 0.05 < rejected < 0.15


class TestHelpers:
    def test_intern_title(self):
        assert make_title("Data Analyst", "Intern") == "Data Analyst Intern"
        assert make_title("Data Analyst", "Senior") == "Senior Data Analyst"

    def test_annual_salary_within_band(self):
        stream = SeededStream(5)
        for _ in range(200):
            salary = make_salary(stream, "Full-time", "Senior")
            low, high = [int(part) for part in re.findall(r"\d+", salary)]
            assert 150 <= low < high <= 220

    def test_unknown_level_uses_default_band(self):
        stream = SeededStream(5)
        for _ in range(100):
            low, high = [int(part) for part in re.findall(r"\d+", make_salary(stream, "Contract", "Intern"))]
            assert 25 <= low < high <= 35

    def test_pick_distinct(self):
        stream = SeededStream(21)
        for _ in range(300):
            picked = pick_distinct(stream, SKILLS, 3)
            assert len(set(picked)) == 3
            assert set(picked) <= set(SKILLS)

    def test_pick_distinct_small_table(self):
        assert sorted(pick_distinct(SeededStream(4), ("a", "b"), 3)) == ["a", "b"]

    def test_roll_verdict_values(self):
        stream = SeededStream(11)
        assert {roll_verdict(stream) for _ in range(500)} == set(VERDICTS)

    def test_start_of_day(self):
        value = datetime(2026, 3, 4, 15, 30, 12, tzinfo=timezone.utc)
        assert start_of_day(value) == datetime(2026, 3, 4, tzinfo=timezone.utc)
