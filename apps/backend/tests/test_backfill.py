"""
Tests for the apply-link backfill pass.
"""
import copy
from datetime import datetime, timezone

from core.backfill import DEFAULT_SOURCE_NAME, build_apply_url, ensure_apply_url, patch
from core.generator import generate


def broken_jobs():
    return [
        {"id": "a", "title": "QA Engineer", "company": "Harbor Logistics", "apply_url": ""},
        {"id": "b", "title": "Designer", "company": "Cedar Health", "apply_url": None,
         "source_urls": ["https://cedar.example/jobs/1"], "source_names": []},
        {"id": "c", "title": "Analyst", "company": "", "salary": "$90k–$110k"},
        {"id": "d", "title": "SRE", "company": "Nimbus Cloud",
         "apply_url": "https://nimbus.example/apply", "source_urls": ["https://nimbus.example/apply"],
         "source_names": ["Company Site"]},
    ]


def test_build_apply_url_never_empty():
    assert build_apply_url("Orbit Labs") == "https://www.google.com/search?q=Orbit+Labs+careers"
    assert build_apply_url("") == "https://www.google.com/search?q=jobs"
    assert build_apply_url(None) == "https://www.google.com/search?q=jobs"


def test_patch_fills_missing_links():
    patched, changed = patch(broken_jobs())
    assert changed is True
    for job in patched:
        assert job["apply_url"]
        assert job["source_urls"]
        assert len(job["source_names"]) == len(job["source_urls"])


def test_patch_uses_company_name():
    patched, _ = patch(broken_jobs())
    assert patched[0]["apply_url"] == build_apply_url("Harbor Logistics")
    assert patched[0]["source_urls"] == [patched[0]["apply_url"]]
    assert patched[0]["source_names"] == [DEFAULT_SOURCE_NAME]


def test_patch_keeps_existing_sources():
    patched, _ = patch(broken_jobs())
    assert patched[1]["source_urls"] == ["https://cedar.example/jobs/1"]
    assert patched[1]["source_names"] == [DEFAULT_SOURCE_NAME]
    assert patched[3] == broken_jobs()[3]


def test_patch_does_not_touch_other_fields():
    original = broken_jobs()
    patched, _ = patch(original)
    for before, after in zip(original, patched):
        for field, value in before.items():
            if field not in ("apply_url", "source_urls", "source_names"):
                assert after[field] == value


def test_patch_does_not_mutate_input():
    original = broken_jobs()
    snapshot = copy.deepcopy(original)
    patch(original)
    assert original == snapshot


def test_patch_is_idempotent():
    once, changed_once = patch(broken_jobs())
    twice, changed_twice = patch(once)
    assert changed_once is True
    assert changed_twice is False
    assert twice == once


def test_generated_dataset_needs_no_patch():
    jobs = generate(200, 250, now=datetime(2026, 1, 1, tzinfo=timezone.utc))
    patched, changed = patch(jobs)
    assert changed is False
    assert patched == jobs


def test_ensure_apply_url_reports_change():
    fixed, changed = ensure_apply_url({"company": "Vertex AI"})
    assert changed is True
    assert fixed["apply_url"] == build_apply_url("Vertex AI")

    _, changed_again = ensure_apply_url(fixed)
    assert changed_again is False


def test_empty_dataset():
    assert patch([]) == ([], False)


def test_surplus_source_names_trimmed():
    job = {"id": "e", "company": "Orbit Labs", "apply_url": "https://orbit.example/apply",
           "source_urls": ["https://orbit.example/apply"],
           "source_names": ["Company Site", "LinkedIn", "Indeed"]}
    fixed, changed = ensure_apply_url(job)
    assert changed is True
    assert fixed["source_names"] == ["Company Site"]
    assert fixed["source_urls"] == ["https://orbit.example/apply"]

    _, changed_again = ensure_apply_url(fixed)
    assert changed_again is False


def test_patch_drops_non_dict_entries():
    patched, changed = patch(["oops", None, {"id": "1", "company": "X"}])
    assert changed is True
    assert [job["id"] for job in patched] == ["1"]
    assert patched[0]["apply_url"] == build_apply_url("X")
