import pytest
from sqlalchemy.exc import IntegrityError

from talent_match.errors import DuplicateKey
from talent_match.models.candidate import Candidate
from talent_match.models.job import JOB_STATUS_CLOSED, Job
from talent_match.models.match import Match
from talent_match.services.matcher import MatchResult
from talent_match.services.repository import CandidateStore, JobStore, MatchStore


candidates = CandidateStore()
jobs = JobStore()
matches = MatchStore()


def _seed(db):
    ada = candidates.create(db, name="Ada", email="ada@example.com", skills="Go, distributed systems")
    bob = candidates.create(db, name="Bob", email="bob@example.com", cv_text="Data analyst, SQL")
    backend = jobs.create(db, title="Backend Engineer", description="APIs", requirements="Go")
    analyst = jobs.create(db, title="Data Analyst", description="Reports", requirements="SQL")
    matches.replace_all(
        db,
        [
            MatchResult(candidate_id=ada.id, job_id=backend.id, score=82, reasoning="strong fit"),
            MatchResult(candidate_id=ada.id, job_id=analyst.id, score=35, reasoning="some overlap"),
            MatchResult(candidate_id=bob.id, job_id=analyst.id, score=77, reasoning="good fit"),
        ],
    )
    return ada, bob, backend, analyst


def test_create_applies_defaults(db):
    candidate = candidates.create(db, name="Ada", email="ada@example.com", cv_text="", skills="Go")
    job = jobs.create(db, title="SRE", description="Keep it up", requirements="Linux")

    assert candidate.id is not None
    assert candidate.created_at is not None
    assert candidate.cv_text is None
    assert job.status == "open"
    assert job.location is None


def test_duplicate_email_raises_and_inserts_nothing(db):
    candidates.create(db, name="Ada", email="ada@example.com")
    with pytest.raises(DuplicateKey):
        candidates.create(db, name="Ada Again", email="ada@example.com")
    assert db.query(Candidate).count() == 1


def test_deleting_candidate_cascades_to_matches(db):
    ada, _, _, _ = _seed(db)
    ada_id = ada.id

    assert candidates.delete(db, ada_id)

    assert db.query(Match).filter(Match.candidate_id == ada_id).count() == 0
    assert db.query(Match).count() == 1
    assert not candidates.delete(db, ada_id)


def test_deleting_job_cascades_to_matches(db):
    _, _, _, analyst = _seed(db)
    analyst_id = analyst.id

    assert jobs.delete(db, analyst_id)

    assert db.query(Match).filter(Match.job_id == analyst_id).count() == 0
    assert db.query(Match).count() == 1


def test_replace_all_discards_previous_matches(db):
    ada, _, backend, _ = _seed(db)

    inserted = matches.replace_all(db, [MatchResult(candidate_id=ada.id, job_id=backend.id, score=90, reasoning="rerun")])

    rows = matches.list_all(db)
    assert inserted == 1
    assert [(row.candidate_id, row.job_id, row.compatibility_score) for row in rows] == [(ada.id, backend.id, 90)]


def test_replace_all_with_no_results_empties_the_table(db):
    _seed(db)
    assert matches.replace_all(db, []) == 0
    assert db.query(Match).count() == 0


def test_list_with_names_joins_candidate_and_job(db):
    ada, _, backend, _ = _seed(db)

    first = matches.list_with_names(db)[0]

    assert first["candidate_id"] == ada.id
    assert first["candidate_name"] == "Ada"
    assert first["job_id"] == backend.id
    assert first["job_title"] == "Backend Engineer"
    assert first["compatibility_score"] == 82
    assert first["matched_at"] is not None


def test_list_open_excludes_closed_jobs(db):
    jobs.create(db, title="Open", description="d", requirements="r")
    jobs.create(db, title="Closed", description="d", requirements="r", status=JOB_STATUS_CLOSED)
    assert [job.title for job in jobs.list_open(db)] == ["Open"]


def test_update_cv_keeps_previous_text_when_extraction_missing(db):
    ada = candidates.create(db, name="Ada", email="ada@example.com", cv_text="typed in by hand")

    updated = candidates.update_cv(db, ada.id, cv_pdf_path="cv-1-ada.pdf", cv_text=None)

    assert updated.cv_pdf_path == "cv-1-ada.pdf"
    assert updated.cv_text == "typed in by hand"
    assert candidates.update_cv(db, 999, cv_pdf_path="cv-2-ghost.pdf") is None


def test_unknown_job_status_is_rejected_by_the_database(db):
    with pytest.raises(IntegrityError):
        jobs.create(db, title="Archived", description="d", requirements="r", status="archived")
    db.rollback()
    assert db.query(Job).count() == 0
