from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from talent_match.errors import DuplicateKey
from talent_match.models.candidate import Candidate
from talent_match.models.job import JOB_STATUS_OPEN, Job
from talent_match.models.match import Match
from talent_match.services.matcher import MatchResult


class CandidateStore:
    def list_all(self, db: Session) -> list[Candidate]:
        return db.query(Candidate).order_by(Candidate.id).all()

    def get(self, db: Session, candidate_id: int) -> Candidate | None:
        return db.get(Candidate, candidate_id)

    def create(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        cv_text: str | None = None,
        skills: str | None = None,
    ) -> Candidate:
        candidate = Candidate(name=name, email=email, cv_text=cv_text or None, skills=skills or None)
        db.add(candidate)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateKey(f"A candidate with email {email!r} already exists") from exc
        db.refresh(candidate)
        return candidate

    def update_cv(
        self,
        db: Session,
        candidate_id: int,
        *,
        cv_pdf_path: str,
        cv_text: str | None = None,
    ) -> Candidate | None:
        """Point the candidate at a stored CV; ``cv_text=None`` keeps the previous text."""
        candidate = db.get(Candidate, candidate_id)
        if candidate is None:
            return None
        candidate.cv_pdf_path = cv_pdf_path
        if cv_text is not None:
            candidate.cv_text = cv_text
        db.add(candidate)
        db.commit()
        db.refresh(candidate)
        return candidate

    def delete(self, db: Session, candidate_id: int) -> bool:
        # Bulk delete so the database-level ON DELETE CASCADE removes the matches.
        deleted = db.query(Candidate).filter(Candidate.id == candidate_id).delete(synchronize_session=False)
        db.commit()
        return deleted > 0


class JobStore:
    def list_all(self, db: Session) -> list[Job]:
        return db.query(Job).order_by(Job.id).all()

    def list_open(self, db: Session) -> list[Job]:
        return db.query(Job).filter(Job.status == JOB_STATUS_OPEN).order_by(Job.id).all()

    def create(
        self,
        db: Session,
        *,
        title: str,
        description: str,
        requirements: str,
        location: str | None = None,
        salary: str | None = None,
        status: str = JOB_STATUS_OPEN,
    ) -> Job:
        job = Job(
            title=title,
            description=description,
            requirements=requirements,
            location=location or None,
            salary=salary or None,
            status=status,
        )
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    def delete(self, db: Session, job_id: int) -> bool:
        deleted = db.query(Job).filter(Job.id == job_id).delete(synchronize_session=False)
        db.commit()
        return deleted > 0


class MatchStore:
    def list_all(self, db: Session) -> list[Match]:
        return db.query(Match).order_by(Match.id).all()

    def list_with_names(self, db: Session) -> list[dict[str, Any]]:
        rows = (
            db.query(
                Match.id,
                Match.candidate_id,
                Match.job_id,
                Match.compatibility_score,
                Match.reasoning,
                Match.matched_at,
                Candidate.name.label("candidate_name"),
                Job.title.label("job_title"),
            )
            .outerjoin(Candidate, Match.candidate_id == Candidate.id)
            .outerjoin(Job, Match.job_id == Job.id)
            .order_by(Match.id)
            .all()
        )
        return [dict(row._mapping) for row in rows]

    def delete_all(self, db: Session, *, commit: bool = True) -> int:
        deleted = db.query(Match).delete(synchronize_session=False)
        if commit:
            db.commit()
        return deleted

    def insert_many(self, db: Session, results: Iterable[MatchResult], *, commit: bool = True) -> int:
        rows = [
            Match(
                candidate_id=result.candidate_id,
                job_id=result.job_id,
                compatibility_score=result.score,
                reasoning=result.reasoning,
            )
            for result in results
        ]
        db.add_all(rows)
        if commit:
            db.commit()
        return len(rows)

    def replace_all(self, db: Session, results: Iterable[MatchResult]) -> int:
        """Swap the whole match set in one transaction: clear first, then insert."""
        try:
            cleared = self.delete_all(db, commit=False)
            inserted = self.insert_many(db, results, commit=False)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Replaced match set: removed {cleared}, inserted {inserted}")
        return inserted
