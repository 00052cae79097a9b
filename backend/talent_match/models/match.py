from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, Text, func

from talent_match.database import Base


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (Index("idx_candidate_score", "candidate_id", "compatibility_score"),)

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    compatibility_score = Column(Float, nullable=False)
    reasoning = Column(Text)
    matched_at = Column(DateTime, server_default=func.now())
