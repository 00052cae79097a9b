from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, Text, func

from talent_match.database import Base


JOB_STATUS_OPEN = "open"
JOB_STATUS_CLOSED = "closed"


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        Index("idx_job_status", "status"),
        CheckConstraint(f"status IN ('{JOB_STATUS_OPEN}', '{JOB_STATUS_CLOSED}')", name="ck_job_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False)
    location = Column(String(255))
    salary = Column(String(255))
    status = Column(String(20), nullable=False, default=JOB_STATUS_OPEN, server_default=JOB_STATUS_OPEN)
    created_at = Column(DateTime, server_default=func.now())
