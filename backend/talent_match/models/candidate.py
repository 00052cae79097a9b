from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from talent_match.database import Base


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), unique=True, nullable=False, index=True)
    cv_text = Column(Text)
    cv_pdf_path = Column(String(500))
    skills = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
