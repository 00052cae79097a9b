from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from talent_match.schemas.base import CamelModel


class CandidateCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    cv_text: str | None = None
    skills: str | None = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class CandidateOut(CamelModel):
    id: int
    name: str
    email: str
    cv_text: str | None = None
    cv_pdf_path: str | None = None
    skills: str | None = None
    created_at: datetime | None = None


class CVUploadResponse(CamelModel):
    success: bool = True
    cv_text: str | None = None
    path: str
