from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from talent_match.schemas.base import CamelModel


JobStatus = Literal["open", "closed"]


class JobCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    location: str | None = None
    salary: str | None = None
    status: JobStatus = "open"


class JobOut(CamelModel):
    id: int
    title: str
    description: str
    requirements: str
    location: str | None = None
    salary: str | None = None
    status: JobStatus = "open"
    created_at: datetime | None = None
