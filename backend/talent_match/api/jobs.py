from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from talent_match.database import get_db
from talent_match.models.job import Job
from talent_match.schemas.base import SuccessResponse
from talent_match.schemas.job import JobCreate, JobOut
from talent_match.services.repository import JobStore


router = APIRouter()
jobs = JobStore()


@router.get("", response_model=list[JobOut])
def list_jobs(db: Session = Depends(get_db)) -> list[Job]:
    return jobs.list_all(db)


@router.post("", response_model=JobOut, status_code=status.HTTP_201_CREATED)
def create_job(payload: JobCreate, db: Session = Depends(get_db)) -> Job:
    return jobs.create(
        db,
        title=payload.title,
        description=payload.description,
        requirements=payload.requirements,
        location=payload.location,
        salary=payload.salary,
        status=payload.status,
    )


@router.delete("/{job_id}", response_model=SuccessResponse)
def delete_job(job_id: int, db: Session = Depends(get_db)) -> SuccessResponse:
    if not jobs.delete(db, job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    return SuccessResponse()
