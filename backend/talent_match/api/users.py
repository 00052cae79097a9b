from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from loguru import logger
from sqlalchemy.orm import Session

from talent_match.config import settings
from talent_match.database import get_db
from talent_match.deps import get_object_store, get_text_extractor
from talent_match.errors import ExtractionFailed
from talent_match.models.candidate import Candidate
from talent_match.schemas.base import SuccessResponse
from talent_match.schemas.candidate import CandidateCreate, CandidateOut, CVUploadResponse
from talent_match.services.cv_extractor import CVTextExtractor
from talent_match.services.object_store import CVObjectStore
from talent_match.services.repository import CandidateStore


router = APIRouter()
candidates = CandidateStore()


@router.get("", response_model=list[CandidateOut])
def list_candidates(db: Session = Depends(get_db)) -> list[Candidate]:
    return candidates.list_all(db)


@router.post("", response_model=CandidateOut, status_code=status.HTTP_201_CREATED)
def create_candidate(payload: CandidateCreate, db: Session = Depends(get_db)) -> Candidate:
    return candidates.create(
        db,
        name=payload.name,
        email=payload.email,
        cv_text=payload.cv_text,
        skills=payload.skills,
    )


@router.post("/{candidate_id}/upload-cv", response_model=CVUploadResponse)
def upload_cv(
    candidate_id: int,
    cv: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    object_store: CVObjectStore = Depends(get_object_store),
    extractor: CVTextExtractor = Depends(get_text_extractor),
) -> CVUploadResponse:
    if cv is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if candidates.get(db, candidate_id) is None:
        raise HTTPException(status_code=404, detail="User not found")

    raw = cv.file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    max_bytes = settings.max_cv_size_mb * 1024 * 1024
    if len(raw) > max_bytes:
        raise HTTPException(status_code=400, detail=f"File exceeds {settings.max_cv_size_mb}MB")

    try:
        cv_text: str | None = extractor.extract(raw)
    except ExtractionFailed as exc:
        logger.warning(f"Storing CV for candidate {candidate_id} without text: {exc}")
        cv_text = None

    key = object_store.upload(cv.filename or "cv.pdf", raw)
    candidates.update_cv(db, candidate_id, cv_pdf_path=key, cv_text=cv_text)
    return CVUploadResponse(cv_text=cv_text, path=key)


@router.get("/{candidate_id}/cv")
def download_cv(
    candidate_id: int,
    db: Session = Depends(get_db),
    object_store: CVObjectStore = Depends(get_object_store),
) -> Response:
    candidate = candidates.get(db, candidate_id)
    if candidate is None or not candidate.cv_pdf_path:
        raise HTTPException(status_code=404, detail="CV not found")

    content = object_store.download(candidate.cv_pdf_path)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{candidate.cv_pdf_path}"'},
    )


@router.delete("/{candidate_id}", response_model=SuccessResponse)
def delete_candidate(candidate_id: int, db: Session = Depends(get_db)) -> SuccessResponse:
    if not candidates.delete(db, candidate_id):
        raise HTTPException(status_code=404, detail="User not found")
    return SuccessResponse()
