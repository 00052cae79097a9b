from talent_match.schemas.base import CamelModel, SuccessResponse
from talent_match.schemas.candidate import CandidateCreate, CandidateOut, CVUploadResponse
from talent_match.schemas.job import JobCreate, JobOut
from talent_match.schemas.match import MatchOut, MatchRunResponse

__all__ = [
    "CamelModel",
    "SuccessResponse",
    "CandidateCreate",
    "CandidateOut",
    "CVUploadResponse",
    "JobCreate",
    "JobOut",
    "MatchOut",
    "MatchRunResponse",
]
