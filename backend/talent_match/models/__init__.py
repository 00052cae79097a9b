from talent_match.models.candidate import Candidate
from talent_match.models.job import Job
from talent_match.models.match import Match

__all__ = ["Candidate", "Job", "Match"]
