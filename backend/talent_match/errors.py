from __future__ import annotations


class TalentMatchError(Exception):
    """Base class for failures the HTTP layer knows how to report."""


class InsufficientInput(TalentMatchError):
    """No candidates or no open jobs; matching is not attempted."""


class MalformedAIResponse(TalentMatchError):
    """The model's reply held no decodable match payload."""


class DuplicateKey(TalentMatchError):
    pass


class ObjectStoreUnavailable(TalentMatchError):
    pass


class ExtractionFailed(TalentMatchError):
    pass
