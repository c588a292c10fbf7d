"""Error taxonomy shared by the store, services and HTTP layer."""
from typing import List, Optional


class SongdeckError(Exception):
    """Base error carrying an API error code and HTTP status."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[List[dict]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        error = {"message": self.message, "code": self.code}
        if self.details is not None:
            error["details"] = self.details
        return error


class SongValidationError(SongdeckError):
    """Payload failed field rules; details lists every offending field."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, details: List[dict], message: str = "Validation failed") -> None:
        super().__init__(message, details)

    @property
    def fields(self) -> List[str]:
        return [d["field"] for d in self.details or []]


class InvalidSongIdError(SongdeckError):
    code = "INVALID_ID"
    status_code = 400

    def __init__(self, message: str = "Invalid song ID format") -> None:
        super().__init__(message)


class SongNotFoundError(SongdeckError):
    code = "SONG_NOT_FOUND"
    status_code = 404

    def __init__(self, message: str = "Song not found") -> None:
        super().__init__(message)


class MissingParameterError(SongdeckError):
    code = "MISSING_PARAMETER"
    status_code = 400


class StorageError(SongdeckError):
    """Persistence medium unavailable or unwritable. Never shown verbatim to callers."""

    code = "STORAGE_ERROR"
    status_code = 500
