"""Error types shared by the store clients, views and ingestion proxy."""


class RecruitingDBError(Exception):
    """Base exception for recruiting database errors."""
    pass


class ConfigMissing(RecruitingDBError):
    """Raised when a required configuration value is absent."""
    pass


class ValidationFailed(RecruitingDBError):
    """Raised when an ingestion request lacks a required field."""
    pass


class DownstreamFailure(RecruitingDBError):
    """Raised when the forwarded ingestion call returns a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class NotFound(RecruitingDBError):
    """Raised when a single-record query matched no rows."""
    pass


class AmbiguousResult(RecruitingDBError):
    """Raised when a single-record query matched more than one row."""
    pass


class StoreUnavailable(RecruitingDBError):
    """Raised when the profile store cannot be reached or returns garbage."""
    pass
