from .exceptions import (
    DuplicateKey,
    Forbidden,
    NotFound,
    SiteCmsError,
    StorageDeleteFailure,
    TranscodeFailure,
    Unauthorized,
    UploadRejected,
    ValidationFailure,
)

__version__ = "1.0.0"

__all__ = [
    "SiteCmsError",
    "ValidationFailure",
    "DuplicateKey",
    "NotFound",
    "UploadRejected",
    "TranscodeFailure",
    "StorageDeleteFailure",
    "Unauthorized",
    "Forbidden",
]
