from .pipeline import (
    MEDIA_NOT_FOUND,
    BatchResult,
    MediaPipeline,
    UploadedFile,
    UploadFailure,
    UploadState,
)
from .settings import MediaSettings, get_media_settings
from .transcode import TranscodeResult, is_raster_image, transcode_image

__all__ = [
    "MediaPipeline",
    "UploadedFile",
    "UploadFailure",
    "BatchResult",
    "UploadState",
    "MEDIA_NOT_FOUND",
    "MediaSettings",
    "get_media_settings",
    "TranscodeResult",
    "is_raster_image",
    "transcode_image",
]
