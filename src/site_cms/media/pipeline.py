"""Media ingestion: validate, stage, transcode, persist, clean up.

Per upload the states are ``received -> validated -> (transcoded |
passed_through) -> persisted`` or ``received -> rejected``. Each transition
is logged at debug with ``media_key``/``upload_state`` extras so the JSON
formatter can surface them.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.content.models import MediaDocument, RelatedTo
from site_cms.db.nosql import NoSqlRepository
from site_cms.exceptions import (
    NotFound,
    SiteCmsError,
    StorageDeleteFailure,
    UploadRejected,
)
from site_cms.storage import StorageBackend

from .settings import MediaSettings, get_media_settings
from .transcode import is_raster_image, transcode_image

logger = logging.getLogger(__name__)

MEDIA_NOT_FOUND = "الملف غير موجود"
NO_FILES_MESSAGE = "لم يتم رفع أي ملفات"
UNSUPPORTED_TYPE_MESSAGE = "نوع الملف غير مدعوم"

_SAFE_SUFFIX = re.compile(r"^\.[a-z0-9]{1,10}$")


class UploadState(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    TRANSCODED = "transcoded"
    PASSED_THROUGH = "passed_through"
    PERSISTED = "persisted"
    REJECTED = "rejected"


@dataclass
class UploadedFile:
    """One file of a multipart request, already read into memory."""

    filename: str
    content_type: str
    data: bytes

    @property
    def mimetype(self) -> str:
        return (self.content_type or "").split(";", 1)[0].strip().lower()


@dataclass
class UploadFailure:
    filename: str
    message: str
    error: BaseException

    def to_dict(self) -> dict[str, str]:
        return {"file": self.filename, "message": self.message}


@dataclass
class BatchResult:
    persisted: list[dict[str, Any]] = field(default_factory=list)
    failures: list[UploadFailure] = field(default_factory=list)


def _log_state(state: UploadState, key: Optional[str], msg: str, *args: Any) -> None:
    logger.debug(msg, *args, extra={"media_key": key, "upload_state": state.value})


class MediaPipeline:
    def __init__(
        self,
        storage: StorageBackend,
        repo: Optional[NoSqlRepository] = None,
        settings: Optional[MediaSettings] = None,
        *,
        folder: str = "media",
    ):
        self.storage = storage
        self.repo = repo or NoSqlRepository(collection_name="media")
        self.settings = settings or get_media_settings()
        self.folder = folder.strip("/")

    # ------------------------------------------------------------------
    # keys
    # ------------------------------------------------------------------

    def _suffix(self, upload: UploadedFile) -> str:
        suffix = PurePosixPath(upload.filename or "").suffix.lower()
        if _SAFE_SUFFIX.match(suffix):
            return suffix
        return mimetypes.guess_extension(upload.mimetype) or ""

    def _new_key(self, suffix: str) -> str:
        name = f"{uuid.uuid4().hex}{suffix}"
        return f"{self.folder}/{name}" if self.folder else name

    # ------------------------------------------------------------------
    # steps
    # ------------------------------------------------------------------

    def validate(self, upload: Optional[UploadedFile]) -> UploadedFile:
        if upload is None or not upload.data:
            _log_state(UploadState.REJECTED, None, "Upload rejected: empty payload")
            raise UploadRejected()

        limit = self.settings.max_upload_bytes
        if len(upload.data) > limit:
            _log_state(
                UploadState.REJECTED, None, "Upload rejected: %s is %d bytes", upload.filename, len(upload.data)
            )
            raise UploadRejected(f"حجم الملف كبير جداً (الحد الأقصى {limit // (1024 * 1024)}MB)")

        if upload.mimetype not in self.settings.allowed_mimetypes:
            _log_state(
                UploadState.REJECTED, None, "Upload rejected: %s has type %s", upload.filename, upload.mimetype
            )
            raise UploadRejected(UNSUPPORTED_TYPE_MESSAGE)

        _log_state(UploadState.VALIDATED, None, "Validated %s (%s)", upload.filename, upload.mimetype)
        return upload

    async def release(self, key: str) -> bool:
        """Delete a stored binary; failures are logged, never raised."""
        try:
            deleted = await self.storage.delete(key)
        except Exception as exc:
            failure = StorageDeleteFailure(key, exc)
            logger.warning("%s", failure.message, extra={"media_key": key})
            return False
        if not deleted:
            logger.debug("Stored binary already missing", extra={"media_key": key})
        return deleted

    async def ingest(
        self,
        db: AsyncIOMotorDatabase,
        upload: Optional[UploadedFile],
        *,
        alt: str = "",
        related_to: Optional[RelatedTo] = None,
    ) -> dict[str, Any]:
        upload = self.validate(upload)
        mimetype = upload.mimetype

        staged_key = self._new_key(self._suffix(upload))
        staged_url = await self.storage.put(staged_key, upload.data, mimetype)
        _log_state(UploadState.RECEIVED, staged_key, "Staged %s", upload.filename)

        final_key, final_url = staged_key, staged_url
        data, width, height = upload.data, None, None

        if is_raster_image(mimetype):
            try:
                result = await asyncio.to_thread(
                    transcode_image,
                    upload.data,
                    max_size=(self.settings.max_width, self.settings.max_height),
                    fmt=self.settings.output_format,
                    mimetype=self.settings.output_mimetype,
                    quality=self.settings.quality,
                    filename=upload.filename,
                )
                data, width, height, mimetype = result.data, result.width, result.height, result.mimetype
                final_key = self._new_key(self.settings.output_extension)
                final_url = await self.storage.put(final_key, data, mimetype)
            except Exception:
                # no record exists yet, so nothing may stay behind in storage
                await self.release(staged_key)
                raise
            _log_state(UploadState.TRANSCODED, final_key, "Transcoded %s to %dx%d", upload.filename, width, height)
        else:
            _log_state(UploadState.PASSED_THROUGH, final_key, "Passed through %s", upload.filename)

        record = MediaDocument(
            filename=final_key,
            original_name=upload.filename or final_key,
            path=final_url,
            url=final_url,
            mimetype=mimetype,
            size=len(data),
            width=width,
            height=height,
            alt=alt or "",
            related_to=related_to,
        ).to_document()

        try:
            created = await self.repo.create(db, record)
        except Exception:
            logger.error("Metadata write failed for %s", final_key, exc_info=True)
            await self.release(final_key)
            if final_key != staged_key:
                await self.release(staged_key)
            raise

        if final_key != staged_key:
            await self.release(staged_key)
        _log_state(UploadState.PERSISTED, final_key, "Persisted media %s", created.get("id"))
        return created

    async def ingest_many(
        self,
        db: AsyncIOMotorDatabase,
        uploads: Sequence[UploadedFile],
        *,
        related_to: Optional[RelatedTo] = None,
    ) -> BatchResult:
        """Run every upload independently; raise only when all of them fail."""
        if not uploads:
            raise UploadRejected(NO_FILES_MESSAGE)
        if len(uploads) > self.settings.max_batch:
            raise UploadRejected(f"الحد الأقصى {self.settings.max_batch} ملفات")

        results = await asyncio.gather(
            *(self.ingest(db, upload, related_to=related_to) for upload in uploads),
            return_exceptions=True,
        )

        batch = BatchResult()
        for upload, result in zip(uploads, results):
            if isinstance(result, dict):
                batch.persisted.append(result)
                continue
            if not isinstance(result, Exception):
                raise result
            if isinstance(result, SiteCmsError):
                message = result.message
            else:
                logger.error("Upload of %s failed", upload.filename, exc_info=result)
                message = SiteCmsError.default_message
            batch.failures.append(UploadFailure(upload.filename, message, result))

        if not batch.persisted and batch.failures:
            raise batch.failures[0].error
        return batch

    # ------------------------------------------------------------------
    # records
    # ------------------------------------------------------------------

    async def list(
        self,
        db: AsyncIOMotorDatabase,
        *,
        type: Optional[str] = None,
        related_type: Optional[str] = None,
        related_id: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        query: dict[str, Any] = {}
        if type:
            query["mimetype"] = {"$regex": re.escape(type), "$options": "i"}
        if related_type:
            query["relatedTo.type"] = related_type
        if related_id:
            query["relatedTo.id"] = related_id
        return await self.repo.find_many(db, query, sort=[("createdAt", -1)])

    async def update_alt(self, db: AsyncIOMotorDatabase, id: Any, alt: Optional[str]) -> dict[str, Any]:
        updated = await self.repo.update(db, id, {"alt": alt or ""})
        if updated is None:
            raise NotFound(MEDIA_NOT_FOUND)
        return updated

    async def delete(self, db: AsyncIOMotorDatabase, id: Any) -> None:
        asset = await self.repo.get(db, id)
        if asset is None:
            raise NotFound(MEDIA_NOT_FOUND)
        if asset.get("filename"):
            await self.release(asset["filename"])
        await self.repo.delete(db, id)
        logger.info("Deleted media %s", id, extra={"media_key": asset.get("filename")})


__all__ = [
    "MediaPipeline",
    "UploadedFile",
    "UploadFailure",
    "BatchResult",
    "UploadState",
    "MEDIA_NOT_FOUND",
]
