from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile, status
from pydantic import ValidationError

from site_cms.api.fastapi.dependencies import PipelineDep
from site_cms.api.fastapi.responses import ok
from site_cms.auth import UserDep
from site_cms.content.models import RelatedTo
from site_cms.db.nosql import DbDep
from site_cms.exceptions import ValidationFailure
from site_cms.media import UploadedFile

from ._schemas import AltUpdate

router = APIRouter()
ROUTER_PREFIX = "/media"
ROUTER_TAG = "media"

INVALID_RELATED_TO = "relatedTo: قيمة غير صالحة"


def parse_related_to(raw: Optional[str]) -> Optional[RelatedTo]:
    if not raw:
        return None
    try:
        return RelatedTo.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as exc:
        raise ValidationFailure(INVALID_RELATED_TO) from exc


async def read_upload(file: Optional[UploadFile], limit: int) -> Optional[UploadedFile]:
    if file is None:
        return None
    # one byte past the limit is enough to reject oversized files
    data = await file.read(limit + 1)
    return UploadedFile(
        filename=file.filename or "",
        content_type=file.content_type or "application/octet-stream",
        data=data,
    )


@router.get("")
async def list_media(
    db: DbDep,
    pipeline: PipelineDep,
    type: Optional[str] = None,
    relatedType: Optional[str] = None,
    relatedId: Optional[str] = None,
):
    docs = await pipeline.list(db, type=type, related_type=relatedType, related_id=relatedId)
    return ok(docs, count=True)


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_file(
    db: DbDep,
    pipeline: PipelineDep,
    _user: UserDep,
    file: Optional[UploadFile] = File(None),
    alt: str = Form(""),
    relatedTo: Optional[str] = Form(None),
):
    related_to = parse_related_to(relatedTo)
    upload = await read_upload(file, pipeline.settings.max_upload_bytes)
    asset = await pipeline.ingest(db, upload, alt=alt, related_to=related_to)
    return ok(asset)


@router.post("/upload-multiple", status_code=status.HTTP_201_CREATED)
async def upload_files(
    db: DbDep,
    pipeline: PipelineDep,
    _user: UserDep,
    files: Optional[list[UploadFile]] = File(None),
    relatedTo: Optional[str] = Form(None),
):
    related_to = parse_related_to(relatedTo)
    uploads = [await read_upload(f, pipeline.settings.max_upload_bytes) for f in files or []]
    result = await pipeline.ingest_many(db, uploads, related_to=related_to)
    body = ok(result.persisted, count=True)
    if result.failures:
        body["errors"] = [f.to_dict() for f in result.failures]
    return body


@router.patch("/{id}")
async def update_media(id: str, payload: AltUpdate, db: DbDep, pipeline: PipelineDep, _user: UserDep):
    return ok(await pipeline.update_alt(db, id, payload.alt))


@router.delete("/{id}")
async def delete_media(id: str, db: DbDep, pipeline: PipelineDep, _user: UserDep):
    await pipeline.delete(db, id)
    return ok(message="تم حذف الملف بنجاح")
