"""Error taxonomy shared by the repository, pipeline and HTTP layers.

Every error carries an HTTP status classification and a localized (Arabic)
message that is safe to show to the admin dashboard.
"""

from __future__ import annotations

from typing import Iterable


class SiteCmsError(Exception):
    """Base exception for all site-cms errors."""

    status_code: int = 500
    default_message: str = "خطأ في الخادم"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailure(SiteCmsError):
    status_code = 400
    default_message = "بيانات غير صالحة"

    def __init__(self, reasons: Iterable[str] | str | None = None):
        if isinstance(reasons, str):
            reasons = [reasons]
        self.reasons = list(reasons or [])
        super().__init__(", ".join(self.reasons) or None)


# field -> localized noun used in "already exists" messages
DUPLICATE_FIELD_LABELS: dict[str, str] = {
    "slug": "الرابط",
    "email": "البريد الإلكتروني",
}


class DuplicateKey(SiteCmsError):
    status_code = 400

    def __init__(self, field: str | None = None, value: object | None = None):
        self.field = field
        self.value = value
        label = DUPLICATE_FIELD_LABELS.get(field or "", "القيمة")
        super().__init__(f"هذا {label} موجود مسبقاً")


class NotFound(SiteCmsError):
    status_code = 404
    default_message = "المورد غير موجود"


class UploadRejected(SiteCmsError):
    status_code = 400
    default_message = "لم يتم رفع أي ملف"


class TranscodeFailure(SiteCmsError):
    status_code = 500
    default_message = "فشل معالجة الصورة"

    def __init__(self, filename: str | None = None, message: str | None = None):
        self.filename = filename
        super().__init__(message)


class StorageDeleteFailure(SiteCmsError):
    """Raised by nothing that reaches a client; logged where it happens."""

    def __init__(self, key: str, cause: BaseException | None = None):
        self.key = key
        self.cause = cause
        super().__init__(f"failed to delete stored binary {key!r}: {cause}")


class Unauthorized(SiteCmsError):
    status_code = 401
    default_message = "غير مصرح - لا يوجد توكن"


class Forbidden(SiteCmsError):
    status_code = 403
    default_message = "غير مصرح - صلاحيات المدير مطلوبة"


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
