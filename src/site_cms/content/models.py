"""Document schemas.

Stored and wire field names are camelCase (the dashboard and the public site
read them as-is); Python attributes are snake_case via ``to_camel`` aliases.
Each model lists the localized message shown when a required field is
missing in ``required_messages``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CmsModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
    )

    required_messages: ClassVar[dict[str, str]] = {}

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PublishStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class CategoryType(str, Enum):
    SERVICE = "service"
    BLOG = "blog"


class RelatedKind(str, Enum):
    SERVICE = "service"
    BLOG = "blog"
    GENERAL = "general"


# ---------------------------------------------------------------------------
# Blog
# ---------------------------------------------------------------------------


class BlogDocument(CmsModel):
    required_messages: ClassVar[dict[str, str]] = {
        "slug": "الرابط (slug) مطلوب",
        "title": "عنوان المقال مطلوب",
        "excerpt": "الوصف المختصر مطلوب",
        "content": "محتوى المقال مطلوب",
        "image": "صورة المقال مطلوبة",
        "category": "قسم المقال مطلوب",
    }

    slug: str = Field(min_length=1)
    title: str
    excerpt: str = Field(max_length=500)
    content: str
    image: str
    image_query: str = ""
    category: str
    category_ref: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    read_time: str = "5 دقائق"
    featured: bool = False
    related_services: list[str] = Field(default_factory=list)
    meta_title: Optional[str] = Field(default=None, max_length=70)
    meta_description: Optional[str] = Field(default=None, max_length=160)
    status: PublishStatus = PublishStatus.DRAFT
    published_at: Optional[datetime] = None
    author: str = "شركة عزل الأسطح"
    order: int = 0

    @field_validator("title")
    @classmethod
    def _trim_title(cls, v: str) -> str:
        return v.strip()

    @field_validator("tags")
    @classmethod
    def _trim_tags(cls, v: list[str]) -> list[str]:
        return [t.strip() for t in v]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class SectionType(str, Enum):
    TEXT_IMAGE = "text-image"
    FEATURES_GRID = "features-grid"
    PROCESS_TIMELINE = "process-timeline"
    FAQ_ACCORDION = "faq-accordion"
    BENEFITS_GRID = "benefits-grid"


class SectionItem(CmsModel):
    title: str
    description: str


class Section(CmsModel):
    id: str
    type: SectionType = SectionType.TEXT_IMAGE
    title: str
    content: Optional[str] = None
    image: Optional[str] = None
    image_alt: Optional[str] = None
    items: list[SectionItem] = Field(default_factory=list)


class Seo(CmsModel):
    title: str
    description: str
    keywords: list[str] = Field(default_factory=list)
    og_image: Optional[str] = None


class HeroStat(CmsModel):
    label: Optional[str] = None
    value: Optional[str] = None


class Hero(CmsModel):
    image: str
    image_alt: Optional[str] = None
    description: str
    features: list[str] = Field(default_factory=list)
    stats: list[HeroStat] = Field(default_factory=list)


class Cta(CmsModel):
    title: str
    description: Optional[str] = None
    benefits: list[str] = Field(default_factory=list)


class Testimonial(CmsModel):
    name: str
    location: Optional[str] = None
    rating: int = Field(default=5, ge=1, le=5)
    comment: str
    service: Optional[str] = None
    date: Optional[str] = None


class ServiceDocument(CmsModel):
    required_messages: ClassVar[dict[str, str]] = {
        "slug": "Slug مطلوب",
        "title": "عنوان الخدمة مطلوب",
        "subtitle": "الوصف المختصر مطلوب",
    }

    slug: str = Field(min_length=1)
    icon: str = "Wind"
    title: str
    subtitle: str
    breadcrumb: str = ""
    seo: Optional[Seo] = None
    hero: Optional[Hero] = None
    sections: list[Section] = Field(default_factory=list)
    cta: Optional[Cta] = None
    schema_org: Optional[Any] = None
    breadcrumb_schema: Optional[Any] = None
    product_schema: Optional[Any] = None
    testimonials: list[Testimonial] = Field(default_factory=list)
    is_active: bool = True
    order: int = 0
    category: Optional[str] = None


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class CategoryColor(CmsModel):
    primary: str = "#3b82f6"
    bg: str = "#eff6ff"


class CategoryDocument(CmsModel):
    required_messages: ClassVar[dict[str, str]] = {
        "name": "اسم القسم مطلوب",
        "slug": "الرابط (slug) مطلوب",
        "type": "نوع القسم مطلوب",
    }

    name: str
    slug: str = Field(min_length=1)
    type: CategoryType
    description: str = ""
    icon: str = ""
    color: CategoryColor = Field(default_factory=CategoryColor)
    is_active: bool = True
    order: int = 0

    @field_validator("name")
    @classmethod
    def _trim_name(cls, v: str) -> str:
        return v.strip()


def _new_object_id() -> str:
    return str(ObjectId())


class FAQQuestion(CmsModel):
    required_messages: ClassVar[dict[str, str]] = {
        "question": "السؤال مطلوب",
        "answer": "الإجابة مطلوبة",
    }

    id: str = Field(default_factory=_new_object_id, alias="_id")
    question: str
    answer: str
    order: int = 0
    is_active: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, ObjectId) else v


class FAQCategoryDocument(CmsModel):
    required_messages: ClassVar[dict[str, str]] = {
        "name": "اسم القسم مطلوب",
        **FAQQuestion.required_messages,
    }

    name: str
    slug: Optional[str] = None
    icon: str = "HelpCircle"
    description: str = ""
    questions: list[FAQQuestion] = Field(default_factory=list)
    order: int = 0
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def _trim_name(cls, v: str) -> str:
        return v.strip()


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------


class RelatedTo(CmsModel):
    """What a media asset belongs to: ``{type, id}``; ``id`` is omitted for general assets."""

    type: RelatedKind
    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, ObjectId) else v


class MediaDocument(CmsModel):
    filename: str
    original_name: str
    path: str
    url: str
    mimetype: str
    size: int
    width: Optional[int] = None
    height: Optional[int] = None
    alt: str = ""
    related_to: Optional[RelatedTo] = None


class UserDocument(CmsModel):
    email: str
    name: str = ""
    role: str = "editor"
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()


__all__ = [
    "CmsModel",
    "PublishStatus",
    "CategoryType",
    "RelatedKind",
    "BlogDocument",
    "ServiceDocument",
    "Section",
    "SectionItem",
    "SectionType",
    "Seo",
    "Hero",
    "Cta",
    "Testimonial",
    "CategoryDocument",
    "CategoryColor",
    "FAQQuestion",
    "FAQCategoryDocument",
    "RelatedTo",
    "MediaDocument",
    "UserDocument",
]
