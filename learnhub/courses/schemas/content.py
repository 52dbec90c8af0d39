import uuid
from typing import Literal

from pydantic import BaseModel, Field

from learnhub.core.constants import CONTENT_DESCRIPTION_MAX_LENGTH, CONTENT_TITLE_MAX_LENGTH
from learnhub.core.datetime_utils import UTCDatetime
from learnhub.courses.models.content import ContentType

ContentTypeLiteral = Literal["video", "document", "note", "link"]


class ContentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=CONTENT_TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=CONTENT_DESCRIPTION_MAX_LENGTH)
    content_type: ContentTypeLiteral
    video_url: str | None = None
    file_url: str | None = None
    text_content: str | None = None
    external_link: str | None = None
    sort_order: int | None = Field(None, ge=0)  # None: append after the last item
    duration_minutes: int = Field(default=0, ge=0)
    is_published: bool = True


class ContentUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=CONTENT_TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=CONTENT_DESCRIPTION_MAX_LENGTH)
    content_type: ContentTypeLiteral | None = None
    video_url: str | None = None
    file_url: str | None = None
    text_content: str | None = None
    external_link: str | None = None
    sort_order: int | None = Field(None, ge=0)
    duration_minutes: int | None = Field(None, ge=0)
    is_published: bool | None = None


class ContentResponse(BaseModel):
    id: uuid.UUID
    course_id: uuid.UUID
    title: str
    description: str
    content_type: ContentType
    video_url: str | None
    file_url: str | None
    text_content: str | None
    external_link: str | None
    sort_order: int
    duration_minutes: int
    is_published: bool
    created_at: UTCDatetime
    updated_at: UTCDatetime

    class Config:
        from_attributes = True


class CourseContentListResponse(BaseModel):
    count: int
    is_owner: bool
    items: list[ContentResponse]


class ContentDeletedResponse(BaseModel):
    content_id: uuid.UUID
    message: str = "Content deleted successfully"
