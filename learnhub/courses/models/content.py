import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnhub.core.constants import CONTENT_DESCRIPTION_MAX_LENGTH, CONTENT_TITLE_MAX_LENGTH
from learnhub.core.datetime_utils import utcnow
from learnhub.db.session import Base


class ContentType(str, enum.Enum):
    VIDEO = "video"
    DOCUMENT = "document"
    NOTE = "note"
    LINK = "link"


class CourseContent(Base):
    __tablename__ = "course_contents"
    __table_args__ = (Index("ix_course_contents_course_order", "course_id", "sort_order"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column(String(CONTENT_TITLE_MAX_LENGTH))
    description: Mapped[str] = mapped_column(String(CONTENT_DESCRIPTION_MAX_LENGTH), default="")
    content_type: Mapped[ContentType] = mapped_column(
        Enum(ContentType, values_callable=lambda obj: [e.value for e in obj])
    )
    video_url: Mapped[str | None] = mapped_column(default=None)
    file_url: Mapped[str | None] = mapped_column(default=None)
    text_content: Mapped[str | None] = mapped_column(Text, default=None)
    external_link: Mapped[str | None] = mapped_column(default=None)
    sort_order: Mapped[int] = mapped_column(default=0)
    duration_minutes: Mapped[int] = mapped_column(default=0)
    is_published: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    course = relationship("Course", back_populates="contents")

    def __repr__(self) -> str:
        return f"<CourseContent(id={self.id}, title={self.title}, course_id={self.course_id})>"
