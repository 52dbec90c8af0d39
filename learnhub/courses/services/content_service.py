from uuid import UUID

import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session

from learnhub.auth.models.user import User
from learnhub.core.exceptions import NotFoundError
from learnhub.courses.models import ContentType, CourseContent
from learnhub.courses.schemas.content import ContentCreate, ContentUpdate
from learnhub.courses.services.access_guard import AccessGuard, CourseAccess

logger = structlog.get_logger(__name__)

# Columns that cannot be cleared through an update
_REQUIRED_FIELDS = frozenset(
    {"title", "description", "content_type", "sort_order", "duration_minutes", "is_published"}
)


class ContentService:
    def __init__(self, db: Session):
        self.db = db
        self.guard = AccessGuard(db)

    def list_for_course(
        self, user: User, course_id: UUID
    ) -> tuple[CourseAccess, list[CourseContent]]:
        """Content of a course as the caller may see it.

        Owners get drafts too; enrolled learners only published items.
        """
        access = self.guard.authorize_content_read(course_id, user)
        items = (
            self.db.query(CourseContent)
            .filter(CourseContent.course_id == access.course.id)
            .order_by(CourseContent.sort_order, CourseContent.created_at)
            .all()
        )
        return access, access.visible(items)

    def get(self, user: User, content_id: UUID) -> CourseContent:
        item = self._get_or_404(content_id)
        access = self.guard.authorize_content_read(item.course_id, user)
        if not access.can_see(item):
            raise NotFoundError("Content not found", resource="content")
        return item

    def create(self, user: User, course_id: UUID, data: ContentCreate) -> CourseContent:
        course = self.guard.authorize_write(course_id, user)

        sort_order = data.sort_order
        if sort_order is None:
            last = (
                self.db.query(func.max(CourseContent.sort_order))
                .filter(CourseContent.course_id == course.id)
                .scalar()
            )
            sort_order = 0 if last is None else last + 1

        item = CourseContent(
            course_id=course.id,
            title=data.title,
            description=data.description,
            content_type=ContentType(data.content_type),
            video_url=data.video_url,
            file_url=data.file_url,
            text_content=data.text_content,
            external_link=data.external_link,
            sort_order=sort_order,
            duration_minutes=data.duration_minutes,
            is_published=data.is_published,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)

        logger.info(
            "content_created",
            content_id=str(item.id),
            course_id=str(course.id),
            user_id=str(user.id),
        )
        return item

    def update(self, user: User, content_id: UUID, data: ContentUpdate) -> CourseContent:
        item = self._get_or_404(content_id)
        self.guard.authorize_write(item.course_id, user)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("content_type") is not None:
            changes["content_type"] = ContentType(changes["content_type"])
        for key, value in changes.items():
            if value is None and key in _REQUIRED_FIELDS:
                continue
            setattr(item, key, value)

        self.db.commit()
        self.db.refresh(item)
        logger.info("content_updated", content_id=str(item.id), fields=sorted(changes))
        return item

    def delete(self, user: User, content_id: UUID) -> None:
        item = self._get_or_404(content_id)
        self.guard.authorize_write(item.course_id, user)

        self.db.delete(item)
        self.db.commit()
        logger.info("content_deleted", content_id=str(content_id), user_id=str(user.id))

    def _get_or_404(self, content_id: UUID) -> CourseContent:
        item = self.db.get(CourseContent, content_id)
        if item is None:
            raise NotFoundError("Content not found", resource="content")
        return item
