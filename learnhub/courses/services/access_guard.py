"""Authorization for courses and course content.

Rules, in evaluation order:

1. A published course's catalog entry is readable by anyone, anonymous
   callers included. Unpublished entries are visible to their owner only.
2. The owner may read and write the course's metadata and content.
3. An enrolled caller may read the content list.
4. Any other content read is forbidden.
5. Writes require the instructor role and ownership of the course.
6. Non-owners only ever see published content items.

Nothing here is cached: each decision re-reads the course and enrollment
rows, so an unenrollment takes effect on the very next request.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.orm import Session

from learnhub.auth.models.user import User
from learnhub.auth.roles import require_instructor
from learnhub.core.exceptions import ForbiddenError, NotFoundError
from learnhub.courses.models import Course, CourseContent
from learnhub.courses.services.enrollment_service import enrollment_exists


@dataclass(frozen=True)
class CourseAccess:
    """Relationship of a caller to a course, derived per request."""

    course: Course
    is_owner: bool
    is_enrolled: bool

    def visible(self, items: Iterable[CourseContent]) -> list[CourseContent]:
        if self.is_owner:
            return list(items)
        return [item for item in items if item.is_published]

    def can_see(self, item: CourseContent) -> bool:
        return self.is_owner or item.is_published


class AccessGuard:
    def __init__(self, db: Session):
        self.db = db

    def get_course(self, course_id: UUID) -> Course:
        course = self.db.get(Course, course_id)
        if course is None:
            raise NotFoundError("Course not found", resource="course")
        return course

    def authorize_catalog_read(self, course_id: UUID, user: User | None) -> Course:
        course = self.get_course(course_id)
        if course.is_published:
            return course
        if user is not None and course.is_owned_by(user.id):
            return course
        # Drafts of other instructors are reported as absent.
        raise NotFoundError("Course not found", resource="course")

    def authorize_content_read(self, course_id: UUID, user: User) -> CourseAccess:
        course = self.get_course(course_id)
        if course.is_owned_by(user.id):
            return CourseAccess(course=course, is_owner=True, is_enrolled=False)

        if enrollment_exists(self.db, user.id, course.id):
            return CourseAccess(course=course, is_owner=False, is_enrolled=True)

        raise ForbiddenError("You must be enrolled in this course to access its content")

    def authorize_write(self, course_id: UUID, user: User) -> Course:
        require_instructor(user)
        course = self.get_course(course_id)
        if not course.is_owned_by(user.id):
            raise ForbiddenError("You can only manage your own courses")
        return course
