from decimal import Decimal
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import exists, select
from sqlalchemy.orm import Session, joinedload

from learnhub.auth.models.user import User
from learnhub.auth.roles import require_instructor
from learnhub.core.constants import RECENT_SUBSCRIPTIONS_LIMIT
from learnhub.core.exceptions import ConflictError
from learnhub.courses.models import Course, Enrollment
from learnhub.courses.schemas.course import (
    CourseCreate,
    CourseResponse,
    CourseUpdate,
    DashboardCourseStats,
    DashboardOverview,
    DashboardRecentSubscription,
    DashboardResponse,
    DashboardStudent,
    InstructorSummary,
)
from learnhub.courses.services.access_guard import AccessGuard

logger = structlog.get_logger(__name__)


class CourseService:
    def __init__(self, db: Session):
        self.db = db
        self.guard = AccessGuard(db)

    def list_published(self) -> list[Course]:
        result = (
            self.db.query(Course)
            .options(joinedload(Course.instructor))
            .filter(Course.is_published == True)  # noqa: E712
            .order_by(Course.created_at.desc())
            .all()
        )
        return list(result)

    def get(self, course_id: UUID, user: User | None) -> Course:
        return self.guard.authorize_catalog_read(course_id, user)

    def create(self, user: User, data: CourseCreate) -> Course:
        require_instructor(user)

        course = Course(
            title=data.title,
            description=data.description,
            price=data.price,
            thumbnail=data.thumbnail,
            instructor_id=user.id,
        )
        self.db.add(course)
        self.db.commit()
        self.db.refresh(course)

        logger.info("course_created", course_id=str(course.id), instructor_id=str(user.id))
        return course

    def update(self, user: User, course_id: UUID, data: CourseUpdate) -> Course:
        course = self.guard.authorize_write(course_id, user)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in changes.items():
            setattr(course, key, value)

        self.db.commit()
        self.db.refresh(course)
        logger.info("course_updated", course_id=str(course.id), fields=sorted(changes))
        return course

    def delete(self, user: User, course_id: UUID) -> None:
        """Delete a course and its content.

        Courses with subscribers are kept: paid enrollments are permanent,
        so the owner has to unpublish instead.
        """
        course = self.guard.authorize_write(course_id, user)

        has_enrollments = self.db.execute(
            select(exists().where(Enrollment.course_id == course.id))
        ).scalar()
        if has_enrollments:
            raise ConflictError(
                "Course has subscribers and cannot be deleted; unpublish it instead",
                resource="course",
                error_code="COURSE_HAS_ENROLLMENTS",
            )

        self.db.delete(course)
        self.db.commit()
        logger.info("course_deleted", course_id=str(course_id), instructor_id=str(user.id))

    def list_created(self, user: User) -> list[Course]:
        require_instructor(user)
        result = (
            self.db.query(Course)
            .filter(Course.instructor_id == user.id)
            .order_by(Course.created_at.desc())
            .all()
        )
        return list(result)

    def dashboard(self, user: User) -> DashboardResponse:
        """Subscription totals and revenue across an instructor's courses."""
        courses = self.list_created(user)
        course_ids = [c.id for c in courses]

        enrollments: list[Enrollment] = []
        if course_ids:
            enrollments = list(
                self.db.query(Enrollment)
                .options(joinedload(Enrollment.user), joinedload(Enrollment.course))
                .filter(Enrollment.course_id.in_(course_ids))
                .order_by(Enrollment.enrolled_at.desc())
                .all()
            )

        by_course: dict[UUID, list[Enrollment]] = {c.id: [] for c in courses}
        for e in enrollments:
            by_course[e.course_id].append(e)

        total_revenue = sum((e.price_paid for e in enrollments), Decimal("0"))

        course_stats = [
            DashboardCourseStats(
                id=c.id,
                title=c.title,
                price=float(c.price),
                thumbnail=c.thumbnail,
                is_published=c.is_published,
                total_subscriptions=len(by_course[c.id]),
                revenue=float(sum((e.price_paid for e in by_course[c.id]), Decimal("0"))),
                students=[DashboardStudent(**_student_fields(e)) for e in by_course[c.id]],
            )
            for c in courses
        ]

        recent = [
            DashboardRecentSubscription(**_student_fields(e), course_title=e.course.title)
            for e in enrollments[:RECENT_SUBSCRIPTIONS_LIMIT]
        ]

        return DashboardResponse(
            overview=DashboardOverview(
                total_courses=len(courses),
                total_students=len({e.user_id for e in enrollments}),
                total_subscriptions=len(enrollments),
                total_revenue=float(total_revenue),
            ),
            course_stats=course_stats,
            recent_subscriptions=recent,
        )


def _student_fields(enrollment: Enrollment) -> dict[str, Any]:
    student = enrollment.user
    return {
        "enrollment_id": enrollment.id,
        "student_name": student.name if student else "Unknown",
        "student_email": student.email if student else "Unknown",
        "price_paid": float(enrollment.price_paid),
        "promo_code_used": enrollment.promo_code_used,
        "subscribed_at": enrollment.enrolled_at,
    }


def to_course_response(course: Course) -> CourseResponse:
    instructor = course.instructor
    return CourseResponse(
        id=course.id,
        title=course.title,
        description=course.description,
        price=float(course.price),
        thumbnail=course.thumbnail,
        instructor_id=course.instructor_id,
        instructor=(
            InstructorSummary(id=instructor.id, name=instructor.name, email=instructor.email)
            if instructor
            else None
        ),
        is_published=course.is_published,
        created_at=course.created_at,
        updated_at=course.updated_at,
    )
