from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

import structlog
from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from learnhub.auth.models.user import User
from learnhub.auth.roles import require_learner
from learnhub.core.exceptions import (
    AlreadyEnrolledError,
    CourseUnavailableError,
    ForbiddenError,
    NotFoundError,
    NotRemovableError,
    PromoRequiredError,
    SelfEnrollmentError,
)
from learnhub.courses.models import Course, Enrollment
from learnhub.courses.services.promo_service import PromoRegistry, format_percent

logger = structlog.get_logger(__name__)


def enrollment_exists(db: Session, user_id: UUID, course_id: UUID) -> bool:
    """Existence check on the (user_id, course_id) unique key."""
    stmt = select(
        exists().where(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
    )
    return bool(db.execute(stmt).scalar())


@dataclass
class EnrollmentResult:
    enrollment: Enrollment
    course: Course
    discount_percent: str


class EnrollmentService:
    """Creates and removes enrollments.

    Duplicate prevention relies on the ``uq_user_course_enrollment``
    constraint. The existence check before the insert only gives a cheap,
    friendly answer in the common case; two concurrent requests can both
    pass it, and the loser's IntegrityError is translated to
    AlreadyEnrolledError.
    """

    def __init__(self, db: Session, promo_registry: PromoRegistry):
        self.db = db
        self.promo_registry = promo_registry

    def enroll(
        self, user: User, course_id: UUID, promo_code: str | None = None
    ) -> EnrollmentResult:
        course = self.db.get(Course, course_id)
        if course is None:
            require_learner(user)
            raise NotFoundError("Course not found", resource="course")

        if course.is_owned_by(user.id):
            raise SelfEnrollmentError()

        require_learner(user)

        if not course.is_published:
            raise CourseUnavailableError()

        if self.is_enrolled(user.id, course.id):
            raise AlreadyEnrolledError()

        price_paid, promo_code_used, discount_percent = self._quote(course, promo_code)

        enrollment = Enrollment(
            user_id=user.id,
            course_id=course.id,
            price_paid=price_paid,
            promo_code_used=promo_code_used,
        )
        self.db.add(enrollment)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if self.is_enrolled(user.id, course_id):
                logger.info("enrollment_conflict", user_id=str(user.id), course_id=str(course_id))
                raise AlreadyEnrolledError() from None
            raise
        self.db.refresh(enrollment)

        logger.info(
            "enrollment_created",
            enrollment_id=str(enrollment.id),
            user_id=str(user.id),
            course_id=str(course.id),
            price_paid=str(price_paid),
            promo_code=promo_code_used,
        )
        return EnrollmentResult(
            enrollment=enrollment, course=course, discount_percent=discount_percent
        )

    def _quote(
        self, course: Course, promo_code: str | None
    ) -> tuple[Decimal, str | None, str]:
        """Return (price_paid, promo_code_used, discount_percent) for a course.

        Free courses ignore any promo code. Paid courses require one.
        """
        if course.is_free:
            return Decimal("0"), None, format_percent(Decimal("0"))

        if not PromoRegistry.normalize(promo_code):
            raise PromoRequiredError(original_price=float(course.price))

        promo = self.promo_registry.validate(promo_code)
        return promo.apply(course.price), promo.code, promo.discount_percent

    def unenroll(self, user: User, enrollment_id: UUID) -> None:
        enrollment = self.db.get(Enrollment, enrollment_id)
        if enrollment is None:
            raise NotFoundError("Subscription not found", resource="enrollment")

        if enrollment.user_id != user.id:
            raise ForbiddenError("You can only remove your own subscriptions")

        if not enrollment.is_free or not enrollment.course.is_free:
            raise NotRemovableError()

        course_id = enrollment.course_id
        self.db.delete(enrollment)
        self.db.commit()
        logger.info(
            "enrollment_removed",
            enrollment_id=str(enrollment_id),
            user_id=str(user.id),
            course_id=str(course_id),
        )

    def is_enrolled(self, user_id: UUID, course_id: UUID) -> bool:
        return enrollment_exists(self.db, user_id, course_id)

    def list_for_user(self, user_id: UUID) -> list[Enrollment]:
        """All enrollments of a user with their course loaded, newest first."""
        result = (
            self.db.query(Enrollment)
            .options(joinedload(Enrollment.course))
            .filter(Enrollment.user_id == user_id)
            .order_by(Enrollment.enrolled_at.desc())
            .all()
        )
        return list(result)
