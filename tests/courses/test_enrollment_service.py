"""
Tests for EnrollmentService - pricing, duplicate prevention and removal rules.
"""

import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from learnhub.core.exceptions import (
    AlreadyEnrolledError,
    CourseUnavailableError,
    ForbiddenError,
    ForbiddenRoleError,
    InvalidPromoCodeError,
    NotFoundError,
    NotRemovableError,
    PromoRequiredError,
    SelfEnrollmentError,
)
from learnhub.courses.models import Enrollment
from learnhub.courses.services.enrollment_service import EnrollmentService
from tests.utils.factories import create_course_factory, create_enrollment_factory


def count_enrollments(db: Session, user_id, course_id) -> int:
    stmt = select(func.count()).where(
        Enrollment.user_id == user_id, Enrollment.course_id == course_id
    )
    return int(db.execute(stmt).scalar_one())


@pytest.fixture
def service(db_session, promo_registry) -> EnrollmentService:
    return EnrollmentService(db_session, promo_registry)


class TestEnrollPricing:
    def test_free_course_needs_no_promo(self, service, test_learner, free_course):
        result = service.enroll(test_learner, free_course.id)

        assert result.enrollment.price_paid == Decimal("0")
        assert result.enrollment.promo_code_used is None
        assert result.discount_percent == "0%"

    def test_free_course_ignores_promo(self, service, test_learner, free_course):
        result = service.enroll(test_learner, free_course.id, "BFSALE25")

        assert result.enrollment.price_paid == Decimal("0")
        assert result.enrollment.promo_code_used is None

    def test_paid_course_with_promo(self, service, test_learner, paid_course):
        result = service.enroll(test_learner, paid_course.id, "bfsale25")

        assert result.enrollment.price_paid == Decimal("500.00")
        assert result.enrollment.promo_code_used == "BFSALE25"
        assert result.discount_percent == "50%"
        assert result.course.id == paid_course.id

    def test_paid_course_without_promo(self, service, test_learner, paid_course):
        with pytest.raises(PromoRequiredError) as exc_info:
            service.enroll(test_learner, paid_course.id)

        assert exc_info.value.details["original_price"] == 1000.0

    def test_blank_promo_counts_as_missing(self, service, test_learner, paid_course):
        with pytest.raises(PromoRequiredError):
            service.enroll(test_learner, paid_course.id, "   ")

    def test_unknown_promo(self, service, db_session, test_learner, paid_course):
        with pytest.raises(InvalidPromoCodeError):
            service.enroll(test_learner, paid_course.id, "NOPE")

        assert count_enrollments(db_session, test_learner.id, paid_course.id) == 0

    @pytest.mark.parametrize(
        "price,code,expected",
        [
            ("1000.00", "BFSALE25", "500.00"),
            ("200.00", "SPRING10", "180.00"),
            ("29.99", "BFSALE25", "15.00"),
            ("29.99", "SPRING10", "26.99"),
            ("0.01", "BFSALE25", "0.01"),
        ],
    )
    def test_price_matches_validated_discount(
        self,
        service,
        db_session,
        promo_registry,
        test_instructor,
        test_learner,
        price,
        code,
        expected,
    ):
        course = create_course_factory(db_session, test_instructor, price=price)

        result = service.enroll(test_learner, course.id, code)

        promo = promo_registry.validate(code)
        assert result.enrollment.price_paid == promo.apply(Decimal(price))
        assert result.enrollment.price_paid == Decimal(expected)


class TestEnrollRules:
    def test_course_not_found(self, service, test_learner):
        with pytest.raises(NotFoundError):
            service.enroll(test_learner, uuid.uuid4())

    def test_instructor_gets_forbidden_role_for_missing_course(self, service, test_instructor):
        with pytest.raises(ForbiddenRoleError):
            service.enroll(test_instructor, uuid.uuid4())

    def test_owner_gets_self_enrollment(self, service, test_instructor, paid_course):
        with pytest.raises(SelfEnrollmentError):
            service.enroll(test_instructor, paid_course.id, "BFSALE25")

    def test_other_instructor_gets_forbidden_role(self, service, other_instructor, free_course):
        with pytest.raises(ForbiddenRoleError):
            service.enroll(other_instructor, free_course.id)

    def test_unpublished_course(self, service, test_learner, draft_course):
        with pytest.raises(CourseUnavailableError):
            service.enroll(test_learner, draft_course.id)

    def test_enroll_twice(self, service, db_session, test_learner, paid_course):
        service.enroll(test_learner, paid_course.id, "BFSALE25")

        with pytest.raises(AlreadyEnrolledError):
            service.enroll(test_learner, paid_course.id, "BFSALE25")

        assert count_enrollments(db_session, test_learner.id, paid_course.id) == 1

    def test_already_enrolled_checked_before_promo(
        self, service, test_learner, paid_enrollment, paid_course
    ):
        with pytest.raises(AlreadyEnrolledError):
            service.enroll(test_learner, paid_course.id)

    def test_unique_violation_becomes_already_enrolled(
        self, service, db_session, test_learner, free_course, free_enrollment
    ):
        # The pre-insert check misses the existing row, as it would under a race.
        with patch.object(service, "is_enrolled", side_effect=[False, True]):
            with pytest.raises(AlreadyEnrolledError):
                service.enroll(test_learner, free_course.id)

        assert count_enrollments(db_session, test_learner.id, free_course.id) == 1


class TestUnenroll:
    def test_remove_free_enrollment(self, service, db_session, test_learner, free_enrollment):
        course_id = free_enrollment.course_id

        service.unenroll(test_learner, free_enrollment.id)

        assert count_enrollments(db_session, test_learner.id, course_id) == 0
        assert service.is_enrolled(test_learner.id, course_id) is False

    def test_paid_enrollment_not_removable(self, service, test_learner, paid_enrollment):
        with pytest.raises(NotRemovableError):
            service.unenroll(test_learner, paid_enrollment.id)

    def test_free_enrollment_of_now_paid_course_not_removable(
        self, service, db_session, test_learner, free_course, free_enrollment
    ):
        free_course.price = Decimal("49.00")
        db_session.commit()

        with pytest.raises(NotRemovableError):
            service.unenroll(test_learner, free_enrollment.id)

    def test_other_learner_forbidden(self, service, other_learner, free_enrollment):
        with pytest.raises(ForbiddenError) as exc_info:
            service.unenroll(other_learner, free_enrollment.id)

        assert exc_info.value.error_code == "FORBIDDEN"

    def test_other_learner_forbidden_on_paid(self, service, other_learner, paid_enrollment):
        with pytest.raises(ForbiddenError):
            service.unenroll(other_learner, paid_enrollment.id)

    def test_enrollment_not_found(self, service, test_learner):
        with pytest.raises(NotFoundError):
            service.unenroll(test_learner, uuid.uuid4())


class TestQueries:
    def test_is_enrolled(self, service, test_learner, other_learner, free_enrollment):
        assert service.is_enrolled(test_learner.id, free_enrollment.course_id) is True
        assert service.is_enrolled(other_learner.id, free_enrollment.course_id) is False

    def test_list_for_user(
        self, service, db_session, test_learner, test_instructor, free_enrollment
    ):
        second = create_course_factory(db_session, test_instructor, price=0)
        create_enrollment_factory(db_session, test_learner, second)

        enrollments = service.list_for_user(test_learner.id)

        assert len(enrollments) == 2
        assert {e.course_id for e in enrollments} == {free_enrollment.course_id, second.id}
        assert all(e.course is not None for e in enrollments)
