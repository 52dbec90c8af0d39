"""
Test fixtures for courses tests.
"""

import pytest
from sqlalchemy.orm import Session

from learnhub.courses.models import ContentType
from tests.utils.factories import (
    create_content_factory,
    create_course_factory,
    create_enrollment_factory,
)


@pytest.fixture
def paid_course(db_session: Session, test_instructor):
    """Course A: price 1000."""
    return create_course_factory(
        db_session, test_instructor, title="Course A", price="1000.00"
    )


@pytest.fixture
def free_course(db_session: Session, test_instructor):
    """Course B: free."""
    return create_course_factory(db_session, test_instructor, title="Course B", price=0)


@pytest.fixture
def draft_course(db_session: Session, test_instructor):
    return create_course_factory(
        db_session, test_instructor, title="Draft Course", price=0, is_published=False
    )


@pytest.fixture
def course_contents(db_session: Session, free_course):
    """One published video, one published note and one draft note, in that order."""
    return [
        create_content_factory(
            db_session, free_course, title="Intro", content_type=ContentType.VIDEO, sort_order=0
        ),
        create_content_factory(db_session, free_course, title="Notes", sort_order=1),
        create_content_factory(
            db_session, free_course, title="Draft", sort_order=2, is_published=False
        ),
    ]


@pytest.fixture
def free_enrollment(db_session: Session, test_learner, free_course):
    return create_enrollment_factory(db_session, test_learner, free_course)


@pytest.fixture
def paid_enrollment(db_session: Session, test_learner, paid_course):
    return create_enrollment_factory(
        db_session, test_learner, paid_course, price_paid="500.00", promo_code_used="BFSALE25"
    )
