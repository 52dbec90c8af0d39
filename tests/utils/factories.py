import uuid
from decimal import Decimal

from faker import Faker
from sqlalchemy.orm import Session

from learnhub.auth.models.user import User, UserRole
from learnhub.courses.models import ContentType, Course, CourseContent, Enrollment

fake = Faker()


def create_user_factory(
    db_session: Session,
    email: str | None = None,
    name: str | None = None,
    role: UserRole = UserRole.LEARNER,
    is_active: bool = True,
) -> User:
    """
    Factory function to create test users.

    Args:
        db_session: Database session
        email: User email (generates random if None)
        name: User name (generates random if None)
        role: UserRole.INSTRUCTOR or UserRole.LEARNER
        is_active: Whether user is active

    Returns:
        Created User instance
    """
    user = User(
        id=uuid.uuid4(),
        email=email or fake.unique.email(),
        name=name or fake.name(),
        role=role,
        is_active=is_active,
    )

    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)

    return user


def create_course_factory(
    db_session: Session,
    instructor: User,
    title: str | None = None,
    price: Decimal | str | int = 0,
    is_published: bool = True,
) -> Course:
    course = Course(
        title=title or fake.sentence(nb_words=4).rstrip("."),
        description=fake.paragraph(nb_sentences=2),
        price=Decimal(str(price)),
        instructor_id=instructor.id,
        is_published=is_published,
    )

    db_session.add(course)
    db_session.commit()
    db_session.refresh(course)

    return course


def create_content_factory(
    db_session: Session,
    course: Course,
    title: str | None = None,
    content_type: ContentType = ContentType.NOTE,
    sort_order: int = 0,
    is_published: bool = True,
) -> CourseContent:
    item = CourseContent(
        course_id=course.id,
        title=title or fake.sentence(nb_words=3).rstrip("."),
        description=fake.sentence(),
        content_type=content_type,
        text_content=fake.paragraph() if content_type is ContentType.NOTE else None,
        sort_order=sort_order,
        is_published=is_published,
    )

    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)

    return item


def create_enrollment_factory(
    db_session: Session,
    user: User,
    course: Course,
    price_paid: Decimal | str | int = 0,
    promo_code_used: str | None = None,
) -> Enrollment:
    """Insert an enrollment directly, bypassing the enrollment rules."""
    enrollment = Enrollment(
        user_id=user.id,
        course_id=course.id,
        price_paid=Decimal(str(price_paid)),
        promo_code_used=promo_code_used,
    )

    db_session.add(enrollment)
    db_session.commit()
    db_session.refresh(enrollment)

    return enrollment
