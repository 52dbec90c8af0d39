import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnhub.core.constants import (
    COURSE_DESCRIPTION_MAX_LENGTH,
    COURSE_TITLE_MAX_LENGTH,
    PRICE_PRECISION,
    PRICE_SCALE,
)
from learnhub.core.datetime_utils import utcnow
from learnhub.db.session import Base


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_courses_price_non_negative"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    title: Mapped[str] = mapped_column(String(COURSE_TITLE_MAX_LENGTH))
    description: Mapped[str] = mapped_column(String(COURSE_DESCRIPTION_MAX_LENGTH))
    price: Mapped[Decimal] = mapped_column(
        Numeric(PRICE_PRECISION, PRICE_SCALE), default=Decimal("0")
    )  # 0 = free course
    thumbnail: Mapped[str] = mapped_column(default="")
    instructor_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True, default=None
    )
    is_published: Mapped[bool] = mapped_column(default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    instructor = relationship("User")
    contents = relationship("CourseContent", back_populates="course", cascade="all, delete-orphan")
    # No cascade: a course with enrollments cannot be deleted.
    enrollments = relationship("Enrollment", back_populates="course", passive_deletes="all")

    @property
    def is_free(self) -> bool:
        return self.price == 0

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.instructor_id is not None and self.instructor_id == user_id

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title={self.title}, price={self.price})>"
