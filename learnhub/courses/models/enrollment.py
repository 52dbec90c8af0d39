import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnhub.core.constants import PRICE_PRECISION, PRICE_SCALE
from learnhub.core.datetime_utils import utcnow
from learnhub.db.session import Base


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        # The unique index doubles as the lookup index for is_enrolled().
        UniqueConstraint("user_id", "course_id", name="uq_user_course_enrollment"),
        CheckConstraint("price_paid >= 0", name="ck_enrollments_price_paid_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="RESTRICT"), index=True
    )
    price_paid: Mapped[Decimal] = mapped_column(
        Numeric(PRICE_PRECISION, PRICE_SCALE), default=Decimal("0")
    )
    promo_code_used: Mapped[str | None] = mapped_column(String(64), default=None)
    enrolled_at: Mapped[datetime] = mapped_column(default=utcnow, index=True)

    user = relationship("User")
    course = relationship("Course", back_populates="enrollments")

    @property
    def is_free(self) -> bool:
        return self.price_paid == 0

    def __repr__(self) -> str:
        return f"<Enrollment(id={self.id}, user_id={self.user_id}, course_id={self.course_id})>"
