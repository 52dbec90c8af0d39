import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from learnhub.core.datetime_utils import utcnow
from learnhub.db.session import Base


class UserRole(str, enum.Enum):
    """Closed set of roles. Stored values match the ones the auth service issues."""

    INSTRUCTOR = "teacher"
    LEARNER = "student"


class User(Base):
    """
    User record, provisioned by the authentication service.

    Attributes:
        id: Unique UUID primary key, the ``sub`` claim of access tokens
        email: Unique email address
        name: Display name, shown to instructors on their dashboard
        role: INSTRUCTOR creates courses, LEARNER subscribes to them
        is_active: Inactive accounts are rejected on every request
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, values_callable=lambda obj: [e.value for e in obj]),
        default=UserRole.LEARNER,
    )
    is_active: Mapped[bool] = mapped_column(default=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
