"""Role checks shared by the access guard and the enrollment service.

Every decision branches over the whole ``UserRole`` enum; adding a role
without deciding what it may do fails type checking at ``assert_never``.
"""

from typing import assert_never

from learnhub.auth.models.user import User, UserRole
from learnhub.core.exceptions import ForbiddenRoleError


def is_instructor(user: User) -> bool:
    role = UserRole(user.role)
    if role is UserRole.INSTRUCTOR:
        return True
    if role is UserRole.LEARNER:
        return False
    assert_never(role)


def require_instructor(user: User, message: str = "Only instructors can manage courses") -> None:
    if not is_instructor(user):
        raise ForbiddenRoleError(message)


def require_learner(
    user: User,
    message: str = "Instructors cannot subscribe to courses. Only students can enroll in courses.",
) -> None:
    if is_instructor(user):
        raise ForbiddenRoleError(message)
