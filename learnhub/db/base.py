"""
Database base module - imports all models for Alembic migration detection.

This module imports all SQLAlchemy models to ensure they are registered
with Alembic for automatic migration generation. While the imports appear
unused, they are essential for the migration system to work properly.
"""

from learnhub.auth.models.user import User
from learnhub.courses.models.content import CourseContent
from learnhub.courses.models.course import Course
from learnhub.courses.models.enrollment import Enrollment
from learnhub.db.session import Base

__all__ = [
    "Base",
    "User",
    "Course",
    "CourseContent",
    "Enrollment",
]
