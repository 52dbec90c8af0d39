"""Course models."""

from learnhub.courses.models.content import ContentType, CourseContent
from learnhub.courses.models.course import Course
from learnhub.courses.models.enrollment import Enrollment

__all__ = [
    "Course",
    "CourseContent",
    "ContentType",
    "Enrollment",
]
