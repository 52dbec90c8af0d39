import uuid
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from learnhub.core.constants import COURSE_DESCRIPTION_MAX_LENGTH, COURSE_TITLE_MAX_LENGTH
from learnhub.core.datetime_utils import UTCDatetime


def _strip(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


class CourseBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=COURSE_TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=COURSE_DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    thumbnail: str = ""

    @field_validator("title", "description", "thumbnail", mode="before")
    @classmethod
    def strip_text(cls, value: str | None) -> str | None:
        return _strip(value)


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=COURSE_TITLE_MAX_LENGTH)
    description: str | None = Field(
        None, min_length=1, max_length=COURSE_DESCRIPTION_MAX_LENGTH
    )
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    thumbnail: str | None = None
    is_published: bool | None = None

    @field_validator("title", "description", "thumbnail", mode="before")
    @classmethod
    def strip_text(cls, value: str | None) -> str | None:
        return _strip(value)


class InstructorSummary(BaseModel):
    id: uuid.UUID
    name: str
    email: str

    class Config:
        from_attributes = True


class CourseResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    price: float
    thumbnail: str
    instructor_id: uuid.UUID | None
    instructor: InstructorSummary | None = None
    is_published: bool
    created_at: UTCDatetime
    updated_at: UTCDatetime

    class Config:
        from_attributes = True


class CourseSummary(BaseModel):
    """Course fields joined into enrollment listings."""

    id: uuid.UUID
    title: str
    description: str
    price: float
    thumbnail: str

    class Config:
        from_attributes = True


class CourseDeletedResponse(BaseModel):
    course_id: uuid.UUID
    message: str = "Course deleted successfully"


# Instructor dashboard


class DashboardOverview(BaseModel):
    total_courses: int
    total_students: int
    total_subscriptions: int
    total_revenue: float


class DashboardStudent(BaseModel):
    enrollment_id: uuid.UUID
    student_name: str
    student_email: str
    price_paid: float
    promo_code_used: str | None
    subscribed_at: UTCDatetime


class DashboardCourseStats(BaseModel):
    id: uuid.UUID
    title: str
    price: float
    thumbnail: str
    is_published: bool
    total_subscriptions: int
    revenue: float
    students: list[DashboardStudent]


class DashboardRecentSubscription(DashboardStudent):
    course_title: str


class DashboardResponse(BaseModel):
    overview: DashboardOverview
    course_stats: list[DashboardCourseStats]
    recent_subscriptions: list[DashboardRecentSubscription]
