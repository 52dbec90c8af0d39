import uuid

from pydantic import BaseModel, Field

from learnhub.core.datetime_utils import UTCDatetime
from learnhub.courses.schemas.course import CourseSummary


class EnrollmentCreate(BaseModel):
    course_id: uuid.UUID
    promo_code: str | None = Field(None, max_length=64)


class EnrollmentCreatedResponse(BaseModel):
    enrollment_id: uuid.UUID
    course_id: uuid.UUID
    course_title: str
    original_price: float
    price_paid: float
    discount_percent: str  # e.g. "50%"; derived, never stored
    promo_code_used: str | None
    created_at: UTCDatetime


class EnrollmentWithCourseResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    course_id: uuid.UUID
    price_paid: float
    promo_code_used: str | None
    enrolled_at: UTCDatetime
    course: CourseSummary


class EnrollmentCheckResponse(BaseModel):
    course_id: uuid.UUID
    is_enrolled: bool


class EnrollmentRemovedResponse(BaseModel):
    enrollment_id: uuid.UUID
    message: str = "Subscription removed successfully"
