from uuid import UUID

from fastapi import APIRouter, Depends, status

from learnhub.auth.dependencies import get_current_user
from learnhub.auth.models.user import User
from learnhub.courses.dependencies import get_enrollment_service
from learnhub.courses.schemas.course import CourseSummary
from learnhub.courses.schemas.enrollment import (
    EnrollmentCheckResponse,
    EnrollmentCreate,
    EnrollmentCreatedResponse,
    EnrollmentRemovedResponse,
    EnrollmentWithCourseResponse,
)
from learnhub.courses.services.enrollment_service import EnrollmentService

router = APIRouter()


@router.post(
    "/enrollments",
    response_model=EnrollmentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def enroll_in_course(
    request: EnrollmentCreate,
    service: EnrollmentService = Depends(get_enrollment_service),
    current_user: User = Depends(get_current_user),
) -> EnrollmentCreatedResponse:
    """Subscribe the current learner to a course, applying a promo code if the course is paid."""
    result = service.enroll(current_user, request.course_id, request.promo_code)
    enrollment = result.enrollment

    return EnrollmentCreatedResponse(
        enrollment_id=enrollment.id,
        course_id=result.course.id,
        course_title=result.course.title,
        original_price=float(result.course.price),
        price_paid=float(enrollment.price_paid),
        discount_percent=result.discount_percent,
        promo_code_used=enrollment.promo_code_used,
        created_at=enrollment.enrolled_at,
    )


@router.get("/enrollments/mine", response_model=list[EnrollmentWithCourseResponse])
async def get_my_enrollments(
    service: EnrollmentService = Depends(get_enrollment_service),
    current_user: User = Depends(get_current_user),
) -> list[EnrollmentWithCourseResponse]:
    enrollments = service.list_for_user(current_user.id)

    return [
        EnrollmentWithCourseResponse(
            id=e.id,
            user_id=e.user_id,
            course_id=e.course_id,
            price_paid=float(e.price_paid),
            promo_code_used=e.promo_code_used,
            enrolled_at=e.enrolled_at,
            course=CourseSummary(
                id=e.course.id,
                title=e.course.title,
                description=e.course.description,
                price=float(e.course.price),
                thumbnail=e.course.thumbnail,
            ),
        )
        for e in enrollments
    ]


@router.get("/enrollments/check/{course_id}", response_model=EnrollmentCheckResponse)
async def check_enrollment(
    course_id: UUID,
    service: EnrollmentService = Depends(get_enrollment_service),
    current_user: User = Depends(get_current_user),
) -> EnrollmentCheckResponse:
    """Whether the current user holds an enrollment for the course. Unknown courses report false."""
    return EnrollmentCheckResponse(
        course_id=course_id,
        is_enrolled=service.is_enrolled(current_user.id, course_id),
    )


@router.delete("/enrollments/{enrollment_id}", response_model=EnrollmentRemovedResponse)
async def remove_enrollment(
    enrollment_id: UUID,
    service: EnrollmentService = Depends(get_enrollment_service),
    current_user: User = Depends(get_current_user),
) -> EnrollmentRemovedResponse:
    """Remove one of the current user's free subscriptions."""
    service.unenroll(current_user, enrollment_id)
    return EnrollmentRemovedResponse(enrollment_id=enrollment_id)
