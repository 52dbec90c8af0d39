from uuid import UUID

from fastapi import APIRouter, Depends, status

from learnhub.auth.dependencies import get_current_user, get_optional_user
from learnhub.auth.models.user import User
from learnhub.courses.dependencies import get_course_service
from learnhub.courses.schemas.course import (
    CourseCreate,
    CourseDeletedResponse,
    CourseResponse,
    CourseUpdate,
    DashboardResponse,
)
from learnhub.courses.services.course_service import CourseService, to_course_response

router = APIRouter()


@router.get("/courses", response_model=list[CourseResponse])
async def list_courses(
    service: CourseService = Depends(get_course_service),
) -> list[CourseResponse]:
    """List published courses, newest first."""
    return [to_course_response(c) for c in service.list_published()]


@router.post(
    "/courses",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_course(
    request: CourseCreate,
    service: CourseService = Depends(get_course_service),
    current_user: User = Depends(get_current_user),
) -> CourseResponse:
    """Create a new course (instructors only)."""
    return to_course_response(service.create(current_user, request))


# /courses/mine/* must be registered before /courses/{course_id}


@router.get("/courses/mine/created", response_model=list[CourseResponse])
async def list_my_courses(
    service: CourseService = Depends(get_course_service),
    current_user: User = Depends(get_current_user),
) -> list[CourseResponse]:
    return [to_course_response(c) for c in service.list_created(current_user)]


@router.get("/courses/mine/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    service: CourseService = Depends(get_course_service),
    current_user: User = Depends(get_current_user),
) -> DashboardResponse:
    """Subscription and revenue statistics for the current instructor's courses."""
    return service.dashboard(current_user)


@router.get("/courses/{course_id}", response_model=CourseResponse)
async def get_course(
    course_id: UUID,
    service: CourseService = Depends(get_course_service),
    current_user: User | None = Depends(get_optional_user),
) -> CourseResponse:
    return to_course_response(service.get(course_id, current_user))


@router.put("/courses/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: UUID,
    request: CourseUpdate,
    service: CourseService = Depends(get_course_service),
    current_user: User = Depends(get_current_user),
) -> CourseResponse:
    """Update a course (owner only)."""
    return to_course_response(service.update(current_user, course_id, request))


@router.delete("/courses/{course_id}", response_model=CourseDeletedResponse)
async def delete_course(
    course_id: UUID,
    service: CourseService = Depends(get_course_service),
    current_user: User = Depends(get_current_user),
) -> CourseDeletedResponse:
    """Delete a course without subscribers, together with its content (owner only)."""
    service.delete(current_user, course_id)
    return CourseDeletedResponse(course_id=course_id)
