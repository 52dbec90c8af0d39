from uuid import UUID

from fastapi import APIRouter, Depends, status

from learnhub.auth.dependencies import get_current_user
from learnhub.auth.models.user import User
from learnhub.courses.dependencies import get_content_service
from learnhub.courses.schemas.content import (
    ContentCreate,
    ContentDeletedResponse,
    ContentResponse,
    ContentUpdate,
    CourseContentListResponse,
)
from learnhub.courses.services.content_service import ContentService

router = APIRouter()


@router.get("/courses/{course_id}/content", response_model=CourseContentListResponse)
async def list_course_content(
    course_id: UUID,
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_current_user),
) -> CourseContentListResponse:
    """List a course's content.

    Owners see drafts as well; enrolled learners see published items only.
    """
    access, items = service.list_for_course(current_user, course_id)
    return CourseContentListResponse(
        count=len(items),
        is_owner=access.is_owner,
        items=[ContentResponse.model_validate(item) for item in items],
    )


@router.post(
    "/courses/{course_id}/content",
    response_model=ContentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_content(
    course_id: UUID,
    request: ContentCreate,
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_current_user),
) -> ContentResponse:
    item = service.create(current_user, course_id, request)
    return ContentResponse.model_validate(item)


@router.get("/content/{content_id}", response_model=ContentResponse)
async def get_content(
    content_id: UUID,
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_current_user),
) -> ContentResponse:
    return ContentResponse.model_validate(service.get(current_user, content_id))


@router.put("/content/{content_id}", response_model=ContentResponse)
async def update_content(
    content_id: UUID,
    request: ContentUpdate,
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_current_user),
) -> ContentResponse:
    item = service.update(current_user, content_id, request)
    return ContentResponse.model_validate(item)


@router.delete("/content/{content_id}", response_model=ContentDeletedResponse)
async def delete_content(
    content_id: UUID,
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_current_user),
) -> ContentDeletedResponse:
    service.delete(current_user, content_id)
    return ContentDeletedResponse(content_id=content_id)
