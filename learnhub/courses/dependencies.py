from fastapi import Depends
from sqlalchemy.orm import Session

from learnhub.courses.services.content_service import ContentService
from learnhub.courses.services.course_service import CourseService
from learnhub.courses.services.enrollment_service import EnrollmentService
from learnhub.courses.services.promo_service import PromoRegistry, get_promo_registry
from learnhub.db.session import get_db


def get_enrollment_service(
    db: Session = Depends(get_db),
    promo_registry: PromoRegistry = Depends(get_promo_registry),
) -> EnrollmentService:
    return EnrollmentService(db, promo_registry)


def get_course_service(db: Session = Depends(get_db)) -> CourseService:
    return CourseService(db)


def get_content_service(db: Session = Depends(get_db)) -> ContentService:
    return ContentService(db)
