from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.constants import EnrollmentStatusFilter, RoleEnum
from app.crud.base import PaginatedResponse
from app.schemas.enrollment import Enrollment, EnrollmentCreate, EnrollmentProgressUpdate, EnrollmentWithCourse
from app.schemas.lesson_progress import EnrollmentDetail
from app.schemas.response import APIResponse
from app.schemas.user import UserContext
from app.services.enrollment import enrollment_service
from app.utils import deps

router = APIRouter()


@router.post("/enroll", response_model=APIResponse[Enrollment], status_code=status.HTTP_201_CREATED)
def enroll_in_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_in: EnrollmentCreate,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    enrollment = enrollment_service.enroll(db, course_id=enrollment_in.course_id, current_user_context=context)
    return APIResponse(message="Successfully enrolled in course", data=Enrollment.model_validate(enrollment))


@router.get("/my-enrollments", response_model=APIResponse[PaginatedResponse[EnrollmentWithCourse]])
def get_my_enrollments(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context),
    status: Optional[EnrollmentStatusFilter] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50)
):
    enrollments = enrollment_service.get_user_enrollments(
        db, current_user_context=context, status=status, page=page, limit=limit
    )
    return APIResponse(message="Enrollments retrieved successfully", data=enrollments)


@router.get("/course/{course_id}", response_model=APIResponse[PaginatedResponse[Enrollment]])
def get_course_enrollments(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN)),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100)
):
    enrollments = enrollment_service.get_course_enrollments(
        db, course_id=course_id, current_user_context=context, page=page, limit=limit
    )
    return APIResponse(message="Course enrollments retrieved successfully", data=enrollments)


@router.get("/{enrollment_id}", response_model=APIResponse[EnrollmentDetail])
def get_enrollment(
    *,
    db: Session = Depends(deps.get_db),
    enrollment_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    detail = enrollment_service.get_enrollment(db, enrollment_id=enrollment_id, current_user_context=context)
    return APIResponse(message="Enrollment retrieved successfully", data=detail)


@router.patch("/{enrollment_id}/progress", response_model=APIResponse[Enrollment])
def update_enrollment_progress(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_id: int,
    progress_in: EnrollmentProgressUpdate,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    enrollment = enrollment_service.update_progress_manually(
        db, enrollment_id=enrollment_id, progress=progress_in.progress, current_user_context=context
    )
    return APIResponse(message="Progress updated successfully", data=Enrollment.model_validate(enrollment))


@router.patch("/{enrollment_id}/complete", response_model=APIResponse[Enrollment])
def complete_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    enrollment = enrollment_service.complete_course(db, enrollment_id=enrollment_id, current_user_context=context)
    return APIResponse(message="Course completed successfully", data=Enrollment.model_validate(enrollment))
