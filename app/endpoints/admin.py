from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.constants import CourseStatusEnum, RoleEnum, UserStatusFilter
from app.crud.base import PaginatedResponse
from app.schemas.course import Course, CourseStatusUpdate
from app.schemas.response import APIResponse
from app.schemas.user import User, UserContext, UserStatusUpdate
from app.services.admin import admin_service
from app.utils import deps

router = APIRouter()


@router.get("/courses", response_model=APIResponse[PaginatedResponse[Course]])
def list_courses(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.require_role(RoleEnum.ADMIN)),
    search: Optional[str] = Query(None, max_length=100),
    status: Optional[CourseStatusEnum] = None,
    category: Optional[str] = Query(None, max_length=50),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100)
):
    courses = admin_service.list_courses(
        db, search=search, status=status, category=category, page=page, limit=limit
    )
    return APIResponse(message="Courses retrieved successfully", data=courses)


@router.get("/courses/pending-approvals", response_model=APIResponse[List[Course]])
def get_pending_approvals(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.require_role(RoleEnum.ADMIN))
):
    courses = admin_service.get_pending_approvals(db)
    return APIResponse(
        message="Pending courses retrieved successfully",
        data=[Course.model_validate(c) for c in courses]
    )


@router.patch("/courses/{course_id}/status", response_model=APIResponse[Course])
def update_course_status(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    status_in: CourseStatusUpdate,
    context: UserContext = Depends(deps.require_role(RoleEnum.ADMIN))
):
    course = admin_service.update_course_status(
        db,
        course_id=course_id,
        status=status_in.status,
        current_user_context=context,
        rejection_reason=status_in.rejection_reason,
    )
    return APIResponse(
        message=f"Course status updated to {status_in.status.value}",
        data=Course.model_validate(course)
    )


@router.get("/users", response_model=APIResponse[PaginatedResponse[User]])
def list_users(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.require_role(RoleEnum.ADMIN)),
    search: Optional[str] = Query(None, max_length=100),
    role: Optional[RoleEnum] = None,
    status: Optional[UserStatusFilter] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100)
):
    users = admin_service.list_users(db, search=search, role=role, status=status, page=page, limit=limit)
    return APIResponse(message="Users retrieved successfully", data=users)


@router.patch("/users/{user_id}/status", response_model=APIResponse[User])
def update_user_status(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_id: int,
    status_in: UserStatusUpdate,
    context: UserContext = Depends(deps.require_role(RoleEnum.ADMIN))
):
    user = admin_service.update_user_status(
        db, user_id=user_id, is_active=status_in.is_active, current_user_context=context
    )
    return APIResponse(
        message=f"User {'activated' if user.is_active else 'deactivated'} successfully",
        data=User.model_validate(user)
    )


@router.delete("/users/{user_id}", response_model=APIResponse[None])
def delete_user(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_id: int,
    context: UserContext = Depends(deps.require_role(RoleEnum.ADMIN))
):
    admin_service.delete_user(db, user_id=user_id, current_user_context=context)
    return APIResponse(message="User deleted successfully", data=None)
