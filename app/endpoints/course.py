from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.constants import CourseLevelEnum, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, RoleEnum
from app.crud.base import PaginatedResponse
from app.schemas.course import Course, CourseCreate, CourseDetail, CoursePublishToggle, CourseUpdate
from app.schemas.lesson import LessonSummary
from app.schemas.response import APIResponse
from app.schemas.user import UserContext
from app.services.course import course_service
from app.services.lesson import lesson_service
from app.utils import deps

router = APIRouter()


@router.get("", response_model=APIResponse[PaginatedResponse[Course]])
def list_courses(
    *,
    db: Session = Depends(deps.get_db),
    search: Optional[str] = Query(None, max_length=100),
    category: Optional[str] = Query(None, max_length=50),
    level: Optional[CourseLevelEnum] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
):
    courses = course_service.list_published_courses(
        db, search=search, category=category, level=level, page=page, limit=limit
    )
    return APIResponse(message="Courses retrieved successfully", data=courses)


@router.get("/instructor/my-courses", response_model=APIResponse[List[Course]])
def get_my_courses(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN))
):
    courses = course_service.get_instructor_courses(db, current_user_context=context)
    return APIResponse(
        message="Instructor courses retrieved successfully",
        data=[Course.model_validate(c) for c in courses]
    )


@router.get("/{course_id}", response_model=APIResponse[CourseDetail])
def get_course(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int
):
    course = course_service.get_course_detail(db, course_id)
    return APIResponse(message="Course retrieved successfully", data=course)


@router.get("/{course_id}/lessons", response_model=APIResponse[List[LessonSummary]])
def get_course_lessons(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int
):
    lessons = lesson_service.get_course_lessons(db, course_id)
    return APIResponse(
        message="Lessons retrieved successfully",
        data=[LessonSummary.model_validate(l) for l in lessons]
    )


@router.post("", response_model=APIResponse[Course], status_code=status.HTTP_201_CREATED)
def create_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_in: CourseCreate,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN))
):
    course = course_service.create_course(db, course_in=course_in, current_user_context=context)
    return APIResponse(message="Course created successfully", data=Course.model_validate(course))


@router.put("/{course_id}", response_model=APIResponse[Course])
def update_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    course_in: CourseUpdate,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN))
):
    course = course_service.update_course(db, course_id=course_id, course_in=course_in, current_user_context=context)
    return APIResponse(message="Course updated successfully", data=Course.model_validate(course))


@router.delete("/{course_id}", response_model=APIResponse[None])
def delete_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN))
):
    course_service.delete_course(db, course_id=course_id, current_user_context=context)
    return APIResponse(message="Course deleted successfully", data=None)


@router.post("/{course_id}/submit-for-approval", response_model=APIResponse[Course])
def submit_course_for_approval(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR))
):
    course = course_service.submit_for_approval(db, course_id=course_id, current_user_context=context)
    return APIResponse(message="Course submitted for approval successfully", data=Course.model_validate(course))


@router.patch("/{course_id}/publish", response_model=APIResponse[Course])
def toggle_course_publish(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    publish_in: CoursePublishToggle,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN))
):
    course = course_service.toggle_publish(
        db, course_id=course_id, action=publish_in.action, current_user_context=context
    )
    return APIResponse(message=f"Course {publish_in.action.value}ed successfully", data=Course.model_validate(course))
