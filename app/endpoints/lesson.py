from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.schemas.lesson import Lesson, LessonCreate, LessonUpdate
from app.schemas.lesson_progress import LessonProgress, LessonProgressUpdate
from app.schemas.response import APIResponse
from app.schemas.user import UserContext
from app.services.course_progress import course_progress_service
from app.services.lesson import lesson_service
from app.utils import deps

router = APIRouter()


@router.post("", response_model=APIResponse[Lesson], status_code=status.HTTP_201_CREATED)
def create_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_in: LessonCreate,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN))
):
    lesson = lesson_service.create_lesson(db, lesson_in=lesson_in, current_user_context=context)
    return APIResponse(message="Lesson created successfully", data=Lesson.model_validate(lesson))


@router.get("/{lesson_id}", response_model=APIResponse[Lesson])
def get_lesson(
    *,
    db: Session = Depends(deps.get_db),
    lesson_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    lesson = lesson_service.get_lesson(db, lesson_id=lesson_id, current_user_context=context)
    return APIResponse(message="Lesson retrieved successfully", data=Lesson.model_validate(lesson))


@router.put("/{lesson_id}", response_model=APIResponse[Lesson])
def update_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    lesson_in: LessonUpdate,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN))
):
    lesson = lesson_service.update_lesson(db, lesson_id=lesson_id, lesson_in=lesson_in, current_user_context=context)
    return APIResponse(message="Lesson updated successfully", data=Lesson.model_validate(lesson))


@router.delete("/{lesson_id}", response_model=APIResponse[None])
def delete_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    context: UserContext = Depends(deps.require_role(RoleEnum.INSTRUCTOR, RoleEnum.ADMIN))
):
    lesson_service.delete_lesson(db, lesson_id=lesson_id, current_user_context=context)
    return APIResponse(message="Lesson deleted successfully", data=None)


@router.patch("/{lesson_id}/complete", response_model=APIResponse[LessonProgress])
def complete_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    progress = course_progress_service.mark_lesson_complete(db, lesson_id=lesson_id, current_user_context=context)
    return APIResponse(message="Lesson marked as complete", data=LessonProgress.model_validate(progress))


@router.patch("/{lesson_id}/progress", response_model=APIResponse[LessonProgress])
def update_lesson_progress(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    progress_in: LessonProgressUpdate,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    progress = course_progress_service.upsert_lesson_progress(
        db, lesson_id=lesson_id, progress_in=progress_in, current_user_context=context
    )
    return APIResponse(message="Lesson progress updated", data=LessonProgress.model_validate(progress))
