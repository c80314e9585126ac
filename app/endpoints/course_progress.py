from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.schemas.lesson_progress import CourseProgressOverview, LearningStats, LessonProgress, LessonProgressUpdate
from app.schemas.response import APIResponse
from app.schemas.user import UserContext
from app.services.course_progress import course_progress_service
from app.utils import deps

router = APIRouter()


@router.put("/lessons/{lesson_id}/progress", response_model=APIResponse[LessonProgress])
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


@router.post("/lessons/{lesson_id}/complete", response_model=APIResponse[LessonProgress])
def mark_lesson_complete(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    progress = course_progress_service.mark_lesson_complete(db, lesson_id=lesson_id, current_user_context=context)
    return APIResponse(message="Lesson marked as complete", data=LessonProgress.model_validate(progress))


@router.get("/lessons/{lesson_id}/progress", response_model=APIResponse[Optional[LessonProgress]])
def get_lesson_progress(
    *,
    db: Session = Depends(deps.get_db),
    lesson_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    progress = course_progress_service.get_lesson_progress(db, lesson_id=lesson_id, current_user_context=context)
    if not progress:
        return APIResponse(message="Lesson not started yet", data=None)
    return APIResponse(message="Lesson progress retrieved successfully", data=LessonProgress.model_validate(progress))


@router.get("/courses/{course_id}/progress", response_model=APIResponse[CourseProgressOverview])
def get_course_progress(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    overview = course_progress_service.get_course_progress_overview(
        db, course_id=course_id, current_user_context=context
    )
    return APIResponse(message="Course progress retrieved successfully", data=overview)


@router.get("/stats", response_model=APIResponse[LearningStats])
def get_learning_stats(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    stats = course_progress_service.get_learning_stats(db, current_user_context=context)
    return APIResponse(message="Learning statistics retrieved successfully", data=stats)
