from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from app.core.constants import LessonTypeEnum
from app.schemas.course import Course
from app.schemas.enrollment import Enrollment, EnrollmentWithCourse


class LessonProgressUpdate(BaseModel):
    """Partial update: omitted fields keep their stored value."""
    is_completed: Optional[bool] = None
    watch_time: Optional[int] = Field(None, ge=0)


class LessonProgress(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    lesson_id: int
    is_completed: bool
    watch_time: int
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LessonProgressState(BaseModel):
    """Progress fields as merged into a lesson listing."""
    model_config = ConfigDict(from_attributes=True)

    is_completed: bool = False
    watch_time: int = 0
    completed_at: Optional[datetime] = None


class LessonWithProgress(BaseModel):
    id: int
    title: str
    duration: int
    lesson_type: LessonTypeEnum
    order: int
    is_preview: bool
    progress: LessonProgressState


class CourseProgressOverview(BaseModel):
    enrollment: Enrollment
    overall_progress: float
    total_lessons: int
    completed_lessons: int
    lessons: List[LessonWithProgress]


class LearningStats(BaseModel):
    total_enrollments: int
    completed_courses: int
    in_progress_courses: int
    total_lessons_completed: int
    total_study_time_minutes: int
    certificates_earned: int
    average_progress: float
    recent_courses: List[EnrollmentWithCourse]


class EnrollmentDetail(BaseModel):
    enrollment: Enrollment
    course: Course
    lessons: List[LessonWithProgress]
