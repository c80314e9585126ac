from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from app.schemas.course import Course


class EnrollmentCreate(BaseModel):
    course_id: int


class EnrollmentProgressUpdate(BaseModel):
    progress: float


class Enrollment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    progress: float
    is_completed: bool
    completed_at: Optional[datetime] = None
    enrolled_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EnrollmentWithCourse(Enrollment):
    course: Course
