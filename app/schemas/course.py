from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.core.constants import CourseLevelEnum, CoursePublishAction, CourseStatusEnum
from app.schemas.user import UserSummary
from app.schemas.lesson import LessonSummary


class CourseBase(BaseModel):
    title: str = Field(..., min_length=5, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    thumbnail: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    level: CourseLevelEnum = CourseLevelEnum.BEGINNER
    price: float = Field(0.0, ge=0, le=10000)

    @field_validator("title")
    def strip_title(cls, v):
        v = v.strip()
        if len(v) < 5:
            raise ValueError("Title must be between 5 and 200 characters")
        return v


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=5, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    thumbnail: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    level: Optional[CourseLevelEnum] = None
    price: Optional[float] = Field(None, ge=0, le=10000)


class CourseStatusUpdate(BaseModel):
    status: CourseStatusEnum
    rejection_reason: Optional[str] = Field(None, min_length=10, max_length=500)


class CoursePublishToggle(BaseModel):
    action: CoursePublishAction


class Course(CourseBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: CourseStatusEnum
    is_published: bool
    rejection_reason: Optional[str] = None
    instructor_id: int
    instructor: Optional[UserSummary] = None
    lesson_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CourseDetail(Course):
    lessons: List[LessonSummary] = []
    students_count: int = 0
    reviews_count: int = 0
    average_rating: float = 0.0
