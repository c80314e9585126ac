from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from app.core.constants import LessonTypeEnum


class LessonBase(BaseModel):
    title: str = Field(..., min_length=5, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    content: Optional[str] = Field(None, max_length=50000)
    video_url: Optional[str] = None
    file_url: Optional[str] = None
    duration: int = Field(0, ge=0)
    order: int = Field(..., ge=1)
    lesson_type: LessonTypeEnum = LessonTypeEnum.TEXT
    is_preview: bool = False


class LessonCreate(LessonBase):
    course_id: int


class LessonUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=5, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    content: Optional[str] = Field(None, max_length=50000)
    video_url: Optional[str] = None
    file_url: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    order: Optional[int] = Field(None, ge=1)
    lesson_type: Optional[LessonTypeEnum] = None
    is_preview: Optional[bool] = None


class LessonSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    duration: int
    order: int
    lesson_type: LessonTypeEnum
    is_preview: bool


class Lesson(LessonBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    course_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
