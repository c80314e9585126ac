from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional
from datetime import datetime

from app.schemas.user import UserSummary


class ReviewBase(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)

    @field_validator("comment")
    def strip_comment(cls, v):
        if v is None:
            return v
        v = v.strip()
        return v or None


class ReviewCreate(ReviewBase):
    course_id: int


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


class Review(ReviewBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    user: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RatingBucket(BaseModel):
    count: int
    percentage: float


class ReviewStats(BaseModel):
    average_rating: float
    total_reviews: int
    rating_distribution: Dict[int, RatingBucket]


class CourseReviews(BaseModel):
    reviews: List[Review]
    stats: ReviewStats
    total: int
    page: int
    size: int
    pages: int
