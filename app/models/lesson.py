from sqlalchemy import Boolean, Column, Integer, String, Text, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import LessonTypeEnum

class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    video_url = Column(String, nullable=True)
    file_url = Column(String, nullable=True)
    lesson_type = Column(Enum(LessonTypeEnum), nullable=False, default=LessonTypeEnum.TEXT)
    duration = Column(Integer, nullable=False, default=0)  # Duration in minutes
    order = Column(Integer, nullable=False)
    is_preview = Column(Boolean, nullable=False, default=False)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('course_id', 'order', name='unique_course_lesson_order'),
    )

    course = relationship("Course", back_populates="lessons")
    progress_records = relationship("LessonProgress", back_populates="lesson", cascade="all, delete-orphan")
