from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Float, Text, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import CourseLevelEnum, CourseStatusEnum

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    thumbnail = Column(String, nullable=True)
    category = Column(String, index=True, nullable=True)
    level = Column(Enum(CourseLevelEnum, values_callable=lambda levels: [level.value for level in levels]), nullable=False, default=CourseLevelEnum.BEGINNER)
    price = Column(Float, nullable=False, default=0.0)
    status = Column(Enum(CourseStatusEnum), nullable=False, default=CourseStatusEnum.DRAFT)
    is_published = Column(Boolean, nullable=False, default=False)
    rejection_reason = Column(Text, nullable=True)
    instructor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    instructor = relationship("User", back_populates="courses")
    lessons = relationship("Lesson", back_populates="course", cascade="all, delete-orphan", order_by="Lesson.order")
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="course", cascade="all, delete-orphan")
    certificates = relationship("Certificate", back_populates="course", cascade="all, delete-orphan")

    @property
    def is_open_for_enrollment(self) -> bool:
        return self.status == CourseStatusEnum.PUBLISHED and bool(self.is_published)

    @property
    def lesson_count(self) -> int:
        return len(self.lessons)
