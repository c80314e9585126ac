from enum import Enum


class RoleEnum(str, Enum):
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"
    ADMIN = "ADMIN"

class CourseStatusEnum(str, Enum):
    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"

class CourseLevelEnum(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

class LessonTypeEnum(str, Enum):
    VIDEO = "VIDEO"
    TEXT = "TEXT"
    PDF = "PDF"
    QUIZ = "QUIZ"

class EnrollmentStatusFilter(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"

class UserStatusFilter(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

class CoursePublishAction(str, Enum):
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"

PROGRESS_MIN = 0.0
PROGRESS_MAX = 100.0
# highest progress an enrollment can show while a lesson is still open
PROGRESS_UNFINISHED_MAX = 99.9
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 50
