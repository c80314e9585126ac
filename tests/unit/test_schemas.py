import pytest
from pydantic import ValidationError

from app.core.constants import RoleEnum
from app.schemas.enrollment import EnrollmentProgressUpdate
from app.schemas.lesson_progress import LessonProgressUpdate
from app.schemas.review import ReviewCreate
from app.schemas.user import UserCreate, UserUpdate


def test_lesson_progress_update_is_partial():
    update = LessonProgressUpdate(watch_time=120)
    assert update.model_dump(exclude_unset=True) == {"watch_time": 120}


def test_lesson_progress_rejects_negative_watch_time():
    with pytest.raises(ValidationError):
        LessonProgressUpdate(watch_time=-1)


@pytest.mark.parametrize("progress", [-5, 150])
def test_manual_progress_accepts_out_of_range_values(progress):
    assert EnrollmentProgressUpdate(progress=progress).progress == progress


def test_manual_progress_requires_a_number():
    with pytest.raises(ValidationError):
        EnrollmentProgressUpdate(progress="lots")


@pytest.mark.parametrize("rating", [0, 6])
def test_review_rating_bounds(rating):
    with pytest.raises(ValidationError):
        ReviewCreate(course_id=1, rating=rating)


def test_review_comment_is_trimmed_and_limited():
    assert ReviewCreate(course_id=1, rating=5, comment="  great  ").comment == "great"
    with pytest.raises(ValidationError):
        ReviewCreate(course_id=1, rating=5, comment="x" * 1001)


def test_registration_cannot_request_admin_role():
    with pytest.raises(ValidationError):
        UserCreate(name="Mallory", email="m@test.com", password="longenough", role=RoleEnum.ADMIN)


def test_registration_defaults_to_student():
    user = UserCreate(name="  Alan  ", email="alan@test.com", password="longenough")
    assert user.role == RoleEnum.STUDENT
    assert user.name == "Alan"


def test_profile_update_requires_a_field():
    with pytest.raises(ValidationError):
        UserUpdate()
