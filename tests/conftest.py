import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import uuid
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.constants import CourseLevelEnum, CourseStatusEnum, LessonTypeEnum, RoleEnum
from app.core.database import Base, get_db
from app.core.security import create_access_token, get_password_hash
from app.crud.user import user as crud_user
from app.models.course import Course
from app.models.lesson import Lesson
from app.schemas.user import UserContext
from app.services.certificate import CertificateRenderer, certificate_service
from app.utils import deps as deps_utils
import main

test_db_url = settings.TEST_DATABASE_URL or "sqlite:///./test.db"

TEST_PASSWORD = "testpass123"
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)

@pytest.fixture(scope="session")
def database_engine():
    if test_db_url.startswith("sqlite"):
        engine = create_engine(test_db_url, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(test_db_url)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()
    if test_db_url == "sqlite:///./test.db" and os.path.exists("./test.db"):
        os.remove("./test.db")

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture(scope="function")
def client(db_session):
    main.app.dependency_overrides[get_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_transactional_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

@pytest.fixture(autouse=True)
def rendered_certificates(tmp_path, monkeypatch):
    """Replace PDF output with a stub so tests do not need the native PDF stack."""
    rendered = []

    def _write_pdf(self, html_string, path):
        rendered.append({"path": path, "html": html_string})
        with open(path, "wb") as f:
            f.write(b"%PDF-1.4 test certificate")

    monkeypatch.setattr(CertificateRenderer, "write_pdf", _write_pdf)
    monkeypatch.setattr(certificate_service.renderer, "output_dir", str(tmp_path / "certificates"))
    return rendered


@pytest.fixture
def user_factory(db_session):
    def _user_factory(role: RoleEnum = RoleEnum.STUDENT, email: str = None, name: str = None, is_active: bool = True):
        user_data = {
            "name": name or f"Test {role.value.title()}",
            "email": email or f"{role.value.lower()}-{uuid.uuid4().hex[:10]}@test.com",
            "hashed_password": TEST_PASSWORD_HASH,
            "role": role,
            "is_active": is_active,
        }
        return crud_user.create(db_session, obj_in=user_data)
    return _user_factory

@pytest.fixture
def student(user_factory):
    return user_factory(RoleEnum.STUDENT, name="Ada Student")

@pytest.fixture
def instructor(user_factory):
    return user_factory(RoleEnum.INSTRUCTOR, name="Grace Instructor")

@pytest.fixture
def admin(user_factory):
    return user_factory(RoleEnum.ADMIN, name="Site Admin")

@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = create_access_token(data={"user_id": user.id, "role": user.role.value}, email=user.email)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers

@pytest.fixture
def context_for():
    def _context_for(user):
        return UserContext(user=user)
    return _context_for

@pytest.fixture
def course_factory(db_session):
    def _course_factory(instructor, lessons: int = 0, published: bool = True, **overrides):
        course_data = {
            "title": f"Course {uuid.uuid4().hex[:8]}",
            "description": "A practical course used by the test suite to exercise the learning flow.",
            "category": "Programming",
            "level": CourseLevelEnum.BEGINNER,
            "price": 49.99,
            "status": CourseStatusEnum.PUBLISHED if published else CourseStatusEnum.DRAFT,
            "is_published": published,
            "instructor_id": instructor.id,
        }
        course_data.update(overrides)
        course = Course(**course_data)
        db_session.add(course)
        db_session.flush()
        for order in range(1, lessons + 1):
            db_session.add(Lesson(
                title=f"Lesson number {order}",
                course_id=course.id,
                order=order,
                duration=10,
                lesson_type=LessonTypeEnum.VIDEO,
                is_preview=order == 1,
            ))
        db_session.flush()
        db_session.refresh(course)
        return course
    return _course_factory

@pytest.fixture
def lesson_ids(db_session):
    def _lesson_ids(course):
        return [
            lesson.id
            for lesson in db_session.query(Lesson).filter(Lesson.course_id == course.id).order_by(Lesson.order).all()
        ]
    return _lesson_ids
