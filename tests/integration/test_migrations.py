import os

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _alembic_config(db_url: str) -> Config:
    config = Config(os.path.join(ROOT, "alembic.ini"))
    config.set_main_option("script_location", os.path.join(ROOT, "migrations"))
    config.set_main_option("sqlalchemy.url", db_url)
    return config


def test_upgrade_and_downgrade(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'migrations.db'}"
    config = _alembic_config(db_url)

    command.upgrade(config, "head")

    engine = create_engine(db_url)
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())
    assert {"users", "courses", "lessons", "enrollments", "lesson_progress", "certificates", "reviews"} <= tables

    unique_names = {
        constraint["name"]
        for table in ("lessons", "enrollments", "lesson_progress", "certificates", "reviews")
        for constraint in inspector.get_unique_constraints(table)
    }
    assert {
        "unique_course_lesson_order",
        "unique_user_course_enrollment",
        "unique_user_lesson_progress",
        "unique_user_course_certificate",
        "unique_user_course_review",
    } <= unique_names
    engine.dispose()

    command.downgrade(config, "base")

    engine = create_engine(db_url)
    assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    engine.dispose()
