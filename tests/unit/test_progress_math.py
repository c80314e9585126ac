import pytest

from app.services.course_progress import calculate_progress, round_half_up


@pytest.mark.parametrize(
    "completed,total,expected",
    [
        (0, 4, 0.0),
        (1, 4, 25.0),
        (3, 4, 75.0),
        (4, 4, 100.0),
        (1, 3, 33.3),
        (2, 3, 66.7),
        (1, 6, 16.7),
        (1, 8, 12.5),
        (1, 16, 6.3),
        (5, 16, 31.3),
        (1999, 2000, 99.9),
        (9999, 10000, 99.9),
    ],
)
def test_progress_is_rounded_half_up_to_one_decimal(completed, total, expected):
    assert calculate_progress(completed, total) == expected


def test_course_without_lessons_has_zero_progress():
    assert calculate_progress(0, 0) == 0.0


def test_half_values_round_away_from_zero():
    # 0.25 rounds to 0.2 with banker's rounding
    assert round(0.25, 1) == 0.2
    assert round_half_up(0.25) == 0.3
    assert round_half_up(62.45) == 62.5


def test_progress_only_reaches_100_when_every_lesson_is_done():
    assert calculate_progress(1999, 2000) < 100.0
    assert calculate_progress(2000, 2000) == 100.0
