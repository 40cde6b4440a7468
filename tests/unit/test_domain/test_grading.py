"""Tests for grade rules."""

import pytest


@pytest.mark.parametrize(
    "percentage,grade",
    [
        (100, "A+"),
        (90, "A+"),
        (89.9, "A"),
        (75, "A"),
        (65, "B"),
        (55, "C"),
        (45, "D"),
        (40, "E"),
        (39.9, "F"),
        (0, "F"),
    ],
)
def test_calculate_grade_boundaries(percentage, grade):
    from schoolsync.domain.grading import calculate_grade

    assert calculate_grade(percentage) == grade


def test_calculate_total():
    from schoolsync.domain.grading import calculate_total

    score = calculate_total(8, 9, 7, 60)

    assert score.total == 84
    assert score.percentage == 84
    assert score.grade == "A"


def test_calculate_total_missing_scores_count_as_zero():
    from schoolsync.domain.grading import calculate_total

    score = calculate_total(None, 5, None, 40)

    assert score.total == 45
    assert score.grade == "D"


def test_calculate_total_all_empty():
    from schoolsync.domain.grading import calculate_total

    score = calculate_total(None, None, None, None)

    assert score.total == 0
    assert score.percentage == 0
    assert score.grade == "F"


def test_overall_grade_averages_percentages():
    from schoolsync.domain.grading import calculate_overall_grade

    subjects = [{"percentage": 80}, {"percentage": 71}, {"percentage": 60.5}]

    percentage, grade = calculate_overall_grade(subjects)

    assert percentage == 70.5
    assert grade == "B"


def test_overall_grade_non_numeric_counts_as_zero():
    from schoolsync.domain.grading import calculate_overall_grade

    percentage, grade = calculate_overall_grade([{"percentage": "90"}, {"percentage": None}])

    assert percentage == 45.0
    assert grade == "D"


def test_overall_grade_no_subjects():
    from schoolsync.domain.grading import calculate_overall_grade

    assert calculate_overall_grade([]) == (0, "F")
    assert calculate_overall_grade(None) == (0, "F")
