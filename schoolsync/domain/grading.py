"""Grade and percentage rules used by the result views."""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

# Continuous assessment 10 + 10 + 10, exam 70
FULL_MARKS = 100

GRADE_BOUNDARIES = (
    (90, "A+"),
    (75, "A"),
    (65, "B"),
    (55, "C"),
    (45, "D"),
    (40, "E"),
)


@dataclass(frozen=True)
class SubjectScore:
    total: float
    percentage: float
    grade: str


def calculate_grade(percentage: float) -> str:
    for boundary, grade in GRADE_BOUNDARIES:
        if percentage >= boundary:
            return grade
    return "F"


def calculate_total(
    first_test: Optional[float],
    second_test: Optional[float],
    third_test: Optional[float],
    exam: Optional[float],
) -> SubjectScore:
    total = (first_test or 0) + (second_test or 0) + (third_test or 0) + (exam or 0)
    percentage = (total / FULL_MARKS) * 100 if total > 0 else 0
    return SubjectScore(total=total, percentage=percentage, grade=calculate_grade(percentage))


def _as_number(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def calculate_overall_grade(subjects: Optional[Iterable[dict]]) -> Tuple[float, str]:
    """Average the subject percentages of a result.

    Returns:
        (percentage rounded to one decimal, grade); (0, "F") with no subjects
    """
    subjects = list(subjects or [])
    if not subjects:
        return 0, "F"

    total = sum(_as_number(subject.get("percentage")) for subject in subjects)
    overall = total / len(subjects)
    return round(overall, 1), calculate_grade(overall)
