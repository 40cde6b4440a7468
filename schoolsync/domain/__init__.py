"""Domain rules independent of transport and storage."""

from .grading import SubjectScore, calculate_grade, calculate_overall_grade, calculate_total
from .records import identity_key, normalize_student, student_payload
from .snapshot import Snapshot

__all__ = [
    "Snapshot",
    "SubjectScore",
    "calculate_grade",
    "calculate_overall_grade",
    "calculate_total",
    "identity_key",
    "normalize_student",
    "student_payload",
]
