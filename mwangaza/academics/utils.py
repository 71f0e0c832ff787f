"""
Academics - Utility Functions

Grading scale and subject catalogue.
"""

import math
from typing import Iterable, List, Optional

from mwangaza.academics.schemas import Subject


# (minimum score, grade), highest first
GRADE_THRESHOLDS = [
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]
FAILING_GRADE = "F"

SUBJECTS: List[Subject] = [
    Subject(id="s1", name="Mathematics", description="Basic numeracy and mathematical concepts"),
    Subject(id="s2", name="English", description="Language skills and literacy"),
    Subject(id="s3", name="Science", description="Basic scientific concepts and experiments"),
    Subject(id="s4", name="Social Studies", description="History, geography and civic education"),
    Subject(id="s5", name="Life Skills", description="Practical skills for everyday living"),
]


def calculate_grade(score: int) -> str:
    """Letter grade for a 0-100 score"""
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValueError(f"Score must be an integer, got {score!r}")
    if score < 0 or score > 100:
        raise ValueError(f"Score must be between 0 and 100, got {score}")
    for minimum, grade in GRADE_THRESHOLDS:
        if score >= minimum:
            return grade
    return FAILING_GRADE


def get_subject(subject_id: str) -> Optional[Subject]:
    for subject in SUBJECTS:
        if subject.id == subject_id:
            return subject
    return None


def average_score(scores: Iterable[int]) -> Optional[int]:
    """Mean score rounded half up, None when there are no scores"""
    scores = list(scores)
    if not scores:
        return None
    return math.floor(sum(scores) / len(scores) + 0.5)
