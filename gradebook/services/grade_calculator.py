"""
gradebook/services/grade_calculator.py
Letter grades and GPA

Breakpoints (0-10 scale, first match wins, descending):

    score   letter   gpa
    >= 9.0  A+       4.0
    >= 8.5  A        3.7
    >= 8.0  B+       3.5
    >= 7.0  B        3.0
    >= 6.5  C+       2.5
    >= 5.5  C        2.0
    >= 5.0  D+       1.5
    >= 4.0  D        1.0
    else    F        0.0

A course earns its credits when total >= 5.0.

GPA is credit weighted: every approved course adds its credits to the
denominator, but only courses with a known total add total * credits to the
numerator. Ungraded courses therefore pull GPA down; this mirrors the
established behaviour and is kept until product decides otherwise.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from gradebook.utils.rounding import round_half_up

NO_GRADE = "-"
PASS_THRESHOLD = 5.0

GRADE_TABLE: List[Tuple[float, str, float]] = [
    (9.0, "A+", 4.0),
    (8.5, "A", 3.7),
    (8.0, "B+", 3.5),
    (7.0, "B", 3.0),
    (6.5, "C+", 2.5),
    (5.5, "C", 2.0),
    (5.0, "D+", 1.5),
    (4.0, "D", 1.0),
]
FAILING_LETTER = "F"
FAILING_GPA = 0.0


class GradeCalculator:

    @staticmethod
    def letter_grade(score: Optional[float]) -> str:
        if score is None:
            return NO_GRADE
        for threshold, letter, _ in GRADE_TABLE:
            if score >= threshold:
                return letter
        return FAILING_LETTER

    @staticmethod
    def gpa_from_score(score: float) -> float:
        for threshold, _, gpa in GRADE_TABLE:
            if score >= threshold:
                return gpa
        return FAILING_GPA

    @staticmethod
    def is_credit_earned(total: Optional[float]) -> bool:
        return total is not None and total >= PASS_THRESHOLD


@dataclass
class GpaAccumulator:
    """Running credit/GPA totals across a learner's courses."""
    total_credits: int = 0
    earned_credits: int = 0
    weighted_score_sum: float = 0.0
    graded_courses: int = 0

    def add(self, credits: int, total: Optional[float]) -> None:
        self.total_credits += credits
        if total is not None:
            self.weighted_score_sum += total * credits
            self.graded_courses += 1
        if GradeCalculator.is_credit_earned(total):
            self.earned_credits += credits

    @property
    def gpa(self) -> float:
        if self.total_credits <= 0:
            return 0.0
        average = self.weighted_score_sum / self.total_credits
        return round_half_up(GradeCalculator.gpa_from_score(average) * 100) / 100
