from .base import Base

from .course import Course
from .enrollment import Enrollment, EnrollmentStatus
from .assessment import Assessment, AssessmentKind
from .submission import Submission

__all__ = [
    "Base",
    "Course",
    "Enrollment",
    "EnrollmentStatus",
    "Assessment",
    "AssessmentKind",
    "Submission",
]
