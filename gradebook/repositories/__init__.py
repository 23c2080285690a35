from gradebook.repositories.interfaces import (
    AssessmentCatalog,
    CourseCatalog,
    EnrollmentProvider,
    SubmissionStore,
)
from gradebook.repositories.sql import (
    SqlAssessmentCatalog,
    SqlCourseCatalog,
    SqlEnrollmentProvider,
    SqlSubmissionStore,
)

__all__ = [
    "AssessmentCatalog",
    "CourseCatalog",
    "EnrollmentProvider",
    "SubmissionStore",
    "SqlAssessmentCatalog",
    "SqlCourseCatalog",
    "SqlEnrollmentProvider",
    "SqlSubmissionStore",
]
