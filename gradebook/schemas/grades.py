"""
gradebook/schemas/grades.py
Grade report schemas (derived, never persisted)
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseGrade(BaseModel):
    """One row of the learner's transcript."""
    course_id: int
    code: str
    name: str
    credits: int = Field(..., gt=0)
    quiz_score: Optional[float] = Field(None, ge=0, le=10, description="0-10, None when no quiz was attempted")
    practice_score: Optional[float] = Field(None, ge=0, le=10, description="0-10, None when no practice was attempted")
    total: Optional[float] = Field(None, ge=0, le=10, description="Weighted 0-10 total, None when the course has no assessments")
    letter_grade: str = Field("-", description="A+..F, '-' when total is None")


class GradeSummary(BaseModel):
    """
    Credit-weighted grade summary for one learner.

    Returned by GradeReportService.get_user_grades
    """
    learner_id: int
    total_credits: int = Field(0, ge=0)
    earned_credits: int = Field(0, ge=0)
    gpa: float = Field(0.0, ge=0, le=4.0)
    courses: List[CourseGrade] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "learner_id": 42,
            "total_credits": 3,
            "earned_credits": 3,
            "gpa": 3.0,
            "courses": [
                {
                    "course_id": 7,
                    "code": "CS101",
                    "name": "Intro to Programming",
                    "credits": 3,
                    "quiz_score": 9.0,
                    "practice_score": 7.0,
                    "total": 7.8,
                    "letter_grade": "B"
                }
            ]
        }
    })
