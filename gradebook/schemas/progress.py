"""
gradebook/schemas/progress.py
Progress report schemas

Two counters are kept apart on purpose:
- completed: the learner submitted at least one attempt
- passed: at least one attempt met the assessment's pass bar
"""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


# ================= RESPONSE ENVELOPE =================

class StandardResponse(BaseModel):
    """
    Standardized response format for the HTTP surface.

    Structure:
    {
        "success": true/false,
        "message": "Human-readable message",
        "data": {...}  // Endpoint-specific data
    }
    """
    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")
    data: Dict[str, Any] = Field(..., description="Endpoint-specific response data")


# ================= PROGRESS REPORT =================

class CourseProgressDetail(BaseModel):
    """Per-course progress card."""
    course_id: int
    code: str
    name: str
    category: str = Field(..., description="Excellent | Good | Average")
    progress_percent: int = Field(..., ge=0, le=100)
    exercises_progress: str = Field(..., description="'completed/total'")
    study_time: str = Field(..., description="Estimated study time, 'Hh Mm'")
    current_score: float = Field(..., ge=0, le=10, description="Weighted score on the 0-10 display scale")


class ProgressReport(BaseModel):
    """
    Learner-wide progress report.

    Returned by ProgressReportService.get_user_progress_report
    """
    learner_id: int
    streak_days: int = Field(0, ge=0)
    exercises_completed: str = Field("0/0", description="'completed/total' across all courses")
    average_score: float = Field(0.0, ge=0, le=10)
    course_progress: List[CourseProgressDetail] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "learner_id": 42,
            "streak_days": 3,
            "exercises_completed": "3/3",
            "average_score": 7.8,
            "course_progress": [
                {
                    "course_id": 7,
                    "code": "CS101",
                    "name": "Intro to Programming",
                    "category": "Good",
                    "progress_percent": 100,
                    "exercises_progress": "3/3",
                    "study_time": "0h 30m",
                    "current_score": 7.8
                }
            ]
        }
    })


# ================= COURSE PROGRESS SUMMARY =================

class KindProgress(BaseModel):
    """Counts for one assessment kind within a course."""
    total: int = Field(0, ge=0)
    completed: int = Field(0, ge=0)
    passed: int = Field(0, ge=0)


class CourseProgressSummary(BaseModel):
    course_id: int
    learner_id: int
    total_exercises: int = Field(0, ge=0)
    completed_exercises: int = Field(0, ge=0)
    quiz_progress: KindProgress = Field(default_factory=KindProgress)
    practice_progress: KindProgress = Field(default_factory=KindProgress)
    progress_percent: int = Field(0, ge=0, le=100)


class OverallProgress(BaseModel):
    total_courses: int = Field(0, ge=0)
    total_exercises: int = Field(0, ge=0)
    completed_exercises: int = Field(0, ge=0)
    average_progress: int = Field(0, ge=0, le=100)
