"""
gradebook/schemas/course.py
Course metadata as seen by the reports
"""
from pydantic import BaseModel, Field


class CourseSummary(BaseModel):
    """Read-only course metadata returned by the course catalog."""
    id: int = Field(..., gt=0)
    code: str = Field("N/A", description="Course code, 'N/A' when unset")
    name: str = Field("Untitled Course", description="Course name, 'Untitled Course' when unset")
    credits: int = Field(..., gt=0, description="Credit weight used for GPA")
