"""
gradebook/orm/assessment.py
Assessment - a gradable quiz or practice (coding) exercise belonging to one course

AssessmentKind is a tagged variant: each kind carries the weight it contributes
to a course total, so aggregation code iterates kinds instead of branching on them.
"""
from enum import Enum

from sqlalchemy import Column, Integer, String, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship

from gradebook.orm.base import BaseModel


class AssessmentKind(str, Enum):
    """
    Kinds of assessment and their grading weights.

    - QUIZ: multiple-choice quiz, weight 0.4
    - PRACTICE: practice coding exercise, weight 0.6
    """
    QUIZ = "quiz"
    PRACTICE = "practice"

    @property
    def weight(self) -> float:
        return _KIND_WEIGHTS[self]


_KIND_WEIGHTS = {
    AssessmentKind.QUIZ: 0.4,
    AssessmentKind.PRACTICE: 0.6,
}


class Assessment(BaseModel):
    """A quiz or practice exercise."""
    __tablename__ = "assessments"

    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    kind = Column(SQLEnum(AssessmentKind), nullable=False, index=True)
    title = Column(String(200), nullable=True)

    course = relationship("Course", back_populates="assessments")
    submissions = relationship(
        "Submission",
        back_populates="assessment",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_assessment_course_kind", "course_id", "kind"),
    )

    def __repr__(self):
        return f"<Assessment(id={self.id}, course_id={self.course_id}, kind={self.kind})>"
