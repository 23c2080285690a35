"""
gradebook/orm/submission.py

Submission - one graded attempt at an assessment

Key Design Decisions:
- Multiple attempts per (learner, assessment); no unique constraint
- Immutable once created (no updates, no soft deletes)
- percentage is always within [0, 100]
- "passed" is the assessment's own pass bar, recorded at grading time
"""
from sqlalchemy import (
    Column, Integer, Float, Boolean, DateTime, ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship

from gradebook.orm.base import BaseModel, utcnow_naive


class Submission(BaseModel):
    """
    Records individual graded attempts.

    Fields:
    - learner_id: Who made the attempt
    - assessment_id: Which quiz/practice (FK)
    - percentage: Score as a percentage, 0-100
    - passed: Whether this attempt met the assessment's pass bar
    - attempt_number: 1st attempt, 2nd attempt, etc.
    - submitted_at: When the attempt was submitted
    """
    __tablename__ = "submissions"

    learner_id = Column(Integer, nullable=False, index=True)
    assessment_id = Column(
        Integer,
        ForeignKey("assessments.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    percentage = Column(Float, nullable=False, default=0.0)
    passed = Column(Boolean, nullable=False, default=False)
    attempt_number = Column(Integer, nullable=False, default=1)
    submitted_at = Column(DateTime, nullable=False, default=utcnow_naive, index=True)

    assessment = relationship("Assessment", back_populates="submissions")

    __table_args__ = (
        CheckConstraint("percentage >= 0 AND percentage <= 100", name="percentage_range"),
        # Best-attempt lookups
        Index("ix_submission_assessment_learner", "assessment_id", "learner_id"),
        # Streak lookups
        Index("ix_submission_learner_recent", "learner_id", "submitted_at"),
    )

    def __repr__(self):
        return (
            f"<Submission(id={self.id}, learner_id={self.learner_id}, "
            f"assessment_id={self.assessment_id}, percentage={self.percentage})>"
        )
