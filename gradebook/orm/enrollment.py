"""
gradebook/orm/enrollment.py
Enrollment - a learner's request to join a course

Only APPROVED enrollments are visible to grading and progress.
"""
from enum import Enum

from sqlalchemy import Column, Integer, ForeignKey, Index, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from gradebook.orm.base import BaseModel, UpdatableMixin


class EnrollmentStatus(str, Enum):
    """Lifecycle of an enrollment request"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Enrollment(UpdatableMixin, BaseModel):
    """
    Links a learner to a course.

    learner_id is owned by the identity service; there is no users table here.
    """
    __tablename__ = "enrollments"

    learner_id = Column(Integer, nullable=False, index=True)
    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    status = Column(
        SQLEnum(EnrollmentStatus),
        nullable=False,
        default=EnrollmentStatus.PENDING,
        index=True
    )

    course = relationship("Course", back_populates="enrollments")

    __table_args__ = (
        UniqueConstraint("learner_id", "course_id", name="uq_enrollment_learner_course"),
        Index("ix_enrollment_learner_status", "learner_id", "status"),
    )

    def __repr__(self):
        return (
            f"<Enrollment(learner_id={self.learner_id}, course_id={self.course_id}, "
            f"status={self.status})>"
        )
