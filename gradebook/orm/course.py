"""
gradebook/orm/course.py
Course metadata consumed by grade and progress reports
"""
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from gradebook.orm.base import BaseModel, UpdatableMixin


class Course(UpdatableMixin, BaseModel):
    """
    A course a learner can enroll in.

    Only the fields reports need are modelled here:
    - code: short course code ("CS101"), may be unset
    - name: display name, may be unset
    - credits: credit weight used for GPA; NULL means the catalog default applies
    """
    __tablename__ = "courses"

    code = Column(String(50), nullable=True, index=True)
    name = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    credits = Column(Integer, nullable=True)

    # Relationships
    assessments = relationship(
        "Assessment",
        back_populates="course",
        cascade="all, delete-orphan"
    )
    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Course(id={self.id}, code='{self.code}', credits={self.credits})>"
