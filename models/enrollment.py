from datetime import date
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base


class EnrollmentStatus(str, Enum):
    ENROLLED = "enrolled"
    COMPLETED = "completed"
    DROPPED = "dropped"
    FAILED = "failed"
    IN_PROGRESS = "in-progress"


class Enrollment(BaseModel, Base):
    __tablename__ = "enrollments"

    # Student: RESTRICT deletion while enrollments reference it
    student_id = Column(Integer, ForeignKey("students.id", ondelete="RESTRICT"), nullable=False, index=True)
    course = Column(String(255), nullable=False)
    course_code = Column(String(50), nullable=True)
    semester = Column(String(20), nullable=False)
    academic_year = Column(String(10), nullable=False)
    enrollment_date = Column(Date, nullable=False, default=date.today)
    status = Column(
        SAEnum(
            EnrollmentStatus,
            name="enrollment_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=EnrollmentStatus.ENROLLED,
    )
    grade = Column(Numeric(5, 2), nullable=True)
    credits = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    student = relationship("Student", back_populates="enrollments")

    __table_args__ = (
        UniqueConstraint(
            "student_id", "course", "semester", "academic_year",
            name="uq_enrollments_student_course_term",
        ),
        CheckConstraint("(grade IS NULL) OR (grade BETWEEN 0 AND 100)", name="ck_enrollments_grade_range"),
        CheckConstraint("(credits IS NULL) OR (credits >= 1)", name="ck_enrollments_credits_positive"),
    )
