from datetime import date
from enum import Enum

from sqlalchemy import Column, Date, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    GRADUATED = "graduated"
    SUSPENDED = "suspended"


class Student(BaseModel, Base):
    __tablename__ = "students"

    student_code = Column(String(20), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(20), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    address = Column(Text, nullable=True)
    enrollment_date = Column(Date, nullable=False, default=date.today)
    status = Column(
        SAEnum(
            StudentStatus,
            name="student_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=StudentStatus.ACTIVE,
    )
    emergency_contact = Column(String(100), nullable=True)
    emergency_phone = Column(String(20), nullable=True)
    image = Column(String(500), nullable=True)

    # RESTRICT: never null out or cascade enrollments from the ORM side
    enrollments = relationship(
        "Enrollment",
        back_populates="student",
        passive_deletes="all",
        order_by="Enrollment.id",
    )
