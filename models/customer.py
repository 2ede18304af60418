from enum import Enum

from sqlalchemy import Column, Date, String, Text
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base


class CustomerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BLOCKED = "blocked"


class Customer(BaseModel, Base):
    __tablename__ = "customers"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    status = Column(
        SAEnum(
            CustomerStatus,
            name="customer_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=CustomerStatus.ACTIVE,
    )
    image = Column(String(500), nullable=True)
