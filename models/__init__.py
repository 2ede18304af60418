"""Persistence layer: declarative models and the storage adapter."""
from models.base_model import Base
from models.product import Product
from models.book import Book
from models.customer import Customer
from models.student import Student
from models.enrollment import Enrollment
from models.db_storage import (
    DBStorage,
    RecordStore,
    ConstraintViolation,
    UniqueConstraintViolation,
    ReferenceViolation,
)

__all__ = [
    "Base",
    "Product",
    "Book",
    "Customer",
    "Student",
    "Enrollment",
    "DBStorage",
    "RecordStore",
    "ConstraintViolation",
    "UniqueConstraintViolation",
    "ReferenceViolation",
]
