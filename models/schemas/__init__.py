from models.schemas.common import Parsed, parse
from models.schemas.product import ProductSchema
from models.schemas.book import BookSchema
from models.schemas.customer import CustomerSchema
from models.schemas.student import StudentSchema, StudentSummarySchema
from models.schemas.enrollment import EnrollmentSchema, EnrollmentDetailSchema

__all__ = [
    "Parsed",
    "parse",
    "ProductSchema",
    "BookSchema",
    "CustomerSchema",
    "StudentSchema",
    "StudentSummarySchema",
    "EnrollmentSchema",
    "EnrollmentDetailSchema",
]
