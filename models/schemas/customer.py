from marshmallow import fields, validate

from models.customer import CustomerStatus
from models.schemas.common import RecordSchema, non_blank


class CustomerSchema(RecordSchema):
    first_name = fields.String(required=True, data_key="firstName", validate=[non_blank, validate.Length(max=100)])
    last_name = fields.String(required=True, data_key="lastName", validate=[non_blank, validate.Length(max=100)])
    email = fields.Email(required=True, validate=validate.Length(max=255))
    phone = fields.String(allow_none=True, validate=validate.Length(max=20))
    address = fields.String(allow_none=True)
    city = fields.String(allow_none=True, validate=validate.Length(max=100))
    country = fields.String(allow_none=True, validate=validate.Length(max=100))
    postal_code = fields.String(allow_none=True, data_key="postalCode", validate=validate.Length(max=20))
    date_of_birth = fields.Date(allow_none=True, data_key="dateOfBirth")
    status = fields.Enum(CustomerStatus, by_value=True, load_default=CustomerStatus.ACTIVE)
    image = fields.String(allow_none=True, validate=validate.Length(max=500))
