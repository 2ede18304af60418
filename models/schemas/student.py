from marshmallow import Schema, fields, validate

from models.student import StudentStatus
from models.schemas.common import RecordSchema, non_blank


class StudentSchema(RecordSchema):
    student_code = fields.String(required=True, data_key="studentCode", validate=[non_blank, validate.Length(max=20)])
    first_name = fields.String(required=True, data_key="firstName", validate=[non_blank, validate.Length(max=100)])
    last_name = fields.String(required=True, data_key="lastName", validate=[non_blank, validate.Length(max=100)])
    email = fields.Email(required=True, validate=validate.Length(max=255))
    phone = fields.String(allow_none=True, validate=validate.Length(max=20))
    date_of_birth = fields.Date(allow_none=True, data_key="dateOfBirth")
    address = fields.String(allow_none=True)
    enrollment_date = fields.Date(data_key="enrollmentDate")
    status = fields.Enum(StudentStatus, by_value=True, load_default=StudentStatus.ACTIVE)
    emergency_contact = fields.String(allow_none=True, data_key="emergencyContact", validate=validate.Length(max=100))
    emergency_phone = fields.String(allow_none=True, data_key="emergencyPhone", validate=validate.Length(max=20))
    image = fields.String(allow_none=True, validate=validate.Length(max=500))

    # Resolved by name: the enrollment schema imports this module
    enrollments = fields.List(
        fields.Nested("EnrollmentSchema", exclude=("student",)),
        dump_only=True,
    )


class StudentSummarySchema(Schema):
    """The subset of a student embedded in enrollment listings."""

    class Meta:
        ordered = True

    id = fields.Integer()
    student_code = fields.String(data_key="studentCode")
    first_name = fields.String(data_key="firstName")
    last_name = fields.String(data_key="lastName")
    email = fields.String()
