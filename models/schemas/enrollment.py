from marshmallow import fields, validate

from models.enrollment import EnrollmentStatus
from models.schemas.common import Amount, RecordSchema, WholeNumber, non_blank
from models.schemas.student import StudentSchema, StudentSummarySchema


class EnrollmentSchema(RecordSchema):
    student_id = WholeNumber(required=True, data_key="studentId", validate=validate.Range(min=1))
    course = fields.String(required=True, validate=[non_blank, validate.Length(max=255)])
    course_code = fields.String(allow_none=True, data_key="courseCode", validate=validate.Length(max=50))
    semester = fields.String(required=True, validate=[non_blank, validate.Length(max=20)])
    academic_year = fields.String(required=True, data_key="academicYear", validate=[non_blank, validate.Length(max=10)])
    enrollment_date = fields.Date(data_key="enrollmentDate")
    status = fields.Enum(EnrollmentStatus, by_value=True, load_default=EnrollmentStatus.ENROLLED)
    grade = Amount(allow_none=True, validate=validate.Range(min=0, max=100))
    credits = WholeNumber(allow_none=True, validate=validate.Range(min=1))
    notes = fields.String(allow_none=True)

    student = fields.Nested(StudentSummarySchema, dump_only=True)


class EnrollmentDetailSchema(EnrollmentSchema):
    """Single-enrollment view: embeds the whole student record."""

    student = fields.Nested(StudentSchema, exclude=("enrollments",), dump_only=True)
