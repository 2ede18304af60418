from __future__ import annotations

from flask import Blueprint, jsonify

from api.errors import Conflict, NotFound
from api.resource import Resource, get_resource, read_payload
from models.db_storage import UniqueConstraintViolation
from models.enrollment import Enrollment
from models.student import Student
from models.schemas.enrollment import EnrollmentDetailSchema, EnrollmentSchema

bp = Blueprint("enrollments", __name__)

TERM_FIELDS = ("student_id", "course", "semester", "academic_year")
ALREADY_ENROLLED = "Student is already enrolled in this course for this semester"


class EnrollmentResource(Resource):
    model = Enrollment
    schema = EnrollmentSchema()
    detail_schema = EnrollmentDetailSchema()
    label = "enrollment"
    list_include = ("student",)
    detail_include = ("student",)

    def __init__(self, storage, uploads=None):
        super().__init__(storage, uploads)
        self.students = storage.records(Student)

    def list_for_student(self, student_id: int) -> list:
        self._require_student(student_id)
        rows = self.records.find_where(student_id=student_id, include=self.list_include)
        return self.schema.dump(rows, many=True)

    def before_create(self, values: dict) -> None:
        self._require_student(values["student_id"])
        self._check_term(values)

    def before_update(self, record, values: dict) -> None:
        if "student_id" in values and values["student_id"] != record.student_id:
            self._require_student(values["student_id"])
        if any(field in values for field in TERM_FIELDS):
            merged = {field: values.get(field, getattr(record, field)) for field in TERM_FIELDS}
            self._check_term(merged, exclude=record)

    def describe_conflict(self, err) -> str:
        if isinstance(err, UniqueConstraintViolation) and "course" in err.fields:
            return ALREADY_ENROLLED
        return super().describe_conflict(err)

    def _require_student(self, student_id: int) -> None:
        if self.students.find_by_key(student_id) is None:
            raise NotFound("Student not found")

    def _check_term(self, values: dict, exclude=None) -> None:
        rows = self.records.find_where(**{field: values[field] for field in TERM_FIELDS})
        if any(exclude is None or row.id != exclude.id for row in rows):
            raise Conflict(ALREADY_ENROLLED)


@bp.get("/enrollments")
def list_enrollments():
    """
    List all enrollments with a summary of each student, newest first
    ---
    tags: [Enrollments]
    responses:
      200:
        description: List of enrollments
        schema:
          type: array
          items: { $ref: "#/definitions/Enrollment" }
    """
    return jsonify(get_resource("enrollments").list())


@bp.get("/enrollments/<int:enrollment_id>")
def get_enrollment(enrollment_id: int):
    """
    Get an enrollment by id, with the full student record
    ---
    tags: [Enrollments]
    parameters:
      - { in: path, name: enrollment_id, type: integer, required: true }
    responses:
      200:
        description: Enrollment found
        schema: { $ref: "#/definitions/Enrollment" }
      404: { description: Enrollment not found }
    """
    return jsonify(get_resource("enrollments").get(enrollment_id))


@bp.get("/enrollments/student/<int:student_id>")
def list_student_enrollments(student_id: int):
    """
    List one student's enrollments, newest first
    ---
    tags: [Enrollments]
    parameters:
      - { in: path, name: student_id, type: integer, required: true }
    responses:
      200:
        description: The student's enrollments
        schema:
          type: array
          items: { $ref: "#/definitions/Enrollment" }
      404: { description: Student not found }
    """
    return jsonify(get_resource("enrollments").list_for_student(student_id))


@bp.post("/enrollments")
def create_enrollment():
    """
    Enroll a student in a course
    ---
    tags: [Enrollments]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema: { $ref: "#/definitions/EnrollmentInput" }
    responses:
      201:
        description: Created
        schema: { $ref: "#/definitions/Enrollment" }
      400: { description: Validation error }
      404: { description: Student not found }
      409: { description: Student already enrolled in this course for this semester }
    """
    return jsonify(get_resource("enrollments").create(read_payload())), 201


@bp.put("/enrollments/<int:enrollment_id>")
def update_enrollment(enrollment_id: int):
    """
    Update an enrollment (partial)
    ---
    tags: [Enrollments]
    consumes:
      - application/json
    parameters:
      - { in: path, name: enrollment_id, type: integer, required: true }
      - in: body
        name: body
        required: true
        schema: { $ref: "#/definitions/EnrollmentInput" }
    responses:
      200:
        description: Updated
        schema: { $ref: "#/definitions/Enrollment" }
      400: { description: Validation error }
      404: { description: Enrollment or student not found }
      409: { description: Student already enrolled in this course for this semester }
    """
    return jsonify(get_resource("enrollments").update(enrollment_id, read_payload()))


@bp.delete("/enrollments/<int:enrollment_id>")
def delete_enrollment(enrollment_id: int):
    """
    Delete an enrollment
    ---
    tags: [Enrollments]
    parameters:
      - { in: path, name: enrollment_id, type: integer, required: true }
    responses:
      204: { description: Deleted }
      404: { description: Enrollment not found }
    """
    get_resource("enrollments").delete(enrollment_id)
    return ("", 204)
