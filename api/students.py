from __future__ import annotations

from flask import Blueprint, jsonify

from api.errors import Conflict
from api.resource import Resource, get_resource, read_image, read_payload
from models.enrollment import Enrollment
from models.student import Student
from models.schemas.student import StudentSchema

bp = Blueprint("students", __name__)


class StudentResource(Resource):
    model = Student
    schema = StudentSchema()
    label = "student"
    unique_fields = ("student_code", "email")
    upload_kind = "students"
    list_include = ("enrollments",)
    detail_include = ("enrollments",)

    def __init__(self, storage, uploads=None):
        super().__init__(storage, uploads)
        self.enrollments = storage.records(Enrollment)

    def before_delete(self, record) -> None:
        # RESTRICT: enrollments must be removed first
        if self.enrollments.find_where(student_id=record.id):
            raise Conflict("Cannot delete a student with existing enrollments")


@bp.get("/students")
def list_students():
    """
    List all students with their enrollments, newest first
    ---
    tags: [Students]
    responses:
      200:
        description: List of students
        schema:
          type: array
          items: { $ref: "#/definitions/Student" }
    """
    return jsonify(get_resource("students").list())


@bp.get("/students/<int:student_id>")
def get_student(student_id: int):
    """
    Get a student by id, with enrollments
    ---
    tags: [Students]
    parameters:
      - { in: path, name: student_id, type: integer, required: true }
    responses:
      200:
        description: Student found
        schema: { $ref: "#/definitions/Student" }
      404: { description: Student not found }
    """
    return jsonify(get_resource("students").get(student_id))


@bp.post("/students")
def create_student():
    """
    Create a student (JSON, or multipart form with an optional image)
    ---
    tags: [Students]
    consumes:
      - application/json
      - multipart/form-data
    parameters:
      - { in: formData, name: studentCode, type: string, required: true }
      - { in: formData, name: firstName, type: string, required: true }
      - { in: formData, name: lastName, type: string, required: true }
      - { in: formData, name: email, type: string, format: email, required: true }
      - { in: formData, name: phone, type: string }
      - { in: formData, name: dateOfBirth, type: string, format: date }
      - { in: formData, name: address, type: string }
      - { in: formData, name: enrollmentDate, type: string, format: date }
      - { in: formData, name: status, type: string, enum: [active, inactive, graduated, suspended] }
      - { in: formData, name: emergencyContact, type: string }
      - { in: formData, name: emergencyPhone, type: string }
      - { in: formData, name: image, type: file }
    responses:
      201:
        description: Created
        schema: { $ref: "#/definitions/Student" }
      400: { description: Validation error or rejected upload }
      409: { description: Student code or email already exists }
    """
    body = get_resource("students").create(read_payload(), read_image())
    return jsonify(body), 201


@bp.put("/students/<int:student_id>")
def update_student(student_id: int):
    """
    Update a student; fields left out keep their value
    ---
    tags: [Students]
    consumes:
      - application/json
      - multipart/form-data
    parameters:
      - { in: path, name: student_id, type: integer, required: true }
      - { in: formData, name: studentCode, type: string }
      - { in: formData, name: firstName, type: string }
      - { in: formData, name: lastName, type: string }
      - { in: formData, name: email, type: string, format: email }
      - { in: formData, name: status, type: string, enum: [active, inactive, graduated, suspended] }
      - { in: formData, name: image, type: file }
    responses:
      200:
        description: Updated
        schema: { $ref: "#/definitions/Student" }
      400: { description: Validation error or rejected upload }
      404: { description: Student not found }
      409: { description: Student code or email already exists }
    """
    return jsonify(get_resource("students").update(student_id, read_payload(), read_image()))


@bp.delete("/students/<int:student_id>")
def delete_student(student_id: int):
    """
    Delete a student
    ---
    tags: [Students]
    parameters:
      - { in: path, name: student_id, type: integer, required: true }
    responses:
      204: { description: Deleted }
      404: { description: Student not found }
      409: { description: Cannot delete a student with existing enrollments }
    """
    get_resource("students").delete(student_id)
    return ("", 204)
