from datetime import date

STUDENT = {
    "studentCode": "EST-2024-001",
    "firstName": "Carlos",
    "lastName": "Ruiz",
    "email": "carlos@example.com",
}


def _enroll(client, student_id, course="Algebra"):
    response = client.post(
        "/api/v1/enrollments",
        json={"studentId": student_id, "course": course, "semester": "2024-1", "academicYear": "2024"},
    )
    assert response.status_code == 201
    return response.get_json()


def test_create_student_defaults(client):
    response = client.post("/api/v1/students", json=STUDENT)
    assert response.status_code == 201
    data = response.get_json()
    assert data["status"] == "active"
    assert data["enrollmentDate"] == date.today().isoformat()
    assert data["enrollments"] == []


def test_duplicate_student_code(client):
    client.post("/api/v1/students", json=STUDENT)
    response = client.post("/api/v1/students", json={**STUDENT, "email": "other@example.com"})
    assert response.status_code == 409
    assert "studentCode" in response.get_json()["message"]


def test_duplicate_student_email(client):
    client.post("/api/v1/students", json=STUDENT)
    response = client.post("/api/v1/students", json={**STUDENT, "studentCode": "EST-2024-002"})
    assert response.status_code == 409
    assert "email" in response.get_json()["message"]


def test_duplicate_student_caught_by_store(app, client, monkeypatch):
    resource = app.extensions["resources"]["students"]
    monkeypatch.setattr(resource, "_check_unique", lambda values, exclude=None: None)
    client.post("/api/v1/students", json=STUDENT)
    response = client.post("/api/v1/students", json={**STUDENT, "email": "new@example.com"})
    assert response.status_code == 409
    assert "studentCode" in response.get_json()["message"]


def test_create_student_validation(client):
    response = client.post("/api/v1/students", json={"firstName": "", "email": "x", "status": "expelled"})
    assert response.status_code == 400
    issues = response.get_json()["issues"]
    assert {"studentCode", "firstName", "lastName", "email", "status"} <= set(issues)


def test_get_student_includes_enrollments(client, make_student):
    student = make_student()
    _enroll(client, student["id"], "Algebra")
    _enroll(client, student["id"], "Physics")

    data = client.get(f"/api/v1/students/{student['id']}").get_json()
    assert sorted(e["course"] for e in data["enrollments"]) == ["Algebra", "Physics"]
    assert all("student" not in e for e in data["enrollments"])

    listing = client.get("/api/v1/students").get_json()
    assert len(listing[0]["enrollments"]) == 2


def test_partial_update_keeps_other_fields(client, make_student):
    student = make_student(phone="555-1234", address="Av. Siempre Viva 742")
    response = client.put(f"/api/v1/students/{student['id']}", json={"firstName": "Ana Maria"})
    assert response.status_code == 200
    updated = response.get_json()
    assert updated["firstName"] == "Ana Maria"
    for key, value in student.items():
        if key not in ("firstName", "updatedAt"):
            assert updated[key] == value


def test_update_student_email_to_taken(client, make_student):
    first = make_student()
    second = make_student()
    response = client.put(f"/api/v1/students/{second['id']}", json={"email": first["email"]})
    assert response.status_code == 409


def test_delete_student_with_enrollments_is_refused(client, make_student):
    student = make_student()
    enrollment = _enroll(client, student["id"])

    response = client.delete(f"/api/v1/students/{student['id']}")
    assert response.status_code == 409
    assert client.get(f"/api/v1/students/{student['id']}").status_code == 200

    assert client.delete(f"/api/v1/enrollments/{enrollment['id']}").status_code == 204
    assert client.delete(f"/api/v1/students/{student['id']}").status_code == 204
    assert client.get(f"/api/v1/students/{student['id']}").status_code == 404


def test_delete_student_store_backstop(app, client, make_student, monkeypatch):
    """The foreign key still protects enrollments if the check is skipped"""
    student = make_student()
    _enroll(client, student["id"])
    resource = app.extensions["resources"]["students"]
    monkeypatch.setattr(resource, "before_delete", lambda record: None)

    response = client.delete(f"/api/v1/students/{student['id']}")
    assert response.status_code == 409
    assert client.get(f"/api/v1/students/{student['id']}").status_code == 200
