from api.config import DevelopmentConfig, ProductionConfig, TestingConfig, get_config


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.get_json()
    assert "message" in data
    assert data["docs"] == "/apidocs/"


def test_api_index(client):
    response = client.get("/api/v1/")
    assert response.status_code == 200
    assert "message" in response.get_json()


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "version": "1.0.0", "database": "ok"}


def test_swagger_document(client):
    response = client.get("/swagger.json")
    assert response.status_code == 200
    paths = response.get_json()["paths"]
    assert "/api/v1/products" in paths
    assert "/api/v1/enrollments/student/{student_id}" in paths


def test_unknown_route(client):
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.get_json()["error"] == "NOT_FOUND"


def test_method_not_allowed(client):
    response = client.patch("/api/v1/products")
    assert response.status_code == 405
    assert response.get_json()["error"] == "METHOD_NOT_ALLOWED"


def test_unexpected_error_does_not_leak(app, client, monkeypatch):
    """Unanticipated failures become a bare 500"""
    records = app.extensions["resources"]["products"].records

    def broken(*args, **kwargs):
        raise RuntimeError("password=hunter2 at db-host")

    monkeypatch.setattr(records, "find_all", broken)
    response = client.get("/api/v1/products")
    assert response.status_code == 500
    body = response.get_json()
    assert body == {"error": "INTERNAL_ERROR", "message": "An unexpected error occurred", "status": 500}


def test_request_too_large(app, client):
    app.config["MAX_CONTENT_LENGTH"] = 64
    response = client.post(
        "/api/v1/products",
        data={"name": "x" * 200, "price": "1"},
        content_type="multipart/form-data",
    )
    assert response.status_code == 413
    assert response.get_json()["error"] == "UPLOAD_REJECTED"


def test_get_config():
    assert get_config("production") is ProductionConfig
    assert get_config("test") is TestingConfig
    assert get_config("dev") is DevelopmentConfig
