import io

import pytest

from api import create_app

# Smallest valid PNG: signature plus IHDR/IDAT/IEND for a 1x1 pixel
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest.fixture(name="app")
def app_fixture(tmp_path):
    """Fresh application per test: in-memory SQLite and a temporary upload folder"""
    app = create_app("testing", {"UPLOAD_FOLDER": str(tmp_path / "uploads")})
    yield app
    app.extensions["storage"].dispose()


@pytest.fixture(name="client")
def client_fixture(app):
    return app.test_client()


@pytest.fixture(name="upload_dir")
def upload_dir_fixture(app):
    return app.extensions["uploads"].root


@pytest.fixture(name="make_student")
def make_student_fixture(client):
    """Factory creating students through the API"""
    counter = {"n": 0}

    def make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "studentCode": f"EST-{n:04d}",
            "firstName": "Ana",
            "lastName": f"Perez {n}",
            "email": f"ana{n}@example.com",
        }
        payload.update(overrides)
        response = client.post("/api/v1/students", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return make


def image(name="photo.png", mimetype="image/png", content=PNG_BYTES):
    """Multipart file tuple accepted by the Flask test client"""
    return (io.BytesIO(content), name, mimetype)
