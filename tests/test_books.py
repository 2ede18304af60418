import io
from datetime import date

BOOK = {"title": "Cien años de soledad", "author": "Gabriel García Márquez", "price": 19.9}


def test_create_book_applies_defaults(client):
    """language and inStock get their defaults"""
    response = client.post("/api/v1/books", json=BOOK)
    assert response.status_code == 201
    data = response.get_json()
    assert data["language"] == "Español"
    assert data["inStock"] is True
    assert data["isbn"] is None
    assert data["price"] == 19.9


def test_get_book_round_trip(client):
    payload = {
        **BOOK,
        "isbn": "978-0307474728",
        "publisher": "Vintage",
        "publicationYear": 1967,
        "genre": "Novel",
        "language": "English",
        "pages": 417,
        "rating": 4.8,
        "inStock": False,
        "description": "Macondo",
    }
    created = client.post("/api/v1/books", json=payload).get_json()
    data = client.get(f"/api/v1/books/{created['id']}").get_json()
    for key, value in payload.items():
        assert data[key] == value
    assert data["id"] == created["id"]
    assert data["createdAt"] and data["updatedAt"]


def test_duplicate_isbn_conflicts(client):
    """Second book with the same ISBN is refused"""
    first = client.post("/api/v1/books", json={**BOOK, "isbn": "9780307474728"})
    second = client.post("/api/v1/books", json={**BOOK, "title": "Other", "isbn": "9780307474728"})
    assert first.status_code == 201
    assert second.status_code == 409
    body = second.get_json()
    assert body["error"] == "CONFLICT"
    assert "isbn" in body["message"]


def test_books_without_isbn_do_not_conflict(client):
    assert client.post("/api/v1/books", json=BOOK).status_code == 201
    assert client.post("/api/v1/books", json=BOOK).status_code == 201


def test_duplicate_isbn_caught_by_store(app, client, monkeypatch):
    """Without the pre-check the store constraint still yields 409"""
    resource = app.extensions["resources"]["books"]
    monkeypatch.setattr(resource, "_check_unique", lambda values, exclude=None: None)

    assert client.post("/api/v1/books", json={**BOOK, "isbn": "1234567890"}).status_code == 201
    response = client.post("/api/v1/books", json={**BOOK, "isbn": "1234567890"})
    assert response.status_code == 409
    assert "isbn" in response.get_json()["message"]


def test_isbn_length_validated(client):
    response = client.post("/api/v1/books", json={**BOOK, "isbn": "123"})
    assert response.status_code == 400
    assert "isbn" in response.get_json()["issues"]


def test_publication_year_bounds(client):
    next_year = date.today().year + 1
    assert client.post("/api/v1/books", json={**BOOK, "publicationYear": next_year}).status_code == 201
    for year in (999, next_year + 1):
        response = client.post("/api/v1/books", json={**BOOK, "publicationYear": year})
        assert response.status_code == 400
        assert "publicationYear" in response.get_json()["issues"]


def test_rating_and_pages_bounds(client):
    response = client.post("/api/v1/books", json={**BOOK, "rating": 5.5, "pages": 0})
    assert response.status_code == 400
    assert set(response.get_json()["issues"]) == {"rating", "pages"}


def test_update_book_isbn_conflict(client):
    client.post("/api/v1/books", json={**BOOK, "isbn": "1111111111"})
    other = client.post("/api/v1/books", json={**BOOK, "isbn": "2222222222"}).get_json()

    response = client.put(f"/api/v1/books/{other['id']}", json={"isbn": "1111111111"})
    assert response.status_code == 409

    # re-submitting its own ISBN is not a conflict
    response = client.put(f"/api/v1/books/{other['id']}", json={"isbn": "2222222222", "pages": 100})
    assert response.status_code == 200
    assert response.get_json()["pages"] == 100


def test_update_book_clears_optional_field(client):
    created = client.post("/api/v1/books", json={**BOOK, "genre": "Novel"}).get_json()
    data = client.put(f"/api/v1/books/{created['id']}", json={"genre": None}).get_json()
    assert data["genre"] is None
    assert data["title"] == BOOK["title"]


def test_book_ignores_uploaded_files(client):
    """Books carry no image; multipart files are ignored"""
    response = client.post(
        "/api/v1/books",
        data={**{k: str(v) for k, v in BOOK.items()}, "image": (io.BytesIO(b"x"), "a.png", "image/png")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 201
    assert "image" not in response.get_json()


def test_delete_book(client):
    created = client.post("/api/v1/books", json=BOOK).get_json()
    assert client.delete(f"/api/v1/books/{created['id']}").status_code == 204
    assert client.get(f"/api/v1/books/{created['id']}").status_code == 404


def test_whole_number_fields_reject_fractions(client):
    response = client.post("/api/v1/books", json={**BOOK, "pages": 150.7, "publicationYear": 1999.5})
    assert response.status_code == 400
    assert set(response.get_json()["issues"]) == {"pages", "publicationYear"}

    # integral values still load, from JSON numbers and from form strings
    assert client.post("/api/v1/books", json={**BOOK, "pages": 150.0}).get_json()["pages"] == 150
    response = client.post(
        "/api/v1/books",
        data={**{k: str(v) for k, v in BOOK.items()}, "pages": "320"},
        content_type="multipart/form-data",
    )
    assert response.get_json()["pages"] == 320
