import os

from conftest import image

CUSTOMER = {"firstName": "Lucia", "lastName": "Gomez", "email": "lucia@example.com"}


def test_create_customer(client):
    response = client.post("/api/v1/customers", json={**CUSTOMER, "dateOfBirth": "1990-05-01", "city": "Lima"})
    assert response.status_code == 201
    data = response.get_json()
    assert data["status"] == "active"
    assert data["dateOfBirth"] == "1990-05-01"
    assert data["city"] == "Lima"
    assert data["email"] == "lucia@example.com"


def test_create_customer_invalid_email(client):
    response = client.post("/api/v1/customers", json={**CUSTOMER, "email": "not-an-email"})
    assert response.status_code == 400
    assert "email" in response.get_json()["issues"]


def test_create_customer_invalid_status(client):
    response = client.post("/api/v1/customers", json={**CUSTOMER, "status": "vip"})
    assert response.status_code == 400
    assert "status" in response.get_json()["issues"]


def test_duplicate_customer_email(client):
    assert client.post("/api/v1/customers", json=CUSTOMER).status_code == 201
    response = client.post("/api/v1/customers", json={**CUSTOMER, "firstName": "Other"})
    assert response.status_code == 409
    assert "email" in response.get_json()["message"]


def test_update_customer_email_to_taken_one(client):
    client.post("/api/v1/customers", json=CUSTOMER)
    other = client.post("/api/v1/customers", json={**CUSTOMER, "email": "other@example.com"}).get_json()
    response = client.put(f"/api/v1/customers/{other['id']}", json={"email": CUSTOMER["email"]})
    assert response.status_code == 409


def test_update_customer_status(client):
    created = client.post("/api/v1/customers", json=CUSTOMER).get_json()
    data = client.put(f"/api/v1/customers/{created['id']}", json={"status": "blocked"}).get_json()
    assert data["status"] == "blocked"
    assert data["firstName"] == "Lucia"


def test_create_customer_multipart_with_image(client, upload_dir):
    response = client.post(
        "/api/v1/customers",
        data={**CUSTOMER, "image": image("avatar.webp", "image/webp")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 201
    path = response.get_json()["image"]
    assert path.startswith("/uploads/customers/avatar-")
    assert os.path.exists(os.path.join(upload_dir, "customers", os.path.basename(path)))


def test_duplicate_customer_with_image_leaves_no_file(client, upload_dir):
    """A conflicting create never writes its image"""
    client.post("/api/v1/customers", json=CUSTOMER)
    response = client.post(
        "/api/v1/customers",
        data={**CUSTOMER, "image": image("dup.png")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 409
    directory = os.path.join(upload_dir, "customers")
    assert not os.path.exists(directory) or os.listdir(directory) == []


def test_customers_listing(client):
    client.post("/api/v1/customers", json=CUSTOMER)
    client.post("/api/v1/customers", json={**CUSTOMER, "email": "b@example.com"})
    emails = [c["email"] for c in client.get("/api/v1/customers").get_json()]
    assert emails == ["b@example.com", "lucia@example.com"]


def test_deleting_customer_keeps_product_image(client, upload_dir):
    """Only images of the customer's own kind are cleaned up"""
    product = client.post(
        "/api/v1/products",
        data={"name": "Mug", "price": "3", "image": image("mug.png")},
        content_type="multipart/form-data",
    ).get_json()
    customer = client.post("/api/v1/customers", json={**CUSTOMER, "image": product["image"]}).get_json()

    assert client.delete(f"/api/v1/customers/{customer['id']}").status_code == 204
    assert os.path.exists(os.path.join(upload_dir, "products", os.path.basename(product["image"])))
