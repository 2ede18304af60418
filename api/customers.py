from __future__ import annotations

from flask import Blueprint, jsonify

from api.resource import Resource, get_resource, read_image, read_payload
from models.customer import Customer
from models.schemas.customer import CustomerSchema

bp = Blueprint("customers", __name__)


class CustomerResource(Resource):
    model = Customer
    schema = CustomerSchema()
    label = "customer"
    unique_fields = ("email",)
    upload_kind = "customers"


@bp.get("/customers")
def list_customers():
    """
    List all customers, newest first
    ---
    tags: [Customers]
    responses:
      200:
        description: List of customers
        schema:
          type: array
          items: { $ref: "#/definitions/Customer" }
    """
    return jsonify(get_resource("customers").list())


@bp.get("/customers/<int:customer_id>")
def get_customer(customer_id: int):
    """
    Get a customer by id
    ---
    tags: [Customers]
    parameters:
      - { in: path, name: customer_id, type: integer, required: true }
    responses:
      200:
        description: Customer found
        schema: { $ref: "#/definitions/Customer" }
      404: { description: Customer not found }
    """
    return jsonify(get_resource("customers").get(customer_id))


@bp.post("/customers")
def create_customer():
    """
    Create a customer (JSON, or multipart form with an optional image)
    ---
    tags: [Customers]
    consumes:
      - application/json
      - multipart/form-data
    parameters:
      - { in: formData, name: firstName, type: string, required: true }
      - { in: formData, name: lastName, type: string, required: true }
      - { in: formData, name: email, type: string, format: email, required: true }
      - { in: formData, name: phone, type: string }
      - { in: formData, name: address, type: string }
      - { in: formData, name: city, type: string }
      - { in: formData, name: country, type: string }
      - { in: formData, name: postalCode, type: string }
      - { in: formData, name: dateOfBirth, type: string, format: date }
      - { in: formData, name: status, type: string, enum: [active, inactive, blocked] }
      - { in: formData, name: image, type: file }
    responses:
      201:
        description: Created
        schema: { $ref: "#/definitions/Customer" }
      400: { description: Validation error or rejected upload }
      409: { description: Email already exists }
    """
    body = get_resource("customers").create(read_payload(), read_image())
    return jsonify(body), 201


@bp.put("/customers/<int:customer_id>")
def update_customer(customer_id: int):
    """
    Update a customer; fields left out keep their value
    ---
    tags: [Customers]
    consumes:
      - application/json
      - multipart/form-data
    parameters:
      - { in: path, name: customer_id, type: integer, required: true }
      - { in: formData, name: firstName, type: string }
      - { in: formData, name: lastName, type: string }
      - { in: formData, name: email, type: string, format: email }
      - { in: formData, name: status, type: string, enum: [active, inactive, blocked] }
      - { in: formData, name: image, type: file }
    responses:
      200:
        description: Updated
        schema: { $ref: "#/definitions/Customer" }
      400: { description: Validation error or rejected upload }
      404: { description: Customer not found }
      409: { description: Email already exists }
    """
    return jsonify(get_resource("customers").update(customer_id, read_payload(), read_image()))


@bp.delete("/customers/<int:customer_id>")
def delete_customer(customer_id: int):
    """
    Delete a customer
    ---
    tags: [Customers]
    parameters:
      - { in: path, name: customer_id, type: integer, required: true }
    responses:
      204: { description: Deleted }
      404: { description: Customer not found }
    """
    get_resource("customers").delete(customer_id)
    return ("", 204)
