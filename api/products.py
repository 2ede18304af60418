from __future__ import annotations

from flask import Blueprint, jsonify

from api.resource import Resource, get_resource, read_image, read_payload
from models.product import Product
from models.schemas.product import ProductSchema

bp = Blueprint("products", __name__)


class ProductResource(Resource):
    model = Product
    schema = ProductSchema()
    label = "product"
    upload_kind = "products"


@bp.get("/products")
def list_products():
    """
    List all products, newest first
    ---
    tags: [Products]
    responses:
      200:
        description: List of products
        schema:
          type: array
          items: { $ref: "#/definitions/Product" }
    """
    return jsonify(get_resource("products").list())


@bp.get("/products/<int:product_id>")
def get_product(product_id: int):
    """
    Get a product by id
    ---
    tags: [Products]
    parameters:
      - in: path
        name: product_id
        type: integer
        required: true
    responses:
      200:
        description: Product found
        schema: { $ref: "#/definitions/Product" }
      404: { description: Product not found }
    """
    return jsonify(get_resource("products").get(product_id))


@bp.post("/products")
def create_product():
    """
    Create a product (JSON, or multipart form with an optional image)
    ---
    tags: [Products]
    consumes:
      - application/json
      - multipart/form-data
    parameters:
      - { in: formData, name: name, type: string, required: true }
      - { in: formData, name: price, type: number, minimum: 0, required: true }
      - { in: formData, name: description, type: string }
      - { in: formData, name: inStock, type: boolean, default: true }
      - { in: formData, name: image, type: file, description: "jpeg, jpg, png, gif or webp; 5 MB max" }
    responses:
      201:
        description: Created
        schema: { $ref: "#/definitions/Product" }
      400: { description: Validation error or rejected upload }
    """
    body = get_resource("products").create(read_payload(), read_image())
    return jsonify(body), 201


@bp.put("/products/<int:product_id>")
def update_product(product_id: int):
    """
    Update a product; fields left out keep their value
    ---
    tags: [Products]
    consumes:
      - application/json
      - multipart/form-data
    parameters:
      - { in: path, name: product_id, type: integer, required: true }
      - { in: formData, name: name, type: string }
      - { in: formData, name: price, type: number, minimum: 0 }
      - { in: formData, name: description, type: string }
      - { in: formData, name: inStock, type: boolean }
      - { in: formData, name: image, type: file }
    responses:
      200:
        description: Updated
        schema: { $ref: "#/definitions/Product" }
      400: { description: Validation error or rejected upload }
      404: { description: Product not found }
    """
    return jsonify(get_resource("products").update(product_id, read_payload(), read_image()))


@bp.delete("/products/<int:product_id>")
def delete_product(product_id: int):
    """
    Delete a product
    ---
    tags: [Products]
    parameters:
      - { in: path, name: product_id, type: integer, required: true }
    responses:
      204: { description: Deleted }
      404: { description: Product not found }
    """
    get_resource("products").delete(product_id)
    return ("", 204)
