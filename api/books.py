from __future__ import annotations

from flask import Blueprint, jsonify

from api.resource import Resource, get_resource, read_payload
from models.book import Book
from models.schemas.book import BookSchema

bp = Blueprint("books", __name__)


class BookResource(Resource):
    model = Book
    schema = BookSchema()
    label = "book"
    unique_fields = ("isbn",)


@bp.get("/books")
def list_books():
    """
    List all books, newest first
    ---
    tags: [Books]
    responses:
      200:
        description: List of books
        schema:
          type: array
          items: { $ref: "#/definitions/Book" }
    """
    return jsonify(get_resource("books").list())


@bp.get("/books/<int:book_id>")
def get_book(book_id: int):
    """
    Get a single book by id
    ---
    tags: [Books]
    parameters:
      - { in: path, name: book_id, type: integer, required: true }
    responses:
      200:
        description: Book found
        schema: { $ref: "#/definitions/Book" }
      404: { description: Not found }
    """
    return jsonify(get_resource("books").get(book_id))


@bp.post("/books")
def create_book():
    """
    Create a new book
    ---
    tags: [Books]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema: { $ref: "#/definitions/BookInput" }
    responses:
      201:
        description: Created
        schema: { $ref: "#/definitions/Book" }
      400: { description: Validation error }
      409: { description: Book with same ISBN already exists }
    """
    return jsonify(get_resource("books").create(read_payload())), 201


@bp.put("/books/<int:book_id>")
def update_book(book_id: int):
    """
    Update a book (partial)
    ---
    tags: [Books]
    consumes:
      - application/json
    parameters:
      - { in: path, name: book_id, type: integer, required: true }
      - in: body
        name: body
        required: true
        schema: { $ref: "#/definitions/BookInput" }
    responses:
      200:
        description: Updated
        schema: { $ref: "#/definitions/Book" }
      400: { description: Validation error }
      404: { description: Not found }
      409: { description: Conflict (duplicate ISBN) }
    """
    return jsonify(get_resource("books").update(book_id, read_payload()))


@bp.delete("/books/<int:book_id>")
def delete_book(book_id: int):
    """
    Delete a book
    ---
    tags: [Books]
    parameters:
      - { in: path, name: book_id, type: integer, required: true }
    responses:
      204: { description: Deleted }
      404: { description: Not found }
    """
    get_resource("books").delete(book_id)
    return ("", 204)
