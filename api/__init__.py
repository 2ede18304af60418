import logging

from flask import Flask, abort, send_from_directory
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from .utils.uploads import UPLOAD_KINDS, UploadStore
from models.db_storage import DBStorage

__version__ = "1.0.0"

API_PREFIX = "/api/v1"

_TIMESTAMPS = {
    "id": {"type": "integer", "readOnly": True, "example": 1},
    "createdAt": {"type": "string", "format": "date-time", "readOnly": True},
    "updatedAt": {"type": "string", "format": "date-time", "readOnly": True},
}

_PRODUCT = {
    "name": {"type": "string", "example": "Laptop HP"},
    "price": {"type": "number", "minimum": 0, "example": 899.99},
    "description": {"type": "string"},
    "inStock": {"type": "boolean", "default": True},
    "image": {"type": "string", "example": "/uploads/products/laptop-1700000000000-123456789.png"},
}

_BOOK = {
    "title": {"type": "string"},
    "author": {"type": "string"},
    "isbn": {"type": "string", "minLength": 10, "maxLength": 20},
    "publisher": {"type": "string"},
    "publicationYear": {"type": "integer", "minimum": 1000},
    "genre": {"type": "string"},
    "language": {"type": "string", "default": "Español"},
    "pages": {"type": "integer", "minimum": 1},
    "price": {"type": "number", "minimum": 0},
    "description": {"type": "string"},
    "inStock": {"type": "boolean", "default": True},
    "rating": {"type": "number", "minimum": 0, "maximum": 5},
}

_CUSTOMER = {
    "firstName": {"type": "string"},
    "lastName": {"type": "string"},
    "email": {"type": "string", "format": "email"},
    "phone": {"type": "string"},
    "address": {"type": "string"},
    "city": {"type": "string"},
    "country": {"type": "string"},
    "postalCode": {"type": "string"},
    "dateOfBirth": {"type": "string", "format": "date"},
    "status": {"type": "string", "enum": ["active", "inactive", "blocked"], "default": "active"},
    "image": {"type": "string"},
}

_STUDENT = {
    "studentCode": {"type": "string", "example": "EST-2024-001"},
    "firstName": {"type": "string"},
    "lastName": {"type": "string"},
    "email": {"type": "string", "format": "email"},
    "phone": {"type": "string"},
    "dateOfBirth": {"type": "string", "format": "date"},
    "address": {"type": "string"},
    "enrollmentDate": {"type": "string", "format": "date"},
    "status": {"type": "string", "enum": ["active", "inactive", "graduated", "suspended"], "default": "active"},
    "emergencyContact": {"type": "string"},
    "emergencyPhone": {"type": "string"},
    "image": {"type": "string"},
}

_ENROLLMENT = {
    "studentId": {"type": "integer", "minimum": 1},
    "course": {"type": "string"},
    "courseCode": {"type": "string"},
    "semester": {"type": "string", "example": "2024-1"},
    "academicYear": {"type": "string", "example": "2024"},
    "enrollmentDate": {"type": "string", "format": "date"},
    "status": {
        "type": "string",
        "enum": ["enrolled", "completed", "dropped", "failed", "in-progress"],
        "default": "enrolled",
    },
    "grade": {"type": "number", "minimum": 0, "maximum": 100},
    "credits": {"type": "integer", "minimum": 1},
    "notes": {"type": "string"},
}


def _record(properties: dict, required: list, **extra) -> dict:
    return {"type": "object", "required": required, "properties": {**_TIMESTAMPS, **properties, **extra}}


# Swagger 2.0 document: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Store API",
        "version": __version__,
        "description": "REST API for products, books, customers, students and enrollments.",
    },
    "basePath": "/",
    "schemes": ["http", "https"],
    "definitions": {
        "Product": _record(_PRODUCT, ["name", "price"]),
        "Book": _record(_BOOK, ["title", "author", "price"]),
        "BookInput": {"type": "object", "required": ["title", "author", "price"], "properties": _BOOK},
        "Customer": _record(_CUSTOMER, ["firstName", "lastName", "email"]),
        "Student": _record(
            _STUDENT,
            ["studentCode", "firstName", "lastName", "email"],
            enrollments={"type": "array", "items": {"$ref": "#/definitions/Enrollment"}},
        ),
        "Enrollment": _record(
            _ENROLLMENT,
            ["studentId", "course", "semester", "academicYear"],
            student={"type": "object"},
        ),
        "EnrollmentInput": {
            "type": "object",
            "required": ["studentId", "course", "semester", "academicYear"],
            "properties": _ENROLLMENT,
        },
        "Error": {
            "type": "object",
            "properties": {
                "error": {"type": "string", "example": "VALIDATION_ERROR"},
                "message": {"type": "string"},
                "status": {"type": "integer", "example": 400},
                "issues": {"type": "object"},
            },
        },
    },
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def configure_logging(app: Flask) -> None:
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(app.config["LOG_LEVEL"])


def create_app(config_name: str | None = None, overrides: dict | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    The storage adapter and the upload store are built here, owned by the app,
    and handed to every resource; nothing reaches for a module-level handle.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config), then per-call overrides (tests)
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)

    configure_logging(app)

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    storage = DBStorage(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))
    storage.reload()
    uploads = UploadStore(app.config["UPLOAD_FOLDER"], max_bytes=app.config["UPLOAD_MAX_BYTES"])

    from .health import bp as health_bp
    from .products import bp as products_bp, ProductResource
    from .books import bp as books_bp, BookResource
    from .customers import bp as customers_bp, CustomerResource
    from .students import bp as students_bp, StudentResource
    from .enrollments import bp as enrollments_bp, EnrollmentResource

    app.extensions["storage"] = storage
    app.extensions["uploads"] = uploads
    app.extensions["resources"] = {
        "products": ProductResource(storage, uploads),
        "books": BookResource(storage, uploads),
        "customers": CustomerResource(storage, uploads),
        "students": StudentResource(storage, uploads),
        "enrollments": EnrollmentResource(storage, uploads),
    }

    for blueprint in (health_bp, products_bp, books_bp, customers_bp, students_bp, enrollments_bp):
        app.register_blueprint(blueprint, url_prefix=API_PREFIX)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Store API",
            "docs": "/apidocs/",
            "health": f"{API_PREFIX}/health",
        }, 200

    @app.get(f"{API_PREFIX}/")
    def api_index():
        return {"message": f"Store API v{__version__}"}, 200

    # Uploaded images, read-only
    @app.get("/uploads/<kind>/<path:filename>")
    def uploaded_file(kind: str, filename: str):
        if kind not in UPLOAD_KINDS:
            abort(404)
        return send_from_directory(uploads.directory(kind), filename)

    app.logger.info("Store API ready (env=%s)", app.config.get("APP_ENV"))
    return app
