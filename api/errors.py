import logging

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Foreseeable failure carrying its own status and error code."""

    status = 500
    error = "INTERNAL_ERROR"

    def __init__(self, message: str, issues: dict | None = None, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.issues = issues
        if status is not None:
            self.status = status


class InvalidInput(ApiError):
    status = 400
    error = "VALIDATION_ERROR"


class NotFound(ApiError):
    status = 404
    error = "NOT_FOUND"


class Conflict(ApiError):
    status = 409
    error = "CONFLICT"


class UploadRejected(ApiError):
    status = 400
    error = "UPLOAD_REJECTED"


def error_response(error: str, message: str, status: int, issues: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if issues:
        payload["issues"] = issues
    return jsonify(payload), status


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        if current_app and current_app.debug:
            logger.info("%s: %s", err.error, err.message)
        return error_response(err.error, err.message, err.status, issues=err.issues)

    # 404 Not Found (unknown routes, non-integer ids)
    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", 404)

    # 405 Method Not Allowed
    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("METHOD_NOT_ALLOWED", "Method not allowed", 405)

    # 413 body over MAX_CONTENT_LENGTH, refused before the view reads it
    @app.errorhandler(413)
    def too_large(e):
        limit = current_app.config.get("UPLOAD_MAX_BYTES", 0) // (1024 * 1024)
        return error_response("UPLOAD_REJECTED", f"File too large. Maximum size is {limit} MB.", 413)

    # Marshmallow validation errors that escaped a resource
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return error_response("VALIDATION_ERROR", "Invalid input", 400, issues=err.normalized_messages())

    # Integrity errors the record store did not translate
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        lower_msg = str(getattr(err, "orig", err)).lower()
        logger.warning("Untranslated integrity error: %s", lower_msg)
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409)
        if "foreign key constraint" in lower_msg or "foreign key mismatch" in lower_msg:
            return error_response("CONFLICT", "Foreign key constraint failed.", 409)
        if "check constraint" in lower_msg or "constraint failed" in lower_msg:
            return error_response("BAD_REQUEST", "Check constraint failed.", 400)
        return error_response("BAD_REQUEST", "Integrity error.", 400)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_response("BAD_REQUEST", err.description, err.code or 400)

    # 500 Internal Error (catch-all); details stay in the log
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500)
