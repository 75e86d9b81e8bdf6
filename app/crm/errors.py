from __future__ import annotations

from flask import Flask, g, jsonify
from werkzeug.exceptions import HTTPException


class ValidationError(Exception):
    """A customer payload was rejected before anything was written."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class StorageError(Exception):
    """The database failed: unreachable, constraint violation, or aborted transaction."""


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _err_validation(e: ValidationError):
        app.logger.info("Rejected payload: %s (request_id=%s)", e, getattr(g, "request_id", None))
        return jsonify({"error": "validation_error", "field": e.field, "message": e.message}), 400

    @app.errorhandler(StorageError)
    def _err_storage(e: StorageError):
        app.logger.error("Storage failure (request_id=%s): %s", getattr(g, "request_id", None), e, exc_info=e)
        return jsonify({"error": "storage_error", "message": "The customer store is unavailable."}), 500

    @app.errorhandler(HTTPException)
    def _err_http(e: HTTPException):
        return jsonify({"error": e.name.lower().replace(" ", "_"), "message": e.description}), e.code

    @app.errorhandler(Exception)
    def _err_500(e: Exception):
        # Ensure stack trace shows in the server logs.
        app.logger.exception("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None))
        return jsonify({"error": "internal_server_error", "message": "Unexpected server error."}), 500
