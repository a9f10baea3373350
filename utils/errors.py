"""
utils/errors.py
-----------------
Error types raised by the subject store and controllers, and the Flask
handlers that turn them into JSON responses with a "message" field.
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code:
            self.status_code = status_code

    def to_dict(self):
        return {"message": self.message}


class InvalidInput(ApiError):
    status_code = 400
    message = "Invalid input"


class NotFound(ApiError):
    status_code = 404
    message = "Subject not found"


class Unavailable(ApiError):
    status_code = 500
    message = "Database not initialized"


class StorageFailure(ApiError):
    status_code = 500
    message = "Database error"


def register_error_handlers(app):
    """Register JSON error handlers on the Flask app."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.error("%s: %s", type(error).__name__, error.message)
        else:
            logger.warning("%s: %s", type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({"message": error.description}), error.code
