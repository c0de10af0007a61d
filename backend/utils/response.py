"""
Unified response format utilities
"""
import traceback

from flask import jsonify, current_app
from typing import Any, Optional


def success_response(data: Any = None, message: str = "Success", status_code: int = 200):
    """
    Generate a successful response

    Args:
        data: Response data
        message: Success message
        status_code: HTTP status code

    Returns:
        Flask response with JSON format
    """
    response = {
        "success": True,
        "message": message
    }

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def error_response(error_code: str, message: str, status_code: int = 400, **extra):
    """
    Generate an error response

    Args:
        error_code: Error code identifier
        message: Error message
        status_code: HTTP status code
        **extra: Additional top-level fields (e.g. required, allowed)

    Returns:
        Flask response with JSON format
    """
    body = {
        "success": False,
        "error": {
            "code": error_code,
            "message": message
        }
    }
    body.update(extra)
    return jsonify(body), status_code


# Common error responses
def bad_request(message: str = "Invalid request"):
    return error_response("INVALID_REQUEST", message, 400)


def not_found(resource: str = "Resource"):
    return error_response(f"{resource.upper()}_NOT_FOUND", f"{resource} not found", 404)


def validation_error(error_code: str, message: str, **extra):
    return error_response(error_code, message, 400, **extra)


def server_error(message: str, exc: Optional[BaseException] = None):
    """500 response; the traceback is only attached when the app exposes error details."""
    extra = {}
    if exc is not None and current_app.config.get('EXPOSE_ERROR_DETAILS'):
        extra['details'] = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    if exc is not None:
        message = f"{message}: {exc}"
    return error_response('SERVER_ERROR', message, 500, **extra)
