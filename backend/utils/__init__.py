"""Utils package"""
from .response import (
    success_response, error_response, bad_request, not_found,
    validation_error, server_error
)
from .view_model import to_view_model, format_timestamp

__all__ = [
    'success_response', 'error_response', 'bad_request', 'not_found',
    'validation_error', 'server_error', 'to_view_model', 'format_timestamp'
]
