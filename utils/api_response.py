"""
Standardized response documents.

Provides a consistent JSON-ready format for every caller of the service:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"errors": [{"code": "...", "message": "...", "more_info": "..."}],
               "trace": "<trace id>"}

Usage:
    from utils.api_response import api_success, api_error

    api_success(data=reservation.to_dict(), message='Reservation created')
    api_error(exc.errors)
"""

import uuid
from typing import Any, Iterable

from utils.errors import ErrorDetail


def new_trace_id() -> str:
    """Generate a trace identifier for error correlation."""
    return uuid.uuid4().hex


def api_success(
    data: Any = None,
    message: str | None = None,
    **extra_fields: Any
) -> dict:
    """
    Build a standardized success document.

    Args:
        data: Optional payload to include as 'data' key.
        message: Optional success message.
        **extra_fields: Additional top-level fields to include.

    Returns:
        dict
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if extra_fields:
        response.update(extra_fields)

    return response


def api_error(errors: Iterable[ErrorDetail], trace: str | None = None, **extra_fields: Any) -> dict:
    """
    Build a standardized error document.

    Args:
        errors: Error details to report.
        trace: Trace id (generated when omitted).
        **extra_fields: Additional top-level fields (e.g., detail).

    Returns:
        dict
    """
    response = {
        'errors': [error.to_dict() for error in errors],
        'trace': trace or new_trace_id(),
    }

    if extra_fields:
        response.update(extra_fields)

    return response
