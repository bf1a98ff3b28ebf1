"""
REST framework exception handler for application errors.

Registered through REST_FRAMEWORK["EXCEPTION_HANDLER"]. Views raise
core.exceptions subclasses and let them propagate; this handler renders
them as JSON with the status code carried by the exception class.
Anything else falls through to DRF's default handler.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any


logger = logging.getLogger(__name__)


def application_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """
    Convert BaseApplicationError into an HTTP error response.

    Returns:
        Response with the error payload, or whatever DRF's default
        handler returns for other exceptions (None for unhandled ones,
        which Django turns into a 500).
    """
    if isinstance(exc, BaseApplicationError):
        view = context.get("view")
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"Request failed: {exc}",
            extra={
                "error_code": exc.error_code,
                "status_code": exc.http_status,
                "view": view.__class__.__name__ if view else None,
                **exc.details,
            },
        )
        return Response(exc.to_dict(), status=exc.http_status)

    return exception_handler(exc, context)
