"""Project-wide DRF exception handler.

DRF renders its own ``APIException`` hierarchy (validation, 404, domain
errors with fixed status codes). Anything else escaping a view is logged
with its traceback and answered with a generic 500 body so internals never
leak to API clients.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):  # type: ignore
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"
    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error in {view_name}: {exc}")
        return Response(
            {"detail": "Request conflicts with existing data."},
            status=status.HTTP_409_CONFLICT,
        )

    logger.error(f"Unhandled error in {view_name}: {exc}", exc_info=exc)
    return Response(
        {"detail": "Internal server error."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
