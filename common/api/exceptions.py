"""Project-wide DRF exception handler.

Extends the default handler so storage failures raised inside generic views
are logged and reported as a plain 500 instead of leaking a traceback.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def exception_handler(exc, context):
    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception("Persistence error in %s", type(view).__name__ if view else "unknown view")
        return Response(
            {"detail": "Internal Server Error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return None
