"""Tagged operation results.

Service-layer operations never raise for expected failures. They return an
ActionResult that is either a success carrying a payload or a failure carrying
a reason and an ErrorKind, so views can render the matching status code.
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a service operation.

    `error` is either a plain message or a field -> message mapping (the same
    shape DRF uses for validation errors).
    """

    success: bool
    payload: Any = None
    error: Any = None
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, payload=None):
        return cls(success=True, payload=payload)

    @classmethod
    def fail(cls, kind: ErrorKind, error):
        return cls(success=False, error=error, kind=kind)

    @classmethod
    def invalid(cls, error):
        return cls.fail(ErrorKind.VALIDATION, error)

    @classmethod
    def not_found(cls, error):
        return cls.fail(ErrorKind.NOT_FOUND, error)


def persistence_guard(message: str):
    """Turn a storage failure inside the wrapped operation into a failure result.

    Only `DatabaseError` is caught; programming errors still propagate.
    """

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except DatabaseError:
                logger.exception("%s (%s)", message, fn.__name__)
                return ActionResult.fail(ErrorKind.PERSISTENCE, message)

        return wrapper

    return decorator


def result_response(result: ActionResult, render=None, success_status=status.HTTP_200_OK):
    """Map an ActionResult onto a DRF Response.

    `render` turns the success payload into response data; when omitted the
    payload is returned as-is (or an empty 204 for a None payload).
    """
    if result.success:
        if render is not None:
            return Response(render(result.payload), status=success_status)
        if result.payload is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(result.payload, status=success_status)

    body = result.error if isinstance(result.error, dict) else {"detail": str(result.error)}
    return Response(body, status=_STATUS_BY_KIND.get(result.kind, status.HTTP_400_BAD_REQUEST))
