"""
Error taxonomy for the content core and its mapping to HTTP responses.

Core code raises these exceptions; the DRF exception handler below turns
them into responses. Internal failures never expose their message to the
client, only to the logs.
"""

import logging
from typing import Any, Optional

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ContentError(Exception):
    """Base class for every error raised by the content core."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Internal server error."
    expose_detail = False

    @property
    def detail(self) -> str:
        return str(self) if self.expose_detail else self.public_message


class NotFound(ContentError):
    """No entity exists for the given key."""

    status_code = status.HTTP_404_NOT_FOUND
    public_message = "Not found."
    expose_detail = True


class InvalidIdentifier(ContentError):
    """A route parameter could not be decoded into an identifier."""

    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Invalid identifier."
    expose_detail = True


class ConsistencyViolation(ContentError):
    """Stored data breaks an invariant, e.g. a record without an identity."""


class DependencyFailure(ContentError):
    """The storage layer failed to answer a query."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    public_message = "Service temporarily unavailable."


def content_exception_handler(exc: Exception, context: dict[str, Any]) -> Optional[Response]:
    """
    DRF exception handler that understands ContentError.

    Anything else is delegated to DRF's default handler.
    """
    if not isinstance(exc, ContentError):
        return exception_handler(exc, context)

    view = context.get("view")
    log_data = {
        "error": type(exc).__name__,
        "view": type(view).__name__ if view is not None else None,
        "status_code": exc.status_code,
    }
    if exc.expose_detail:
        logger.info(f"Request rejected: {exc}", extra=log_data)
    else:
        logger.error(f"Request failed: {exc}", extra=log_data, exc_info=exc)

    return Response({"error": exc.detail}, status=exc.status_code)
