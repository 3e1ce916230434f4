"""Request logging middleware."""

import logging
import time
import uuid

from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SKIPPED_PREFIXES = ("/static/", "/media/", "/favicon.ico")


class RequestLoggingMiddleware(MiddlewareMixin):
    """Log one line per request with its status, duration and request id.

    An incoming ``X-Request-ID`` header is reused so ids can be correlated
    across services; otherwise a short random id is generated.
    """

    def process_request(self, request):
        request.started_at = time.perf_counter()
        request.request_id = (
            request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        )
        return None

    def process_response(self, request, response):
        request_id = getattr(request, "request_id", None)
        if request_id is None:
            return response

        response[REQUEST_ID_HEADER] = request_id
        if request.path.startswith(SKIPPED_PREFIXES):
            return response

        log_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.path,
            "query": request.META.get("QUERY_STRING", ""),
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - request.started_at) * 1000, 2),
        }
        message = f"{request.method} {request.path} -> {response.status_code}"
        if response.status_code >= 500:
            logger.error(message, extra=log_data)
        elif response.status_code >= 400:
            logger.warning(message, extra=log_data)
        else:
            logger.info(message, extra=log_data)
        return response
