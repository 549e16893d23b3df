import re
import uuid
import logging
from threading import local

from django.utils.deprecation import MiddlewareMixin

_thread_locals = local()

REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"
RESPONSE_HEADER = "X-Request-ID"

# Upstream ids are accepted only when they look like a token, never free text
_VALID_UPSTREAM_ID = re.compile(r"^[A-Za-z0-9\-_.]{8,64}$")


def _incoming_request_id(request):
    candidate = (request.META.get(REQUEST_ID_HEADER) or "").strip()
    if candidate and _VALID_UPSTREAM_ID.match(candidate):
        return candidate
    return None


class RequestIDMiddleware(MiddlewareMixin):
    """
    Tags each request with an id (reusing a sane upstream X-Request-ID) so that
    every log line emitted while pricing a cart can be correlated.
    """

    def process_request(self, request):
        request_id = _incoming_request_id(request) or uuid.uuid4().hex
        request.request_id = request_id
        _thread_locals.request_id = request_id
        return None

    def process_response(self, request, response):
        if hasattr(request, "request_id"):
            response[RESPONSE_HEADER] = request.request_id
        _clear()
        return response

    def process_exception(self, request, exception):
        _clear()
        return None


def _clear():
    if hasattr(_thread_locals, "request_id"):
        delattr(_thread_locals, "request_id")


def get_request_id():
    """Current request id, or None outside a request."""
    return getattr(_thread_locals, "request_id", None)


class RequestIDFilter(logging.Filter):
    """Logging filter that stamps ``record.request_id``."""

    def filter(self, record):
        record.request_id = get_request_id() or "no-request-id"
        return True
