"""Core middleware."""
import logging
import time

from django.conf import settings
from django.utils.cache import add_never_cache_headers

logger = logging.getLogger("incentive_desk")


class APIResponseMiddleware:
    """Mark API responses uncacheable and log slow or failing API calls."""

    API_PREFIX = "/api/"

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith(self.API_PREFIX):
            return self.get_response(request)

        started = time.monotonic()
        response = self.get_response(request)
        elapsed = time.monotonic() - started

        add_never_cache_headers(response)
        response["Pragma"] = "no-cache"

        if response.status_code >= 500:
            logger.error(
                "API %s %s -> %s in %.3fs",
                request.method, request.path, response.status_code, elapsed,
            )
        elif elapsed >= settings.API_SLOW_REQUEST_SECONDS:
            logger.warning(
                "Slow API %s %s -> %s in %.3fs",
                request.method, request.path, response.status_code, elapsed,
            )
        return response
