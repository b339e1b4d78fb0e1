import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        user = getattr(request, 'user', None)
        user_label = f"user {user.pk}" if user is not None and user.is_authenticated else 'anonymous'

        message = (
            f"{request.method} {request.path} -> {response.status_code} "
            f"({elapsed_ms:.0f}ms, {user_label}, {request.META.get('REMOTE_ADDR')})"
        )
        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        return response
