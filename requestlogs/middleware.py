"""
Request log middleware.

Records requests whose path starts with one of settings.REQUEST_LOG_PATHS into
RequestLog so staff can inspect them from the admin log viewer.

- Creates a 'pending' row when the request arrives
- Completes it with status, processed_at and response body on the way out
- Never blocks the request if the log row cannot be written
"""
import json
import logging

from django.conf import settings
from django.db import DatabaseError
from django.http.request import RawPostDataException
from django.utils import timezone
from django.utils.deprecation import MiddlewareMixin

from .models import RequestLog

logger = logging.getLogger(__name__)

MAX_BODY_CHARS = 20000
EXCLUDED_HEADERS = {"HTTP_COOKIE", "HTTP_AUTHORIZATION", "HTTP_X_CSRFTOKEN"}


def _client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR") or None


def _headers_json(request) -> str:
    headers = {
        key[5:].replace("_", "-").title(): value
        for key, value in request.META.items()
        if key.startswith("HTTP_") and key not in EXCLUDED_HEADERS
    }
    if request.META.get("CONTENT_TYPE"):
        headers["Content-Type"] = request.META["CONTENT_TYPE"]
    return json.dumps(headers)


def _body_text(request) -> str:
    try:
        body = request.body
    except RawPostDataException:
        return ""
    return body.decode("utf-8", errors="replace")[:MAX_BODY_CHARS]


class RequestLogMiddleware(MiddlewareMixin):

    def _should_log(self, request) -> bool:
        prefixes = getattr(settings, "REQUEST_LOG_PATHS", ())
        return any(prefix and request.path.startswith(prefix) for prefix in prefixes)

    def process_request(self, request):
        if not self._should_log(request):
            return None
        try:
            request.request_log = RequestLog.objects.create(
                ip_address=_client_ip(request),
                request_body=_body_text(request),
                request_params=json.dumps({k: request.GET.getlist(k) for k in request.GET}),
                request_headers=_headers_json(request),
            )
        except DatabaseError:
            logger.exception("Could not record request log for %s", request.path)
        return None

    def process_response(self, request, response):
        log = getattr(request, "request_log", None)
        if log is None:
            return response

        log.status = "success" if response.status_code < 400 else "failed"
        log.processed_at = timezone.now()
        if getattr(response, "streaming", False):
            log.response_data = json.dumps({"status_code": response.status_code})
        else:
            log.response_data = response.content.decode(
                response.charset or "utf-8", errors="replace"
            )[:MAX_BODY_CHARS]
        try:
            log.save(update_fields=["status", "processed_at", "response_data"])
        except DatabaseError:
            logger.exception("Could not complete request log #%s", log.pk)
        return response
