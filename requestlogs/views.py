# requestlogs/views.py
#
# Purpose:
# - Admin AJAX endpoint used by the log viewer modal.
#   * POST /admin-ajax/         {action, log_id, nonce} -> {success, data}
#   * GET  /admin-ajax/nonce/   ?action=... -> {success, data: {nonce}}
#
# Notes for developers:
# - Every reply is a JSON envelope; on failure 'data' is a message string the
#   viewer shows in an alert.
# - The nonce replaces the CSRF token for this endpoint, hence csrf_exempt.
#
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .formatting import log_details
from .models import RequestLog
from .nonce import create_nonce, verify_nonce

logger = logging.getLogger(__name__)

GET_LOG_DETAILS = "control_suite_toolkit_get_log_details"


def _fail(message, status):
    return JsonResponse({"success": False, "data": message}, status=status)


def _is_staff(request) -> bool:
    user = getattr(request, "user", None)
    return bool(user and user.is_authenticated and user.is_staff)


def get_log_details(request):
    raw_id = (request.POST.get("log_id") or "").strip()
    try:
        log_id = int(raw_id)
    except ValueError:
        return _fail("Invalid log ID", 400)

    log = RequestLog.objects.filter(pk=log_id).first()
    if log is None:
        return _fail("Log not found", 404)
    return JsonResponse({"success": True, "data": log_details(log)})


ACTIONS = {
    GET_LOG_DETAILS: get_log_details,
}


@csrf_exempt
@require_POST
def admin_ajax(request):
    action = (request.POST.get("action") or "").strip()
    handler = ACTIONS.get(action)
    if handler is None:
        return _fail("Invalid action", 400)

    if not _is_staff(request):
        return _fail("Permission denied", 403)

    if not verify_nonce(request.POST.get("nonce"), action, request.user):
        return _fail("Security check failed", 403)

    return handler(request)


@require_GET
def issue_nonce(request):
    action = (request.GET.get("action") or "").strip()
    if action not in ACTIONS:
        return _fail("Invalid action", 400)
    if not _is_staff(request):
        return _fail("Permission denied", 403)
    return JsonResponse({"success": True, "data": {"nonce": create_nonce(action, request.user)}})
