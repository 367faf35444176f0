"""
Display helpers for the admin log viewer.

JSON fields are re-parsed and re-serialized with a 2-space indent; text that
does not parse is shown as stored.
"""
import json

from django.utils import timezone

NO_DATA = "No data"
NOT_AVAILABLE = "N/A"


def pretty_json(text) -> str:
    if not text:
        return NO_DATA
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError):
        return text
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def _format_datetime(value):
    if value is None:
        return None
    return timezone.localtime(value).strftime("%Y-%m-%d %H:%M:%S")


def log_details(log) -> dict:
    """
    Record fields as sent to the viewer, plus a 'display' block with the
    values ready to drop into the modal.
    """
    data = {
        "id": log.pk,
        "ip_address": log.ip_address,
        "status": log.status,
        "created_at": _format_datetime(log.created_at),
        "processed_at": _format_datetime(log.processed_at),
        "request_body": log.request_body,
        "request_params": log.request_params,
        "request_headers": log.request_headers,
        "response_data": log.response_data,
    }
    data["display"] = {
        "processed_at": data["processed_at"] or NOT_AVAILABLE,
        "request_body": log.request_body or NO_DATA,
        "request_params": pretty_json(log.request_params),
        "request_headers": pretty_json(log.request_headers),
        "response_data": pretty_json(log.response_data),
    }
    return data
