"""
Per-user, per-action nonces for admin AJAX calls.

A nonce is the user's id signed with a salt derived from the action name, so
a nonce issued for one action (or user) does not verify for another.
"""
import logging

from django.conf import settings
from django.core import signing

logger = logging.getLogger(__name__)


def _signer(action: str) -> signing.TimestampSigner:
    return signing.TimestampSigner(salt=f"requestlogs.nonce.{action}")


def create_nonce(action: str, user) -> str:
    return _signer(action).sign(str(user.pk))


def verify_nonce(nonce: str, action: str, user, max_age=None) -> bool:
    if not nonce or user is None or user.pk is None:
        return False
    if max_age is None:
        max_age = getattr(settings, "NONCE_MAX_AGE", 60 * 60 * 12)
    try:
        value = _signer(action).unsign(nonce, max_age=max_age)
    except signing.SignatureExpired:
        logger.warning("Expired nonce for action %s (user %s)", action, user.pk)
        return False
    except signing.BadSignature:
        logger.warning("Bad nonce for action %s (user %s)", action, user.pk)
        return False
    return value == str(user.pk)
