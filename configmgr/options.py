"""
options.py
----------
get/update helpers over the Option key/value store.

- get_option returns a copy of the stored value, or the given default when the
  key has never been written.
- update_option replaces the stored value wholesale.
"""

import copy
import logging

from django.db import transaction

from .models import Option

logger = logging.getLogger(__name__)


def get_option(key: str, default=None):
    row = Option.objects.filter(key=key).first()
    if row is None:
        return copy.deepcopy(default)
    return copy.deepcopy(row.value)


@transaction.atomic
def update_option(key: str, value) -> bool:
    """
    Store 'value' under 'key'. Returns True if the stored value changed.
    """
    row, created = Option.objects.select_for_update().get_or_create(
        key=key, defaults={"value": value}
    )
    if created:
        logger.info("Option %s created", key)
        return True
    if row.value == value:
        return False
    row.value = value
    row.save(update_fields=["value", "updated_at"])
    logger.info("Option %s updated", key)
    return True
