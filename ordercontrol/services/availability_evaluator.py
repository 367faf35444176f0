"""
availability_evaluator.py
-------------------------
Decides whether a product (or the store as a whole) can be ordered right now.

Inputs are a settings snapshot and the current time; nothing here reads storage
or touches the request. Two entry points:

- can_order_product(product_id): honours restriction_type scoping
  (all / categories / products). Unaffected products are always orderable.
- are_orders_enabled(): store-wide check used for checkout gating; ignores
  scoping and evaluates the allowed period directly.

Allowed period = date range check AND timeframe check. Each check passes when
its feature flag is off.
"""

from django.utils import timezone

from .order_settings import (
    OrderControlSettings,
    RESTRICT_ALL,
    RESTRICT_CATEGORIES,
    RESTRICT_PRODUCTS,
    as_id,
)
from .time_utils import format_hhmm, local_now, make_aware, minute_of


class OrderAvailabilityEvaluator:
    def __init__(self, settings: OrderControlSettings, now=None, category_lookup=None):
        self.settings = settings
        if now is None:
            now = local_now()
        else:
            now = timezone.localtime(make_aware(now))
        self.now = now
        # product_id -> iterable of category ids
        self.category_lookup = category_lookup

    # -------------------- Scoping --------------------
    def _is_product_in_restricted_categories(self, product_id) -> bool:
        restricted = self.settings.restricted_categories
        if not restricted or self.category_lookup is None:
            return False
        return not restricted.isdisjoint(self.category_lookup(product_id))

    def is_product_affected(self, product_id) -> bool:
        restriction_type = self.settings.restriction_type
        if restriction_type == RESTRICT_ALL:
            return True
        if restriction_type == RESTRICT_CATEGORIES:
            return self._is_product_in_restricted_categories(product_id)
        if restriction_type == RESTRICT_PRODUCTS:
            return as_id(product_id) in self.settings.restricted_products
        return False

    # -------------------- Allowed period --------------------
    def is_within_date_range(self) -> bool:
        s = self.settings
        if not s.enable_date_range:
            return True
        if s.start_datetime is not None and self.now < s.start_datetime:
            return False
        if s.end_datetime is not None and self.now > s.end_datetime:
            return False
        return True

    def is_within_timeframe(self) -> bool:
        start, end = self.settings.start_time, self.settings.end_time
        if start is None or end is None:
            return True

        current = minute_of(self.now)
        if start <= end:
            return start <= current <= end
        # Overnight window, e.g. 22:00 to 06:00
        return current >= start or current <= end

    def is_within_allowed_period(self) -> bool:
        if not self.is_within_date_range():
            return False
        if self.settings.enable_timeframe and not self.is_within_timeframe():
            return False
        return True

    # -------------------- Public decisions --------------------
    def can_order_product(self, product_id) -> bool:
        if not self.settings.enable_orders:
            return False
        if not self.is_product_affected(product_id):
            return True
        return self.is_within_allowed_period()

    def are_orders_enabled(self) -> bool:
        if not self.settings.enable_orders:
            return False
        return self.is_within_allowed_period()

    def get_statistics(self) -> dict:
        s = self.settings
        return {
            "orders_enabled": s.enable_orders,
            "timeframe_enabled": s.enable_timeframe,
            "current_status": "active" if self.are_orders_enabled() else "disabled",
            "start_time": format_hhmm(s.start_time),
            "end_time": format_hhmm(s.end_time),
        }
