"""
order_settings.py
-----------------
The order control settings record (option 'cst_order_control_settings').

Stored values are loose JSON written by the admin form; OrderControlSettings.from_dict
completes missing fields from the defaults and normalizes types so the evaluator
never has to guess.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, time

from django.utils.translation import gettext_lazy as _

from configmgr.options import get_option, update_option
from .time_utils import format_hhmm, format_timestamp, parse_hhmm, parse_timestamp

logger = logging.getLogger(__name__)

OPTION_NAME = "cst_order_control_settings"

RESTRICT_ALL = "all"
RESTRICT_CATEGORIES = "categories"
RESTRICT_PRODUCTS = "products"
RESTRICTION_TYPES = (RESTRICT_ALL, RESTRICT_CATEGORIES, RESTRICT_PRODUCTS)

DEFAULT_DISABLED_MESSAGE = _("Orders are currently disabled. Please try again later.")


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def as_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return str(value)


def _as_id_set(values) -> frozenset:
    if not values:
        return frozenset()
    if isinstance(values, (str, int)):
        values = [values]
    return frozenset(as_id(v) for v in values if v not in ("", None))


def _as_time(name, value, default):
    if value is None:
        return default
    if isinstance(value, time):
        return value
    if str(value).strip() == "":
        return None
    try:
        return parse_hhmm(str(value))
    except ValueError:
        logger.warning("Ignoring malformed %s=%r in order settings", name, value)
        return None


def _as_timestamp(name, value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return parse_timestamp(str(value))
    except ValueError:
        logger.warning("Ignoring malformed %s=%r in order settings", name, value)
        return None


@dataclass(frozen=True)
class OrderControlSettings:
    enable_orders: bool = True
    restriction_type: str = RESTRICT_ALL
    restricted_categories: frozenset = field(default_factory=frozenset)
    restricted_products: frozenset = field(default_factory=frozenset)
    enable_date_range: bool = False
    start_datetime: datetime | None = None
    end_datetime: datetime | None = None
    enable_timeframe: bool = False
    start_time: time | None = time(0, 0)
    end_time: time | None = time(23, 59)
    redirect_url: str = ""
    disabled_message: str = ""

    def __post_init__(self):
        if not self.disabled_message:
            object.__setattr__(self, "disabled_message", str(DEFAULT_DISABLED_MESSAGE))

    @classmethod
    def from_dict(cls, data) -> "OrderControlSettings":
        data = data or {}
        defaults = cls()
        return cls(
            enable_orders=_as_bool(data.get("enable_orders", defaults.enable_orders)),
            restriction_type=str(data.get("restriction_type") or RESTRICT_ALL),
            restricted_categories=_as_id_set(data.get("restricted_categories")),
            restricted_products=_as_id_set(data.get("restricted_products")),
            enable_date_range=_as_bool(data.get("enable_date_range", False)),
            start_datetime=_as_timestamp("start_datetime", data.get("start_datetime")),
            end_datetime=_as_timestamp("end_datetime", data.get("end_datetime")),
            enable_timeframe=_as_bool(data.get("enable_timeframe", False)),
            start_time=_as_time("start_time", data.get("start_time"), defaults.start_time),
            end_time=_as_time("end_time", data.get("end_time"), defaults.end_time),
            redirect_url=str(data.get("redirect_url") or ""),
            disabled_message=str(data.get("disabled_message") or ""),
        )

    def to_dict(self) -> dict:
        return {
            "enable_orders": self.enable_orders,
            "restriction_type": self.restriction_type,
            "restricted_categories": sorted(self.restricted_categories, key=str),
            "restricted_products": sorted(self.restricted_products, key=str),
            "enable_date_range": self.enable_date_range,
            "start_datetime": format_timestamp(self.start_datetime),
            "end_datetime": format_timestamp(self.end_datetime),
            "enable_timeframe": self.enable_timeframe,
            "start_time": format_hhmm(self.start_time),
            "end_time": format_hhmm(self.end_time),
            "redirect_url": self.redirect_url,
            "disabled_message": self.disabled_message,
        }


def load_order_settings() -> OrderControlSettings:
    """
    Snapshot of the stored record, default-populated when absent.
    """
    return OrderControlSettings.from_dict(get_option(OPTION_NAME, OrderControlSettings().to_dict()))


def save_order_settings(settings: OrderControlSettings) -> bool:
    changed = update_option(OPTION_NAME, settings.to_dict())
    if changed:
        logger.info(
            "Order control settings updated (enable_orders=%s, restriction_type=%s)",
            settings.enable_orders,
            settings.restriction_type,
        )
    return changed
