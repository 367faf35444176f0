from datetime import datetime, time

from django.test import TestCase
from django.utils import timezone

from configmgr.options import get_option, update_option
from ordercontrol.services.order_settings import (
    DEFAULT_DISABLED_MESSAGE,
    OPTION_NAME,
    OrderControlSettings,
    load_order_settings,
    save_order_settings,
)


class OrderSettingsRecordTests(TestCase):

    def test_absent_record_loads_defaults(self):
        settings = load_order_settings()
        self.assertTrue(settings.enable_orders)
        self.assertEqual(settings.restriction_type, "all")
        self.assertFalse(settings.enable_timeframe)
        self.assertFalse(settings.enable_date_range)
        self.assertEqual(settings.start_time, time(0, 0))
        self.assertEqual(settings.end_time, time(23, 59))
        self.assertEqual(settings.redirect_url, "")
        self.assertEqual(settings.disabled_message, str(DEFAULT_DISABLED_MESSAGE))

    def test_partial_record_filled_from_defaults(self):
        update_option(OPTION_NAME, {"enable_timeframe": "1", "start_time": "22:00"})
        settings = load_order_settings()
        self.assertTrue(settings.enable_orders)
        self.assertTrue(settings.enable_timeframe)
        self.assertEqual(settings.start_time, time(22, 0))
        self.assertEqual(settings.end_time, time(23, 59))

    def test_malformed_values_fall_back(self):
        update_option(OPTION_NAME, {"start_time": "late", "start_datetime": "someday"})
        with self.assertLogs("ordercontrol.services.order_settings", level="WARNING"):
            settings = load_order_settings()
        self.assertIsNone(settings.start_time)
        self.assertIsNone(settings.start_datetime)

    def test_ids_normalized(self):
        settings = OrderControlSettings.from_dict({
            "restriction_type": "products",
            "restricted_products": ["3", 4, ""],
            "restricted_categories": "9",
        })
        self.assertEqual(settings.restricted_products, frozenset({3, 4}))
        self.assertEqual(settings.restricted_categories, frozenset({9}))

    def test_date_only_timestamp_is_midnight(self):
        settings = OrderControlSettings.from_dict({"end_datetime": "2024-01-31"})
        expected = timezone.make_aware(datetime(2024, 1, 31), timezone.get_current_timezone())
        self.assertEqual(settings.end_datetime, expected)

    def test_save_replaces_whole_record(self):
        update_option(OPTION_NAME, {"enable_orders": False, "redirect_url": "/closed/"})
        save_order_settings(OrderControlSettings(restriction_type="products", restricted_products=frozenset({2})))

        stored = get_option(OPTION_NAME)
        self.assertTrue(stored["enable_orders"])
        self.assertEqual(stored["redirect_url"], "")
        self.assertEqual(stored["restricted_products"], [2])

    def test_round_trip_through_storage(self):
        original = OrderControlSettings.from_dict({
            "enable_date_range": True,
            "start_datetime": "2024-01-01T08:30",
            "end_datetime": "2024-01-31T23:59:59",
            "enable_timeframe": True,
            "start_time": "22:00",
            "end_time": "06:00",
        })
        save_order_settings(original)
        self.assertEqual(load_order_settings(), original)
        self.assertEqual(get_option(OPTION_NAME)["start_datetime"], "2024-01-01T08:30")
        self.assertEqual(get_option(OPTION_NAME)["end_datetime"], "2024-01-31T23:59:59")
        self.assertEqual(load_order_settings().end_datetime.second, 59)
