from dataclasses import replace
from datetime import datetime, time

from django.test import SimpleTestCase
from django.utils import timezone

from ordercontrol.services.availability_evaluator import OrderAvailabilityEvaluator
from ordercontrol.services.order_settings import OrderControlSettings


def at(*args):
    return timezone.make_aware(datetime(*args), timezone.get_current_timezone())


class DisabledOrdersTests(SimpleTestCase):
    """enable_orders=False closes the store whatever else is configured."""

    def test_disabled_orders_block_everything(self):
        combos = [
            OrderControlSettings(enable_orders=False),
            OrderControlSettings(enable_orders=False, restriction_type="products", restricted_products=frozenset({1})),
            OrderControlSettings(enable_orders=False, restriction_type="categories"),
            OrderControlSettings(enable_orders=False, enable_timeframe=True, start_time=time(0, 0), end_time=time(23, 59)),
        ]
        for settings in combos:
            ev = OrderAvailabilityEvaluator(settings, now=at(2024, 1, 15, 12, 0))
            self.assertFalse(ev.are_orders_enabled())
            self.assertFalse(ev.can_order_product(1))
            self.assertFalse(ev.can_order_product(999))

    def test_defaults_allow_orders(self):
        ev = OrderAvailabilityEvaluator(OrderControlSettings(), now=at(2024, 1, 15, 3, 0))
        self.assertTrue(ev.are_orders_enabled())
        self.assertTrue(ev.can_order_product(42))


class TimeframeTests(SimpleTestCase):

    def _ev(self, start, end, now):
        settings = OrderControlSettings(enable_timeframe=True, start_time=start, end_time=end)
        return OrderAvailabilityEvaluator(settings, now=now)

    def test_daytime_window(self):
        self.assertTrue(self._ev(time(9, 0), time(17, 0), at(2024, 1, 15, 9, 0)).are_orders_enabled())
        self.assertTrue(self._ev(time(9, 0), time(17, 0), at(2024, 1, 15, 17, 0)).are_orders_enabled())
        self.assertFalse(self._ev(time(9, 0), time(17, 0), at(2024, 1, 15, 17, 1)).are_orders_enabled())
        self.assertFalse(self._ev(time(9, 0), time(17, 0), at(2024, 1, 15, 8, 59)).are_orders_enabled())

    def test_overnight_window_wraps(self):
        """22:00-06:00: 23:00 and 05:59 allowed, 07:00 not."""
        self.assertTrue(self._ev(time(22, 0), time(6, 0), at(2024, 1, 15, 23, 0)).are_orders_enabled())
        self.assertTrue(self._ev(time(22, 0), time(6, 0), at(2024, 1, 15, 5, 59)).are_orders_enabled())
        self.assertFalse(self._ev(time(22, 0), time(6, 0), at(2024, 1, 15, 7, 0)).are_orders_enabled())

    def test_seconds_ignored_at_end_of_window(self):
        self.assertTrue(self._ev(time(9, 0), time(17, 0), at(2024, 1, 15, 17, 0, 45)).are_orders_enabled())

    def test_missing_bound_means_no_timeframe(self):
        self.assertTrue(self._ev(None, time(6, 0), at(2024, 1, 15, 12, 0)).are_orders_enabled())
        self.assertTrue(self._ev(time(22, 0), None, at(2024, 1, 15, 12, 0)).are_orders_enabled())

    def test_timeframe_flag_off_ignores_window(self):
        settings = OrderControlSettings(enable_timeframe=False, start_time=time(9, 0), end_time=time(10, 0))
        ev = OrderAvailabilityEvaluator(settings, now=at(2024, 1, 15, 20, 0))
        self.assertTrue(ev.are_orders_enabled())


class DateRangeTests(SimpleTestCase):

    def setUp(self):
        self.settings = OrderControlSettings(
            enable_date_range=True,
            start_datetime=at(2024, 1, 1),
            end_datetime=at(2024, 1, 31),
        )

    def test_inside_range_allowed(self):
        ev = OrderAvailabilityEvaluator(self.settings, now=at(2024, 1, 15))
        self.assertTrue(ev.are_orders_enabled())

    def test_after_range_denied(self):
        ev = OrderAvailabilityEvaluator(self.settings, now=at(2024, 2, 1))
        self.assertFalse(ev.are_orders_enabled())

    def test_before_range_denied(self):
        ev = OrderAvailabilityEvaluator(self.settings, now=at(2023, 12, 31, 23, 59))
        self.assertFalse(ev.are_orders_enabled())

    def test_bounds_inclusive(self):
        self.assertTrue(OrderAvailabilityEvaluator(self.settings, now=at(2024, 1, 1)).are_orders_enabled())
        self.assertTrue(OrderAvailabilityEvaluator(self.settings, now=at(2024, 1, 31)).are_orders_enabled())

    def test_open_ended_range(self):
        settings = replace(self.settings, end_datetime=None)
        self.assertTrue(OrderAvailabilityEvaluator(settings, now=at(2030, 6, 1)).are_orders_enabled())
        settings = replace(self.settings, start_datetime=None)
        self.assertTrue(OrderAvailabilityEvaluator(settings, now=at(2000, 6, 1)).are_orders_enabled())

    def test_range_flag_off(self):
        settings = replace(self.settings, enable_date_range=False)
        self.assertTrue(OrderAvailabilityEvaluator(settings, now=at(2024, 2, 1)).are_orders_enabled())

    def test_range_and_timeframe_both_required(self):
        settings = replace(
            self.settings, enable_timeframe=True, start_time=time(9, 0), end_time=time(17, 0)
        )
        self.assertTrue(OrderAvailabilityEvaluator(settings, now=at(2024, 1, 15, 10, 0)).are_orders_enabled())
        self.assertFalse(OrderAvailabilityEvaluator(settings, now=at(2024, 1, 15, 18, 0)).are_orders_enabled())
        self.assertFalse(OrderAvailabilityEvaluator(settings, now=at(2024, 2, 15, 10, 0)).are_orders_enabled())

    def test_end_bound_keeps_seconds(self):
        settings = replace(self.settings, end_datetime=at(2024, 1, 31, 23, 59, 59))
        self.assertTrue(OrderAvailabilityEvaluator(settings, now=at(2024, 1, 31, 23, 59, 30)).are_orders_enabled())
        self.assertFalse(OrderAvailabilityEvaluator(settings, now=at(2024, 2, 1, 0, 0, 0)).are_orders_enabled())

    def test_naive_now_uses_store_timezone(self):
        ev = OrderAvailabilityEvaluator(self.settings, now=datetime(2024, 1, 15, 12, 0))
        self.assertTrue(timezone.is_aware(ev.now))
        self.assertTrue(ev.are_orders_enabled())
        ev = OrderAvailabilityEvaluator(self.settings, now=datetime(2024, 2, 15, 12, 0))
        self.assertFalse(ev.are_orders_enabled())


class RestrictionScopeTests(SimpleTestCase):
    """Outside the window, only affected products are blocked."""

    CLOSED = at(2024, 1, 15, 20, 0)

    def _settings(self, **kwargs):
        return OrderControlSettings(
            enable_timeframe=True, start_time=time(9, 0), end_time=time(17, 0), **kwargs
        )

    def test_all_equals_allowed_period(self):
        settings = self._settings(restriction_type="all")
        closed = OrderAvailabilityEvaluator(settings, now=self.CLOSED)
        opened = OrderAvailabilityEvaluator(settings, now=at(2024, 1, 15, 10, 0))
        for product_id in (1, 2, 3):
            self.assertEqual(closed.can_order_product(product_id), closed.is_within_allowed_period())
            self.assertEqual(opened.can_order_product(product_id), opened.is_within_allowed_period())

    def test_products_scope(self):
        settings = self._settings(restriction_type="products", restricted_products=frozenset({5, 7}))
        ev = OrderAvailabilityEvaluator(settings, now=self.CLOSED)
        self.assertFalse(ev.can_order_product(5))
        self.assertFalse(ev.can_order_product("7"))
        self.assertTrue(ev.can_order_product(6))

    def test_categories_scope(self):
        categories = {1: {10, 11}, 2: {12}, 3: set()}
        settings = self._settings(restriction_type="categories", restricted_categories=frozenset({11}))
        ev = OrderAvailabilityEvaluator(settings, now=self.CLOSED, category_lookup=lambda pid: categories.get(pid, set()))
        self.assertFalse(ev.can_order_product(1))
        self.assertTrue(ev.can_order_product(2))
        self.assertTrue(ev.can_order_product(3))

    def test_categories_scope_with_no_restricted_categories(self):
        settings = self._settings(restriction_type="categories")
        ev = OrderAvailabilityEvaluator(settings, now=self.CLOSED, category_lookup=lambda pid: {1})
        self.assertTrue(ev.can_order_product(1))

    def test_unknown_restriction_type_affects_nothing(self):
        settings = self._settings(restriction_type="brands")
        ev = OrderAvailabilityEvaluator(settings, now=self.CLOSED)
        self.assertTrue(ev.can_order_product(1))

    def test_store_wide_check_ignores_scope(self):
        settings = self._settings(restriction_type="products", restricted_products=frozenset({5}))
        ev = OrderAvailabilityEvaluator(settings, now=self.CLOSED)
        self.assertTrue(ev.can_order_product(6))
        self.assertFalse(ev.are_orders_enabled())


class StatisticsTests(SimpleTestCase):

    def test_statistics(self):
        settings = OrderControlSettings(enable_timeframe=True, start_time=time(22, 0), end_time=time(6, 0))
        stats = OrderAvailabilityEvaluator(settings, now=at(2024, 1, 15, 12, 0)).get_statistics()
        self.assertEqual(stats, {
            "orders_enabled": True,
            "timeframe_enabled": True,
            "current_status": "disabled",
            "start_time": "22:00",
            "end_time": "06:00",
        })
