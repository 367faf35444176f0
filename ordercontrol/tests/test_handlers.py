from datetime import datetime, time

from django.test import SimpleTestCase
from django.utils import timezone

from ordercontrol.handlers import register_hooks
from ordercontrol.services.order_settings import OrderControlSettings
from storefront.hooks import (
    CHECKOUT_PROCESS,
    CHECKOUT_VALIDATE,
    PAGE_CHECKOUT,
    PAGE_PRODUCT,
    PAGE_REDIRECT,
    PRODUCT_IS_PURCHASABLE,
    PRODUCT_SUMMARY,
    EventContext,
    HookRegistry,
)

EVENING = timezone.make_aware(datetime(2024, 1, 15, 20, 0), timezone.get_current_timezone())


class OrderControlHandlerTests(SimpleTestCase):
    """
    Handlers wired into a private registry with injected settings and clock,
    so no storage is touched.
    """

    def build(self, **settings_kwargs):
        params = {"enable_timeframe": True, "start_time": time(9, 0), "end_time": time(17, 0)}
        params.update(settings_kwargs)
        settings = OrderControlSettings(**params)
        registry = HookRegistry()
        register_hooks(
            registry,
            settings_loader=lambda: settings,
            category_lookup=lambda pid: {100} if pid == 1 else set(),
            clock=lambda: EVENING,
        )
        return registry

    def test_checkout_validation_adds_error(self):
        registry = self.build(disabled_message="Closed <for now>")
        ctx = EventContext(page=PAGE_CHECKOUT)
        registry.dispatch(CHECKOUT_VALIDATE, ctx)
        self.assertEqual(ctx.errors, {"orders_disabled": ["Closed &lt;for now&gt;"]})

    def test_checkout_process_adds_error_notice(self):
        registry = self.build()
        ctx = EventContext(page=PAGE_CHECKOUT)
        registry.dispatch(CHECKOUT_PROCESS, ctx)
        self.assertEqual(len(ctx.notices), 1)
        self.assertEqual(ctx.notices[0][0], "error")

    def test_checkout_passes_inside_window(self):
        registry = self.build(start_time=None)
        ctx = EventContext(page=PAGE_CHECKOUT)
        registry.dispatch(CHECKOUT_PROCESS, ctx)
        registry.dispatch(CHECKOUT_VALIDATE, ctx)
        self.assertEqual(ctx.error_messages(), [])

    def test_purchasable_filter(self):
        registry = self.build(restriction_type="categories", restricted_categories=frozenset({100}))
        blocked = registry.dispatch(PRODUCT_IS_PURCHASABLE, EventContext(value=True, product_id=1))
        allowed = registry.dispatch(PRODUCT_IS_PURCHASABLE, EventContext(value=True, product_id=2))
        self.assertFalse(blocked)
        self.assertTrue(allowed)

    def test_purchasable_keeps_upstream_false(self):
        registry = self.build(restriction_type="products", restricted_products=frozenset({9}))
        self.assertFalse(registry.dispatch(PRODUCT_IS_PURCHASABLE, EventContext(value=False, product_id=2)))

    def test_product_summary_message(self):
        registry = self.build(disabled_message="Back tomorrow")
        ctx = EventContext(product_id=1, page=PAGE_PRODUCT)
        registry.dispatch(PRODUCT_SUMMARY, ctx)
        self.assertEqual(
            ctx.output,
            ['<div class="woocommerce-info" style="margin: 20px 0;">Back tomorrow</div>'],
        )

    def test_product_summary_without_product(self):
        registry = self.build()
        ctx = EventContext(page=PAGE_PRODUCT)
        registry.dispatch(PRODUCT_SUMMARY, ctx)
        self.assertEqual(ctx.output, [])

    def test_redirect_only_with_url(self):
        registry = self.build()
        ctx = EventContext(page=PAGE_CHECKOUT)
        registry.dispatch(PAGE_REDIRECT, ctx)
        self.assertIsNone(ctx.redirect_url)

        registry = self.build(redirect_url="/closed/")
        ctx = EventContext(page=PAGE_CHECKOUT)
        registry.dispatch(PAGE_REDIRECT, ctx)
        self.assertEqual(ctx.redirect_url, "/closed/")

    def test_redirect_only_on_checkout_page(self):
        registry = self.build(redirect_url="/closed/")
        ctx = EventContext(page=PAGE_PRODUCT)
        registry.dispatch(PAGE_REDIRECT, ctx)
        self.assertIsNone(ctx.redirect_url)
