# ordercontrol/handlers.py
#
# Purpose:
# - Storefront hook handlers that apply order availability decisions:
#   * checkout.validate       -> validation error when store-wide orders are closed
#   * checkout.process        -> error notice when store-wide orders are closed
#   * product.is_purchasable  -> False for products that cannot be ordered now
#   * product.summary         -> inline message on the product page
#   * page.redirect           -> send shoppers away from checkout (if configured)
#
# Notes for developers:
# - Each event reads a fresh settings snapshot and builds its own evaluator, so
#   admin updates apply on the next request.
# - Checkout gating uses are_orders_enabled() (store-wide). Product pages use
#   can_order_product() (scoped by restriction_type).
#
import logging

from django.utils.html import escape, format_html

from catalog.models import product_category_ids
from storefront.hooks import (
    CHECKOUT_PROCESS,
    CHECKOUT_VALIDATE,
    PAGE_CHECKOUT,
    PAGE_REDIRECT,
    PRODUCT_IS_PURCHASABLE,
    PRODUCT_SUMMARY,
    EventHandler,
)
from .services.availability_evaluator import OrderAvailabilityEvaluator
from .services.order_settings import load_order_settings

logger = logging.getLogger(__name__)


class OrderControlHandler(EventHandler):
    def __init__(self, settings_loader=load_order_settings, category_lookup=product_category_ids, clock=None):
        self.settings_loader = settings_loader
        self.category_lookup = category_lookup
        self.clock = clock

    def evaluator(self) -> OrderAvailabilityEvaluator:
        return OrderAvailabilityEvaluator(
            self.settings_loader(),
            now=self.clock() if self.clock else None,
            category_lookup=self.category_lookup,
        )


class CheckoutValidationHandler(OrderControlHandler):
    def on_event(self, context):
        evaluator = self.evaluator()
        if not evaluator.are_orders_enabled():
            logger.info("Checkout rejected: orders are disabled")
            context.add_error("orders_disabled", escape(evaluator.settings.disabled_message))
        return context.value


class CheckoutProcessHandler(OrderControlHandler):
    def on_event(self, context):
        evaluator = self.evaluator()
        if not evaluator.are_orders_enabled():
            context.add_notice(escape(evaluator.settings.disabled_message), "error")
        return context.value


class PurchasableHandler(OrderControlHandler):
    def on_event(self, context):
        if context.product_id is None:
            return context.value
        if not self.evaluator().can_order_product(context.product_id):
            return False
        return context.value


class ProductSummaryHandler(OrderControlHandler):
    def on_event(self, context):
        if context.product_id is None:
            return context.value

        evaluator = self.evaluator()
        if not evaluator.can_order_product(context.product_id):
            context.output.append(
                format_html(
                    '<div class="woocommerce-info" style="margin: 20px 0;">{}</div>',
                    evaluator.settings.disabled_message,
                )
            )
        return context.value


class CheckoutRedirectHandler(OrderControlHandler):
    def on_event(self, context):
        if context.page != PAGE_CHECKOUT:
            return context.value

        evaluator = self.evaluator()
        redirect_url = evaluator.settings.redirect_url
        if redirect_url and not evaluator.are_orders_enabled():
            logger.info("Redirecting checkout to %s: orders are disabled", redirect_url)
            context.redirect_url = redirect_url
        return context.value


def register_hooks(registry, **handler_kwargs):
    registry.register(CHECKOUT_VALIDATE, CheckoutValidationHandler(**handler_kwargs), priority=10)
    registry.register(CHECKOUT_PROCESS, CheckoutProcessHandler(**handler_kwargs))
    registry.register(PRODUCT_IS_PURCHASABLE, PurchasableHandler(**handler_kwargs), priority=10)
    registry.register(PRODUCT_SUMMARY, ProductSummaryHandler(**handler_kwargs), priority=31)
    registry.register(PAGE_REDIRECT, CheckoutRedirectHandler(**handler_kwargs))
