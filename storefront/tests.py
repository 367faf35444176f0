from datetime import datetime
from unittest import mock

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from catalog.models import Category, Product
from configmgr.options import update_option
from currency.services.currency_control import OPTION_NAME as CURRENCY_OPTION
from gateways.services.gateway_rules import OPTION_NAME as GATEWAY_OPTION
from ordercontrol.services.order_settings import OPTION_NAME as ORDER_OPTION

from .hooks import EventContext, EventHandler, HookRegistry

EVENING = timezone.make_aware(datetime(2024, 1, 15, 20, 0), timezone.get_current_timezone())


class Append(EventHandler):
    def __init__(self, tag):
        self.tag = tag

    def on_event(self, context):
        return (context.value or []) + [self.tag]


class HookRegistryTests(SimpleTestCase):

    def test_priority_then_registration_order(self):
        registry = HookRegistry()
        registry.register("evt", Append("late"), priority=999)
        registry.register("evt", Append("first"))
        registry.register("evt", Append("second"))
        registry.register("evt", Append("early"), priority=1)
        self.assertEqual(registry.dispatch("evt", EventContext()), ["early", "first", "second", "late"])

    def test_no_handlers_returns_value(self):
        self.assertEqual(HookRegistry().dispatch("evt", EventContext(value=7)), 7)

    def test_rejects_objects_without_on_event(self):
        with self.assertRaises(TypeError):
            HookRegistry().register("evt", object())


@mock.patch("ordercontrol.services.availability_evaluator.local_now", return_value=EVENING)
class StorefrontFlowTests(TestCase):
    """
    Full request flow through the project-wide registry with stored settings.
    The store clock is pinned to 20:00.
    """

    def setUp(self):
        self.client = APIClient()
        self.drinks = Category.objects.create(name="Drinks", slug="drinks")
        self.wine = Product.objects.create(name="Wine")
        self.wine.categories.add(self.drinks)
        self.bread = Product.objects.create(name="Bread")

    def close_store(self, **extra):
        record = {"enable_timeframe": True, "start_time": "09:00", "end_time": "17:00"}
        record.update(extra)
        update_option(ORDER_OPTION, record)

    def test_product_page_open_store(self, _now):
        resp = self.client.get(f"/shop/products/{self.wine.id}/")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.data["purchasable"])
        self.assertEqual(resp.data["messages"], [])

    def test_product_page_category_restriction(self, _now):
        self.close_store(
            restriction_type="categories",
            restricted_categories=[self.drinks.id],
            disabled_message="No drinks after 5pm",
        )
        wine = self.client.get(f"/shop/products/{self.wine.id}/")
        bread = self.client.get(f"/shop/products/{self.bread.id}/")

        self.assertFalse(wine.data["purchasable"])
        self.assertIn("No drinks after 5pm", wine.data["messages"][0])
        self.assertTrue(bread.data["purchasable"])
        self.assertEqual(bread.data["messages"], [])

    def test_unknown_product_404(self, _now):
        self.assertEqual(self.client.get("/shop/products/9999/").status_code, 404)

    def test_checkout_rejected_when_closed(self, _now):
        self.close_store(disabled_message="Closed")
        resp = self.client.post("/shop/checkout/", data={}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["result"], "failure")
        # process notice + validation error
        self.assertEqual(resp.data["errors"], ["Closed", "Closed"])

    def test_checkout_accepted_when_open(self, _now):
        resp = self.client.post("/shop/checkout/", data={"payment_method": "paypal"}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, {"result": "success"})

    def test_checkout_redirect(self, _now):
        self.close_store(redirect_url="/closed/")
        resp = self.client.get("/shop/checkout/")
        self.assertEqual(resp.status_code, 302)
        self.assertEqual(resp["Location"], "/closed/")

    def test_checkout_refuses_offsite_redirect(self, _now):
        self.close_store(redirect_url="https://evil.example.com/")
        resp = self.client.get("/shop/checkout/")
        self.assertEqual(resp.status_code, 302)
        self.assertEqual(resp["Location"], "/")

    def test_closed_without_redirect_shows_checkout(self, _now):
        self.close_store()
        resp = self.client.get("/shop/checkout/")
        self.assertEqual(resp.status_code, 200)

    def test_gateways_follow_currency(self, _now):
        update_option(CURRENCY_OPTION, {"default_currency": "USD", "currencies": [{"code": "EUR", "rate": "0.9"}]})
        update_option(GATEWAY_OPTION, {"rules": [{"enabled": True, "currencies": ["USD"], "gateways": ["paypal"]}]})

        usd = self.client.get("/shop/gateways/")
        self.assertEqual(usd.data["currency"], "USD")
        self.assertEqual(list(usd.data["gateways"]), ["paypal"])

        eur = self.client.get("/shop/gateways/?currency=EUR")
        self.assertEqual(eur.data["currency"], "EUR")
        self.assertEqual(len(eur.data["gateways"]), 5)

    def test_checkout_rejects_filtered_gateway(self, _now):
        update_option(GATEWAY_OPTION, {"rules": [{"currencies": ["USD"], "gateways": ["paypal"]}]})
        resp = self.client.post("/shop/checkout/", data={"payment_method": "stripe"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["errors"], ["Invalid payment method."])

    def test_checkout_non_string_payment_method(self, _now):
        resp = self.client.post("/shop/checkout/", data={"payment_method": 5}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["errors"], ["Invalid payment method."])

    def test_checkout_rejects_non_object_body(self, _now):
        resp = self.client.post("/shop/checkout/", data=[1, 2], format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["result"], "failure")
        self.assertEqual(len(resp.data["errors"]), 1)

    def test_checkout_rejects_nested_payment_method(self, _now):
        resp = self.client.post("/shop/checkout/", data={"payment_method": {"id": "paypal"}}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["result"], "failure")
