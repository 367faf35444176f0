from decimal import Decimal

from django.contrib.auth.models import User
from django.test import RequestFactory, SimpleTestCase, TestCase, override_settings
from rest_framework.test import APIClient

from configmgr.options import get_option
from currency.services.currency_control import (
    OPTION_NAME,
    CurrencyControl,
    CurrencySettings,
    normalize_currency_rows,
)


class NormalizeCurrencyRowsTests(SimpleTestCase):

    def test_select_or_custom_code(self):
        rows = normalize_currency_rows([
            {"select": "EUR", "code": "", "symbol": "€", "rate": "0.92"},
            {"select": "custom", "code": "xyz", "symbol": "X", "rate": "3"},
        ])
        self.assertEqual([r.code for r in rows], ["EUR", "XYZ"])
        self.assertEqual(rows[0].rate, Decimal("0.92"))

    def test_invalid_rows_dropped(self):
        rows = normalize_currency_rows([
            {"select": "", "code": "", "rate": "1"},
            {"select": "GBP", "rate": "abc"},
            {"select": "JPY", "rate": "-1"},
            "not a row",
        ])
        self.assertEqual(rows, [])

    def test_indexed_form_rows(self):
        rows = normalize_currency_rows({
            "1": {"select": "GBP", "rate": "0.8"},
            "0": {"select": "EUR", "rate": "0.9"},
        })
        self.assertEqual([r.code for r in rows], ["EUR", "GBP"])


@override_settings(DEFAULT_CURRENCY="USD")
class CurrentCurrencyTests(SimpleTestCase):

    def setUp(self):
        self.control = CurrencyControl(CurrencySettings.from_dict({
            "currencies": [{"code": "EUR", "rate": "0.9"}, {"code": "GBP", "rate": "0.8"}],
        }))
        self.factory = RequestFactory()

    def _request(self, path="/shop/checkout/", session=None, cookies=None):
        request = self.factory.get(path)
        request.session = session if session is not None else {}
        request.COOKIES.update(cookies or {})
        return request

    def test_available_currencies(self):
        self.assertEqual(self.control.get_available_currencies(), ["USD", "EUR", "GBP"])
        self.assertEqual(self.control.get_active_currencies()["EUR"], "Euro")

    def test_default_without_request(self):
        self.assertEqual(self.control.get_current_currency(), "USD")

    def test_query_param_wins_and_is_remembered(self):
        session = {"currency": "GBP"}
        request = self._request("/shop/checkout/?currency=eur", session=session)
        self.assertEqual(self.control.get_current_currency(request), "EUR")
        self.assertEqual(session["currency"], "EUR")

    def test_session_then_cookie(self):
        request = self._request(session={"currency": "GBP"}, cookies={"currency": "EUR"})
        self.assertEqual(self.control.get_current_currency(request), "GBP")
        request = self._request(cookies={"currency": "EUR"})
        self.assertEqual(self.control.get_current_currency(request), "EUR")

    def test_unknown_currency_falls_back(self):
        request = self._request("/shop/checkout/?currency=AUD", cookies={"currency": "JPY"})
        self.assertEqual(self.control.get_current_currency(request), "USD")


class CurrencySettingsApiTests(TestCase):
    url = "/api/currency/settings/"

    def setUp(self):
        self.client = APIClient()
        self.staff = User.objects.create_user(username="admin", password="testpass123", is_staff=True)

    def test_requires_staff(self):
        self.assertEqual(self.client.get(self.url).status_code, 403)

    def test_put_normalizes_rows(self):
        self.client.force_authenticate(self.staff)
        resp = self.client.put(
            self.url,
            data={
                "default_currency": "usd",
                "currencies": [
                    {"select": "EUR", "code": "EUR", "symbol": "€", "rate": "0.92"},
                    {"select": "custom", "code": "", "symbol": "", "rate": "1"},
                ],
            },
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            get_option(OPTION_NAME),
            {"default_currency": "USD", "currencies": [{"code": "EUR", "symbol": "€", "rate": "0.92"}]},
        )

        resp = self.client.get(self.url)
        self.assertEqual(list(resp.data["active_currencies"]), ["USD", "EUR"])
