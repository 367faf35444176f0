from django.test import SimpleTestCase

from gateways.services.gateway_filter import GatewayCurrencyFilter
from gateways.services.gateway_rules import GatewayRule, PaymentGatewaySettings

CANDIDATES = {"paypal": "PayPal", "stripe": "Stripe", "cod": "Cash on delivery"}


def rules(*dicts):
    return PaymentGatewaySettings.from_dict({"rules": list(dicts)})


class GatewayCurrencyFilterTests(SimpleTestCase):

    def test_no_matching_rule_passes_everything(self):
        """Rule for USD only, shopper in EUR: nothing is filtered."""
        settings = rules({"enabled": True, "currencies": ["USD"], "gateways": ["paypal"]})
        result = GatewayCurrencyFilter(settings, "EUR").filter_gateways_by_currency(CANDIDATES)
        self.assertEqual(result, CANDIDATES)

    def test_matching_rule_keeps_only_allowed(self):
        settings = rules({"enabled": True, "currencies": ["USD"], "gateways": ["paypal"]})
        candidates = {"paypal": "PayPal", "stripe": "Stripe"}
        result = GatewayCurrencyFilter(settings, "USD").filter_gateways_by_currency(candidates)
        self.assertEqual(result, {"paypal": "PayPal"})
        # input untouched
        self.assertEqual(candidates, {"paypal": "PayPal", "stripe": "Stripe"})

    def test_union_across_rules(self):
        settings = rules(
            {"currencies": ["USD", "EUR"], "gateways": ["paypal"]},
            {"currencies": ["EUR"], "gateways": ["stripe", "paypal"]},
            {"currencies": ["GBP"], "gateways": ["cod"]},
        )
        gf = GatewayCurrencyFilter(settings, "EUR")
        self.assertEqual(gf.allowed_gateways(), ["paypal", "stripe"])
        self.assertEqual(
            gf.filter_gateways_by_currency(CANDIDATES),
            {"paypal": "PayPal", "stripe": "Stripe"},
        )

    def test_disabled_rules_ignored(self):
        settings = rules(
            {"enabled": False, "currencies": ["USD"], "gateways": ["cod"]},
            {"enabled": "0", "currencies": ["USD"], "gateways": ["stripe"]},
        )
        result = GatewayCurrencyFilter(settings, "USD").filter_gateways_by_currency(CANDIDATES)
        self.assertEqual(result, CANDIDATES)

    def test_allowed_gateway_not_offered(self):
        settings = rules({"currencies": ["USD"], "gateways": ["klarna"]})
        result = GatewayCurrencyFilter(settings, "USD").filter_gateways_by_currency(CANDIDATES)
        self.assertEqual(result, {})

    def test_admin_context_unfiltered(self):
        settings = rules({"currencies": ["USD"], "gateways": ["paypal"]})
        result = GatewayCurrencyFilter(settings, "USD").filter_gateways_by_currency(CANDIDATES, is_admin=True)
        self.assertEqual(result, CANDIDATES)

    def test_currency_case_insensitive(self):
        settings = rules({"currencies": ["usd"], "gateways": ["paypal"]})
        self.assertEqual(GatewayCurrencyFilter(settings, "usd").allowed_gateways(), ["paypal"])

    def test_statistics(self):
        settings = rules({"currencies": ["USD"], "gateways": ["paypal"]}, {"currencies": ["EUR"], "gateways": ["cod"]})
        stats = GatewayCurrencyFilter(settings, "USD").get_statistics(CANDIDATES, {"USD": "US dollar"})
        self.assertEqual(stats, {"total_rules": 2, "active_currencies": 1, "available_gateways": 3})


class GatewayRuleParsingTests(SimpleTestCase):

    def test_legacy_single_currency(self):
        rule = GatewayRule.from_dict({"currency": "EUR", "gateways": ["stripe"]})
        self.assertEqual(rule.currencies, ("EUR",))
        self.assertTrue(rule.enabled)

    def test_non_list_gateways_ignored(self):
        rule = GatewayRule.from_dict({"currencies": ["EUR"], "gateways": "stripe"})
        self.assertEqual(rule.gateways, ())

    def test_malformed_rules_record(self):
        with self.assertLogs("gateways.services.gateway_rules", level="WARNING"):
            settings = PaymentGatewaySettings.from_dict({"rules": "oops"})
        self.assertEqual(settings.rules, ())
        self.assertEqual(PaymentGatewaySettings.from_dict(None).rules, ())
