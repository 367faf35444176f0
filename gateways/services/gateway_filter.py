"""
gateway_filter.py
-----------------
Limits the payment gateways offered at checkout to those allowed for the
shopper's active currency.

- Allowed set = union of 'gateways' over enabled rules listing the currency.
- No matching rule (empty union) means no restriction: candidates pass through.
- Admin screens always see every gateway.
"""

from django.conf import settings as django_settings

from .gateway_rules import PaymentGatewaySettings


def get_available_gateways() -> dict:
    """All gateways the host offers (id -> title), before any filtering."""
    return dict(getattr(django_settings, "PAYMENT_GATEWAYS", {}))


class GatewayCurrencyFilter:
    def __init__(self, settings: PaymentGatewaySettings, current_currency: str):
        self.settings = settings
        self.current_currency = (current_currency or "").strip().upper()

    def allowed_gateways(self) -> list:
        allowed = []
        for rule in self.settings.rules:
            if not rule.matches(self.current_currency):
                continue
            for gateway_id in rule.gateways:
                if gateway_id not in allowed:
                    allowed.append(gateway_id)
        return allowed

    def filter_gateways_by_currency(self, available_gateways: dict, is_admin: bool = False) -> dict:
        """
        Args:
            available_gateways: mapping gateway id -> gateway (any value)
            is_admin: True when called from an administrative screen

        Returns:
            dict: a new mapping; the input is never modified
        """
        if is_admin:
            return available_gateways

        allowed = self.allowed_gateways()
        if not allowed:
            return available_gateways

        return {gid: gw for gid, gw in available_gateways.items() if gid in allowed}

    def get_statistics(self, available_gateways=None, active_currencies=None) -> dict:
        return {
            "total_rules": len(self.settings.rules),
            "active_currencies": len(active_currencies or ()),
            "available_gateways": len(available_gateways or ()),
        }
