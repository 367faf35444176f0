"""
gateway_rules.py
----------------
Currency -> payment gateway rules (option 'ser_payment_gateway_settings').

Stored shape:
    {"rules": [{"enabled": true, "currencies": ["USD"], "gateways": ["paypal"]}]}

Older records carry a single "currency" string per rule; it is read as a
one-element currency list. A rule without "enabled" counts as enabled.
"""

import logging
from dataclasses import dataclass, field

from configmgr.options import get_option, update_option

logger = logging.getLogger(__name__)

OPTION_NAME = "ser_payment_gateway_settings"


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _as_list(values) -> tuple:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    seen = []
    for v in values:
        v = str(v).strip()
        if v and v not in seen:
            seen.append(v)
    return tuple(seen)


@dataclass(frozen=True)
class GatewayRule:
    enabled: bool = True
    currencies: tuple = field(default_factory=tuple)
    gateways: tuple = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data) -> "GatewayRule":
        if "currencies" in data:
            currencies = data.get("currencies")
        else:
            currencies = data.get("currency")
        gateways = data.get("gateways")
        if not isinstance(gateways, (list, tuple)):
            gateways = ()
        return cls(
            enabled=_as_bool(data.get("enabled", True)),
            currencies=tuple(c.upper() for c in _as_list(currencies)),
            gateways=_as_list(gateways),
        )

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "currencies": list(self.currencies),
            "gateways": list(self.gateways),
        }

    def matches(self, currency: str) -> bool:
        return self.enabled and currency in self.currencies


@dataclass(frozen=True)
class PaymentGatewaySettings:
    rules: tuple = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data) -> "PaymentGatewaySettings":
        rules = (data or {}).get("rules")
        if not isinstance(rules, (list, tuple)):
            if rules:
                logger.warning("Ignoring malformed gateway rules: %r", rules)
            return cls()
        return cls(rules=tuple(GatewayRule.from_dict(r) for r in rules if isinstance(r, dict)))

    def to_dict(self) -> dict:
        return {"rules": [r.to_dict() for r in self.rules]}


def load_gateway_settings() -> PaymentGatewaySettings:
    return PaymentGatewaySettings.from_dict(get_option(OPTION_NAME, {"rules": []}))


def save_gateway_settings(settings: PaymentGatewaySettings) -> bool:
    changed = update_option(OPTION_NAME, settings.to_dict())
    if changed:
        logger.info("Payment gateway rules updated (%d rules)", len(settings.rules))
    return changed
