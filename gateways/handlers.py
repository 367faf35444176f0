# gateways/handlers.py
#
# Purpose:
# - payment.available_gateways handler: drops gateways not allowed for the
#   shopper's active currency. Registered late (priority 999) so it sees the
#   final candidate list.
#
import logging

from currency.services.currency_control import current_currency_for
from storefront.hooks import PAYMENT_AVAILABLE_GATEWAYS, EventHandler
from .services.gateway_filter import GatewayCurrencyFilter
from .services.gateway_rules import load_gateway_settings

logger = logging.getLogger(__name__)


class AvailableGatewaysHandler(EventHandler):
    def __init__(self, settings_loader=load_gateway_settings, currency_resolver=current_currency_for):
        self.settings_loader = settings_loader
        self.currency_resolver = currency_resolver

    def on_event(self, context):
        candidates = context.value or {}
        if context.is_admin:
            return candidates

        currency = self.currency_resolver(context.request)
        gateway_filter = GatewayCurrencyFilter(self.settings_loader(), currency)
        filtered = gateway_filter.filter_gateways_by_currency(candidates)
        if len(filtered) != len(candidates):
            logger.info(
                "Gateways for %s limited to %s",
                currency,
                ", ".join(filtered) or "(none)",
            )
        return filtered


def register_hooks(registry, **handler_kwargs):
    registry.register(PAYMENT_AVAILABLE_GATEWAYS, AvailableGatewaysHandler(**handler_kwargs), priority=999)
