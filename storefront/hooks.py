"""
hooks.py
--------
Event-dispatch table between the storefront (host) and the control apps.

The storefront fires named events; apps register handlers from their
AppConfig.ready(). A handler is any object with on_event(context) returning the
decision for that event. For filter-style events the decision is the new
'value'; action-style handlers record side effects on the context (errors,
notices, output, redirect) and return context.value unchanged.

Handlers run in ascending priority, registration order within a priority.
"""

import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Event names
CHECKOUT_VALIDATE = "checkout.validate"
CHECKOUT_PROCESS = "checkout.process"
PRODUCT_IS_PURCHASABLE = "product.is_purchasable"
PRODUCT_SUMMARY = "product.summary"
PAGE_REDIRECT = "page.redirect"
PAYMENT_AVAILABLE_GATEWAYS = "payment.available_gateways"

PAGE_CHECKOUT = "checkout"
PAGE_PRODUCT = "product"

DEFAULT_PRIORITY = 10


@dataclass
class EventContext:
    request: object = None
    value: object = None
    product_id: object = None
    page: str = ""
    is_admin: bool = False
    errors: dict = field(default_factory=dict)
    notices: list = field(default_factory=list)
    output: list = field(default_factory=list)
    redirect_url: str | None = None

    def add_error(self, code: str, message: str) -> None:
        self.errors.setdefault(code, []).append(message)

    def add_notice(self, message: str, level: str = "notice") -> None:
        self.notices.append((level, message))

    def error_messages(self) -> list:
        messages = [m for level, m in self.notices if level == "error"]
        for code_messages in self.errors.values():
            messages.extend(code_messages)
        return messages


class EventHandler:
    """Base handler: passes the current value through."""

    def on_event(self, context: EventContext):
        return context.value


class HookRegistry:
    def __init__(self):
        self._handlers = defaultdict(list)
        self._seq = itertools.count()

    def register(self, event: str, handler, priority: int = DEFAULT_PRIORITY):
        if not callable(getattr(handler, "on_event", None)):
            raise TypeError(f"{handler!r} has no on_event(context) method")
        self._handlers[event].append((priority, next(self._seq), handler))
        self._handlers[event].sort(key=lambda entry: entry[:2])
        return handler

    def handlers(self, event: str) -> list:
        return [handler for _, _, handler in self._handlers.get(event, [])]

    def dispatch(self, event: str, context: EventContext):
        """
        Run every handler for 'event' and return the final context.value.
        """
        for handler in self.handlers(event):
            context.value = handler.on_event(context)
        logger.debug("Dispatched %s -> %r", event, context.value)
        return context.value


# Project-wide table filled in by AppConfig.ready()
registry = HookRegistry()
