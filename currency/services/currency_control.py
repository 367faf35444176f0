"""
currency_control.py
-------------------
Store currencies and the shopper's active currency.

Settings record (option 'cst_currency_settings'):
    {
      "default_currency": "USD",
      "currencies": [{"code": "EUR", "symbol": "€", "rate": "0.92"}, ...]
    }

The admin rate table posts rows as {select, code, symbol, rate}; select is a
currency code or "custom", in which case the typed code is used instead.
normalize_currency_rows() turns those rows into the stored shape.

Active currency resolution order: ?currency= query param, session, cookie,
then the default. Only available currencies are accepted.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from django.conf import settings as django_settings

from configmgr.options import get_option, update_option

logger = logging.getLogger(__name__)

OPTION_NAME = "cst_currency_settings"
SESSION_KEY = "currency"
COOKIE_NAME = "currency"
QUERY_PARAM = "currency"
CUSTOM_SELECT = "custom"

# Display names for common ISO 4217 codes; unknown codes display as the code.
CURRENCY_NAMES = {
    "AUD": "Australian dollar",
    "BRL": "Brazilian real",
    "CAD": "Canadian dollar",
    "CHF": "Swiss franc",
    "CNY": "Chinese yuan",
    "DKK": "Danish krone",
    "EUR": "Euro",
    "GBP": "Pound sterling",
    "HKD": "Hong Kong dollar",
    "INR": "Indian rupee",
    "JPY": "Japanese yen",
    "MXN": "Mexican peso",
    "NOK": "Norwegian krone",
    "NZD": "New Zealand dollar",
    "PLN": "Polish złoty",
    "SEK": "Swedish krona",
    "SGD": "Singapore dollar",
    "USD": "United States (US) dollar",
    "ZAR": "South African rand",
}


def _clean_code(value) -> str:
    return str(value or "").strip().upper()


@dataclass(frozen=True)
class CurrencyRate:
    code: str
    symbol: str = ""
    rate: Decimal = Decimal("1")

    def to_dict(self) -> dict:
        return {"code": self.code, "symbol": self.symbol, "rate": str(self.rate)}


def _parse_rate(value):
    try:
        rate = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not rate.is_finite() or rate <= 0:
        return None
    return rate


def normalize_currency_rows(rows) -> list:
    """
    Convert submitted/stored rate rows into CurrencyRate objects.
    Rows without a code or with a non-positive rate are dropped; later rows win
    for duplicate codes.
    """
    if isinstance(rows, dict):
        # form posts arrive keyed by row index
        rows = [rows[k] for k in sorted(rows, key=lambda k: int(k) if str(k).isdigit() else 0)]

    by_code = {}
    for row in rows or []:
        if not isinstance(row, dict):
            continue
        select = str(row.get("select") or "").strip()
        if select and select != CUSTOM_SELECT:
            code = _clean_code(select)
        else:
            code = _clean_code(row.get("code"))
        if not code:
            continue
        rate = _parse_rate(row.get("rate", "1"))
        if rate is None:
            logger.warning("Dropping currency row %s with invalid rate %r", code, row.get("rate"))
            continue
        by_code[code] = CurrencyRate(code=code, symbol=str(row.get("symbol") or "").strip(), rate=rate)
    return list(by_code.values())


@dataclass(frozen=True)
class CurrencySettings:
    default_currency: str = ""
    currencies: tuple = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data) -> "CurrencySettings":
        data = data or {}
        default = _clean_code(data.get("default_currency")) or _clean_code(
            getattr(django_settings, "DEFAULT_CURRENCY", "USD")
        )
        return cls(
            default_currency=default,
            currencies=tuple(normalize_currency_rows(data.get("currencies"))),
        )

    def to_dict(self) -> dict:
        return {
            "default_currency": self.default_currency,
            "currencies": [c.to_dict() for c in self.currencies],
        }


def load_currency_settings() -> CurrencySettings:
    return CurrencySettings.from_dict(get_option(OPTION_NAME, {}))


def save_currency_settings(settings: CurrencySettings) -> bool:
    return update_option(OPTION_NAME, settings.to_dict())


class CurrencyControl:
    def __init__(self, settings: CurrencySettings):
        self.settings = settings

    def get_available_currencies(self) -> list:
        codes = [self.settings.default_currency]
        for rate in self.settings.currencies:
            if rate.code not in codes:
                codes.append(rate.code)
        return codes

    def get_active_currencies(self) -> dict:
        return {code: CURRENCY_NAMES.get(code, code) for code in self.get_available_currencies()}

    def get_current_currency(self, request=None) -> str:
        available = self.get_available_currencies()
        if request is None:
            return self.settings.default_currency

        requested = _clean_code(getattr(request, "GET", {}).get(QUERY_PARAM))
        if requested in available:
            session = getattr(request, "session", None)
            if session is not None:
                session[SESSION_KEY] = requested
            return requested

        session = getattr(request, "session", None)
        if session is not None:
            stored = _clean_code(session.get(SESSION_KEY))
            if stored in available:
                return stored

        cookie = _clean_code(getattr(request, "COOKIES", {}).get(COOKIE_NAME))
        if cookie in available:
            return cookie

        return self.settings.default_currency


def current_currency_for(request) -> str:
    """Active currency for 'request' using the stored currency settings."""
    return CurrencyControl(load_currency_settings()).get_current_currency(request)
