# goalplanner/utils/currency.py
#
# Display-only currency helpers. Amounts are entered and computed in INR;
# conversion is a plain multiplicative exchange rate.

from types import MappingProxyType
from typing import NamedTuple, Tuple


class CurrencySpec(NamedTuple):
    code: str
    symbol: str
    name: str
    exchange_rate: float  # units of this currency per 1 INR
    decimal_places: int
    # (threshold, suffix), largest first
    large_number_format: Tuple[Tuple[float, str], ...]


CURRENCIES = MappingProxyType({
    "INR": CurrencySpec("INR", "₹", "Indian Rupee", 1.0, 0,
                        ((10000000, "Cr"), (100000, "L"))),
    "USD": CurrencySpec("USD", "$", "US Dollar", 0.012, 2,
                        ((1000000000, "B"), (1000000, "M"), (1000, "K"))),
    "EUR": CurrencySpec("EUR", "€", "Euro", 0.011, 2,
                        ((1000000000, "B"), (1000000, "M"), (1000, "K"))),
    "GBP": CurrencySpec("GBP", "£", "British Pound", 0.0095, 2,
                        ((1000000000, "B"), (1000000, "M"), (1000, "K"))),
    "JPY": CurrencySpec("JPY", "¥", "Japanese Yen", 1.8, 0,
                        ((100000000, "億"), (10000, "万"))),
    "CNY": CurrencySpec("CNY", "元", "Chinese Yuan", 0.087, 2,
                        ((100000000, "亿"), (10000, "万"))),
    "AED": CurrencySpec("AED", "د.إ", "UAE Dirham", 0.044, 2,
                        ((1000000, "M"), (1000, "K"))),
})

DEFAULT_CURRENCY = "INR"


def get_currency(code: str = None) -> CurrencySpec:
    return CURRENCIES.get(code or DEFAULT_CURRENCY, CURRENCIES[DEFAULT_CURRENCY])


def convert_currency(amount: float, from_currency: str = "INR", to_currency: str = None) -> float:
    """Convert through INR using the configured exchange rates."""
    to_currency = to_currency or DEFAULT_CURRENCY
    if from_currency == to_currency:
        return amount
    inr_amount = amount / get_currency(from_currency).exchange_rate
    return inr_amount * get_currency(to_currency).exchange_rate


def format_currency(amount: float, currency_code: str = None) -> str:
    """Short display form: ₹12.5L, ₹1.2Cr, $4.5K, ₹8,500."""
    spec = get_currency(currency_code)
    value = round(float(amount or 0))
    sign = "-" if value < 0 else ""
    value = abs(value)

    for threshold, suffix in spec.large_number_format:
        if value >= threshold:
            return f"{sign}{spec.symbol}{value / threshold:.1f}{suffix}"

    if value >= 1000:
        return f"{sign}{spec.symbol}{value:,}"
    return f"{sign}{spec.symbol}{value}"


def format_percentage(value: float) -> str:
    return f"{float(value or 0):.1f}%"


def format_years(years: float) -> str:
    return f"{float(years or 0):.1f}y"
