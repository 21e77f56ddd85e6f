from budgie.config import settings

CURRENCY_SYMBOLS: dict[str, str] = {
    "AUD": "A$",
    "NZD": "NZ$",
    "USD": "$",
    "CAD": "C$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "SGD": "S$",
    "HKD": "HK$",
    "CHF": "CHF",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr",
    "ZAR": "R",
}

PREFIX_SYMBOLS = {"A$", "NZ$", "$", "C$", "€", "£", "¥", "₹", "S$", "HK$", "R"}


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code, code)


def format_amount(amount: float, currency_code: str | None = None) -> str:
    """Render an amount with two decimals. Negative values keep their sign in front."""
    sym = currency_symbol(currency_code or settings.currency)
    sign = "-" if amount < 0 and round(abs(amount), 2) != 0 else ""
    value = f"{abs(amount):,.2f}"
    if sym in PREFIX_SYMBOLS:
        return f"{sign}{sym}{value}"
    return f"{sign}{value} {sym}"
