"""Recurrence frequencies and conversion between them.

Every conversion goes through the annual equivalent of an amount, so
converting items one by one and summing gives the same result as
annualizing the sum and converting once.
"""

from budgie.db.models import FREQUENCIES, InvalidLineItem

PERIODS_PER_YEAR: dict[str, int] = {
    "weekly": 52,
    "fortnightly": 26,
    "monthly": 12,
    "quarterly": 4,
    "annually": 1,
}

FREQUENCY_ALIASES: dict[str, str] = {
    "week": "weekly",
    "fortnight": "fortnightly",
    "biweekly": "fortnightly",
    "month": "monthly",
    "quarter": "quarterly",
    "annual": "annually",
    "year": "annually",
    "yearly": "annually",
}


# View periods offered by the summary screens, and the frequency each maps to.
REPORTING_PERIODS: dict[str, str] = {
    "weekly": "weekly",
    "monthly": "monthly",
    "quarterly": "quarterly",
    "annual": "annually",
}

PERIOD_ALIASES: dict[str, str] = {
    "week": "weekly",
    "month": "monthly",
    "quarter": "quarterly",
    "year": "annual",
    "yearly": "annual",
    "annually": "annual",
}


def is_valid_frequency(value: object) -> bool:
    return isinstance(value, str) and value in FREQUENCIES


def parse_frequency(text: str) -> str:
    """Normalize user input such as ``Yearly`` or ``biweekly`` to a frequency."""
    value = text.strip().lower()
    value = FREQUENCY_ALIASES.get(value, value)
    if value not in FREQUENCIES:
        raise InvalidLineItem(f"Unknown frequency '{text}'. Choose from: {', '.join(FREQUENCIES)}")
    return value


def available_periods(allow_quarterly: bool = False) -> list[str]:
    return [p for p in REPORTING_PERIODS if allow_quarterly or p != "quarterly"]


def parse_period(text: str, allow_quarterly: bool = False) -> str:
    value = text.strip().lower()
    value = PERIOD_ALIASES.get(value, value)
    if value not in available_periods(allow_quarterly):
        raise InvalidLineItem(
            f"Unknown period '{text}'. Choose from: {', '.join(available_periods(allow_quarterly))}"
        )
    return value


def period_frequency(period: str) -> str:
    return REPORTING_PERIODS[period]


def annualize(amount: float, frequency: str) -> float:
    return amount * PERIODS_PER_YEAR[frequency]


def convert(amount: float, from_: str, to: str) -> float:
    if from_ == to:
        return amount
    return annualize(amount, from_) / PERIODS_PER_YEAR[to]
