from collections.abc import Iterable

from budgie.categories import group_by_category
from budgie.db.models import AggregateResult, LineItem
from budgie.frequency import convert


def aggregate(items: Iterable[LineItem], target: str) -> float:
    """Total of all items expressed at the ``target`` frequency."""
    return sum((convert(item.amount, item.frequency, target) for item in items), 0.0)


def category_totals(items: Iterable[LineItem], target: str, known: Iterable[str] = ()) -> AggregateResult:
    groups = group_by_category(items, known)
    totals = {category: aggregate(members, target) for category, members in groups.items()}
    return AggregateResult(frequency=target, totals=totals, total=sum(totals.values(), 0.0))


def balance(total_income: float, total_expenses: float, total_savings: float) -> float:
    return total_income - total_expenses - total_savings


def is_surplus(value: float) -> bool:
    # zero counts as a surplus
    return value >= 0
