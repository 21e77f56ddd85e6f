from budgie.aggregation import balance, category_totals, is_surplus
from budgie.categories import known_categories
from budgie.db.models import AggregateResult, Summary
from budgie.frequency import period_frequency
from budgie.services.item_service import list_items


async def collection_breakdown(owner_id: int, collection: str, period: str) -> AggregateResult:
    items = await list_items(owner_id, collection)
    return category_totals(items, period_frequency(period), known_categories(collection))


async def build_summary(owner_id: int, period: str) -> Summary:
    """Recompute income, expense and saving totals for one owner from scratch."""
    income = await collection_breakdown(owner_id, "income", period)
    expenses = await collection_breakdown(owner_id, "expense", period)
    savings = await collection_breakdown(owner_id, "saving", period)
    value = balance(income.total, expenses.total, savings.total)
    return Summary(
        period=period,
        income=income,
        expenses=expenses,
        savings=savings,
        balance=value,
        is_surplus=is_surplus(value),
    )
