from unittest.mock import AsyncMock, MagicMock, patch

from budgie.db.models import AggregateResult, LineItem, Summary
from budgie.handlers.summary import cmd_breakdown, cmd_summary, render_breakdown, render_summary
from budgie.services.item_service import create_item


def _summary(balance: float) -> Summary:
    return Summary(
        period="monthly",
        income=AggregateResult(frequency="monthly", totals={"Employment": 5000.0}, total=5000.0),
        expenses=AggregateResult(
            frequency="monthly", totals={"Housing": 2000.0, "Transport": 0.0}, total=2000.0
        ),
        savings=AggregateResult(frequency="monthly", totals={"Savings": 500.0}, total=500.0),
        balance=balance,
        is_surplus=balance >= 0,
    )


def test_render_summary_surplus():
    text = render_summary(_summary(2500.0), "AUD")
    assert "Surplus: A$2,500.00" in text
    assert "Housing: A$2,000.00" in text
    assert "Transport" not in text


def test_render_summary_deficit():
    text = render_summary(_summary(-12.5), "AUD")
    assert "Deficit: -A$12.50" in text


def test_render_breakdown_percentages():
    result = AggregateResult(frequency="annually", totals={"Housing": 750.0, "Pets": 250.0}, total=1000.0)
    text = render_breakdown("expense", "annual", result, "EUR")
    assert "• Housing: €750.00 (75%)" in text
    assert "• Pets: €250.00 (25%)" in text


@patch("budgie.handlers.summary.summary_ring_chart", new_callable=AsyncMock, return_value=None)
async def test_cmd_summary_text_only(mock_chart):
    await create_item("income", LineItem(id=None, owner_id=5, name="Wages", amount=100.0, frequency="weekly"))
    message = MagicMock()
    message.chat.id = 5
    message.answer = AsyncMock()
    command = MagicMock()
    command.args = "week"

    await cmd_summary(message, command)

    text = message.answer.call_args.args[0]
    assert "Budget summary (weekly)" in text
    assert "Total income: A$100.00" in text
    mock_chart.assert_awaited_once()


async def test_cmd_summary_bad_period():
    message = MagicMock()
    message.answer = AsyncMock()
    command = MagicMock()
    command.args = "daily"

    await cmd_summary(message, command)

    assert "Unknown period" in message.answer.call_args.args[0]


def _breakdown_message(chat_id: int = 6):
    message = MagicMock()
    message.chat.id = chat_id
    message.answer = AsyncMock()
    return message


def _breakdown_command(args: str | None):
    command = MagicMock()
    command.args = args
    return command


async def test_cmd_breakdown_usage():
    message = _breakdown_message()
    await cmd_breakdown(message, _breakdown_command(None))
    assert message.answer.call_args.args[0].startswith("Usage: /breakdown")


async def test_cmd_breakdown_unknown_collection():
    message = _breakdown_message()
    await cmd_breakdown(message, _breakdown_command("debts"))
    assert "Unknown collection 'debts'" in message.answer.call_args.args[0]


async def test_cmd_breakdown_no_items():
    message = _breakdown_message()
    await cmd_breakdown(message, _breakdown_command("savings"))
    assert message.answer.call_args.args[0] == "No saving items yet."


@patch("budgie.handlers.summary.category_breakdown_chart", new_callable=AsyncMock, return_value=None)
async def test_cmd_breakdown_default_period_and_title(mock_chart):
    await create_item(
        "expense",
        LineItem(id=None, owner_id=6, name="Rent", amount=1000.0, frequency="monthly", category="Housing"),
    )
    message = _breakdown_message()
    await cmd_breakdown(message, _breakdown_command("expenses"))

    text = message.answer.call_args.args[0]
    assert text.startswith("🧾 Expenses by category (annual)")
    assert "• Housing: A$12,000.00 (100%)" in text
    result, title, cur = mock_chart.call_args.args
    assert title == "Expenses by Category"
    assert result.frequency == "annually"
    assert cur == "AUD"


@patch("budgie.handlers.summary.category_breakdown_chart", new_callable=AsyncMock, return_value=None)
async def test_cmd_breakdown_explicit_period(mock_chart):
    await create_item("income", LineItem(id=None, owner_id=6, name="Wages", amount=700.0, frequency="weekly"))
    message = _breakdown_message()
    await cmd_breakdown(message, _breakdown_command("income month"))

    assert "(monthly)" in message.answer.call_args.args[0]
    assert mock_chart.call_args.args[1] == "Income by Category"
