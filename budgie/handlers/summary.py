import logging
import time
from pathlib import Path

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import FSInputFile, Message

from budgie.charts import category_breakdown_chart, summary_ring_chart
from budgie.config import settings
from budgie.currency import format_amount
from budgie.db.database import UnknownCollection
from budgie.db.models import AggregateResult, InvalidLineItem, Summary
from budgie.frequency import parse_period
from budgie.handlers.items import COLLECTION_TITLES, parse_collection
from budgie.services.summary_service import build_summary, collection_breakdown

logger = logging.getLogger(__name__)
router = Router()


def render_summary(summary: Summary, cur: str) -> str:
    label = "Surplus" if summary.is_surplus else "Deficit"
    marker = "🟢" if summary.is_surplus else "🔴"
    lines = [
        f"📊 Budget summary ({summary.period})\n",
        f"Total income: {format_amount(summary.income.total, cur)}",
        f"Total expenses: {format_amount(summary.expenses.total, cur)}",
        f"Total savings: {format_amount(summary.savings.total, cur)}",
        f"\n{marker} {label}: {format_amount(summary.balance, cur)}",
    ]
    spending = [(name, total) for name, total in summary.expenses.totals.items() if total > 0]
    if spending:
        lines.append("\nExpenses by category:")
        for name, total in spending:
            lines.append(f"  • {name}: {format_amount(total, cur)}")
    return "\n".join(lines)


def render_breakdown(collection: str, period: str, result: AggregateResult, cur: str) -> str:
    lines = [f"{COLLECTION_TITLES[collection]} by category ({period})\n"]
    for name, total in result.totals.items():
        pct = (total / result.total * 100) if result.total > 0 else 0
        lines.append(f"• {name}: {format_amount(total, cur)} ({pct:.0f}%)")
    lines.append(f"\nTotal: {format_amount(result.total, cur)}")
    return "\n".join(lines)


async def _answer_with_chart(message: Message, chart_path: str | None, text: str) -> None:
    if chart_path:
        try:
            await message.answer_photo(FSInputFile(chart_path), caption=text)
        finally:
            Path(chart_path).unlink(missing_ok=True)
    else:
        await message.answer(text)


@router.message(Command("summary"))
async def cmd_summary(message: Message, command: CommandObject):
    try:
        period = parse_period(command.args or settings.default_period, settings.quarterly_reporting)
    except InvalidLineItem as e:
        await message.answer(str(e))
        return

    started = time.monotonic()
    summary = await build_summary(message.chat.id, period)
    logger.debug(
        "Built summary",
        extra={
            "chat_id": message.chat.id,
            "handler": "summary",
            "latency_ms": round((time.monotonic() - started) * 1000, 1),
        },
    )

    text = render_summary(summary, settings.currency)
    chart_path = await summary_ring_chart(summary, settings.currency)
    await _answer_with_chart(message, chart_path, text)


@router.message(Command("breakdown"))
async def cmd_breakdown(message: Message, command: CommandObject):
    parts = command.args.split() if command.args else []
    if not parts:
        await message.answer("Usage: /breakdown <income|expense|saving> [weekly|monthly|annual]")
        return
    try:
        collection = parse_collection(parts[0])
        period = parse_period(parts[1] if len(parts) > 1 else settings.default_period, settings.quarterly_reporting)
    except (InvalidLineItem, UnknownCollection) as e:
        await message.answer(str(e))
        return

    result = await collection_breakdown(message.chat.id, collection, period)
    if not result.totals:
        await message.answer(f"No {collection} items yet.")
        return

    text = render_breakdown(collection, period, result, settings.currency)
    title = f"{COLLECTION_TITLES[collection].split(' ', 1)[1]} by Category"
    chart_path = await category_breakdown_chart(result, title, settings.currency)
    await _answer_with_chart(message, chart_path, text)
