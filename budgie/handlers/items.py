import logging
import math
from dataclasses import replace

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from budgie.aggregation import aggregate
from budgie.categories import group_by_category, known_categories
from budgie.config import settings
from budgie.currency import format_amount
from budgie.db.database import UnknownCollection, table_for
from budgie.db.models import MAX_AMOUNT, InvalidLineItem, LineItem
from budgie.frequency import convert, parse_frequency, parse_period, period_frequency
from budgie.services.item_service import (
    create_item,
    delete_item,
    get_item,
    list_items,
    update_item,
)

logger = logging.getLogger(__name__)
router = Router()

COLLECTION_ALIASES: dict[str, str] = {
    "incomes": "income",
    "expenses": "expense",
    "spending": "expense",
    "savings": "saving",
}

COLLECTION_TITLES: dict[str, str] = {
    "income": "💵 Income",
    "expense": "🧾 Expenses",
    "saving": "🏦 Savings",
}

ADD_USAGE = (
    "Usage: /add <income|expense|saving> <amount> <frequency> <name> [| category]\n"
    "Example: /add expense 50 weekly Coffee | Food & Groceries"
)
EDIT_USAGE = (
    "Usage: /edit <income|expense|saving> <id> <amount> [frequency [new name]] [| category]\n"
    "Example: /edit expense 12 60 monthly Gym membership"
)
REMOVE_USAGE = "Usage: /remove <income|expense|saving> <id>"


def parse_collection(text: str) -> str:
    value = text.strip().lower()
    value = COLLECTION_ALIASES.get(value, value)
    table_for(value)
    return value


def _parse_amount(text: str) -> float:
    try:
        amount = float(text.replace(",", "").lstrip("$"))
    except ValueError:
        raise InvalidLineItem(f"Invalid amount '{text}'") from None
    if not math.isfinite(amount) or amount < 0 or amount > MAX_AMOUNT:
        raise InvalidLineItem(f"Amount must be between 0 and {MAX_AMOUNT:,}")
    return amount


def _split_category(args: str) -> tuple[str, str | None]:
    if "|" not in args:
        return args, None
    head, category = args.split("|", 1)
    return head, category.strip()


def parse_add_args(args: str, owner_id: int) -> tuple[str, LineItem]:
    head, category = _split_category(args)
    parts = head.split(maxsplit=3)
    if len(parts) < 4:
        raise InvalidLineItem(ADD_USAGE)
    collection = parse_collection(parts[0])
    item = LineItem(
        id=None,
        owner_id=owner_id,
        name=parts[3],
        amount=_parse_amount(parts[1]),
        frequency=parse_frequency(parts[2]),
        category=category or "",
    )
    return collection, item


def parse_edit_args(args: str) -> tuple[str, int, dict]:
    head, category = _split_category(args)
    parts = head.split(maxsplit=4)
    if len(parts) < 3:
        raise InvalidLineItem(EDIT_USAGE)
    collection = parse_collection(parts[0])
    try:
        item_id = int(parts[1])
    except ValueError:
        raise InvalidLineItem(f"Invalid id '{parts[1]}'") from None
    # an edited template item becomes the user's own
    changes: dict = {"amount": _parse_amount(parts[2]), "is_default": False}
    if len(parts) > 3:
        changes["frequency"] = parse_frequency(parts[3])
    if len(parts) > 4:
        changes["name"] = parts[4]
    if category is not None:
        changes["category"] = category
    return collection, item_id, changes


def render_items(collection: str, items: list[LineItem], period: str, cur: str) -> str:
    target = period_frequency(period)
    groups = group_by_category(items, known_categories(collection))
    lines = [f"{COLLECTION_TITLES[collection]} ({period})"]
    for category, members in groups.items():
        lines.append(f"\n{category} — {format_amount(aggregate(members, target), cur)}")
        for item in members:
            per_period = convert(item.amount, item.frequency, target)
            lines.append(
                f"  #{item.id} {item.name}: {format_amount(item.amount, cur)} {item.frequency}"
                f" → {format_amount(per_period, cur)}"
            )
    lines.append(f"\nTotal: {format_amount(aggregate(items, target), cur)}/{period}")
    return "\n".join(lines)


async def _show_collection(message: Message, command: CommandObject, collection: str) -> None:
    try:
        period = parse_period(command.args or settings.default_period, settings.quarterly_reporting)
    except InvalidLineItem as e:
        await message.answer(str(e))
        return

    items = await list_items(message.chat.id, collection)
    if not items:
        await message.answer(f"No {collection} items yet. Use /add to create one, or /start to load defaults.")
        return
    await message.answer(render_items(collection, items, period, settings.currency))


@router.message(Command("income"))
async def cmd_income(message: Message, command: CommandObject):
    await _show_collection(message, command, "income")


@router.message(Command("expenses"))
async def cmd_expenses(message: Message, command: CommandObject):
    await _show_collection(message, command, "expense")


@router.message(Command("savings"))
async def cmd_savings(message: Message, command: CommandObject):
    await _show_collection(message, command, "saving")


@router.message(Command("add"))
async def cmd_add(message: Message, command: CommandObject):
    if not command.args:
        await message.answer(ADD_USAGE)
        return
    try:
        collection, item = parse_add_args(command.args, message.chat.id)
    except (InvalidLineItem, UnknownCollection) as e:
        await message.answer(str(e))
        return

    item_id = await create_item(collection, item)
    logger.info("Added item", extra={"chat_id": message.chat.id, "collection": collection, "handler": "add"})
    await message.answer(
        f"Added #{item_id} {item.name}: {format_amount(item.amount, settings.currency)} "
        f"{item.frequency} ({item.category})"
    )


@router.message(Command("edit"))
async def cmd_edit(message: Message, command: CommandObject):
    if not command.args:
        await message.answer(EDIT_USAGE)
        return
    try:
        collection, item_id, changes = parse_edit_args(command.args)
    except (InvalidLineItem, UnknownCollection) as e:
        await message.answer(str(e))
        return

    item = await get_item(message.chat.id, collection, item_id)
    if item is None:
        await message.answer(f"No {collection} item #{item_id}.")
        return

    try:
        updated = replace(item, **changes)
    except InvalidLineItem as e:
        await message.answer(str(e))
        return

    if await update_item(collection, updated):
        await message.answer(
            f"Updated #{item_id} {updated.name}: {format_amount(updated.amount, settings.currency)} "
            f"{updated.frequency} ({updated.category})"
        )
    else:
        await message.answer(f"Couldn't update {collection} item #{item_id}.")


@router.message(Command("remove"))
async def cmd_remove(message: Message, command: CommandObject):
    parts = command.args.split() if command.args else []
    if len(parts) != 2:
        await message.answer(REMOVE_USAGE)
        return
    try:
        collection = parse_collection(parts[0])
        item_id = int(parts[1])
    except UnknownCollection as e:
        await message.answer(str(e))
        return
    except ValueError:
        await message.answer(REMOVE_USAGE)
        return

    if await delete_item(message.chat.id, collection, item_id):
        await message.answer(f"Removed {collection} item #{item_id}.")
    else:
        await message.answer(f"No {collection} item #{item_id}.")
