import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from budgie.config import settings
from budgie.db.database import COLLECTIONS
from budgie.frequency import available_periods
from budgie.services.item_service import seed_defaults

logger = logging.getLogger(__name__)
router = Router()


@router.message(Command("start"))
async def cmd_start(message: Message):
    added = 0
    for collection in COLLECTIONS:
        added += await seed_defaults(message.chat.id, collection)

    intro = "Welcome to Budgie — your household budget planner!\n\n"
    if added:
        intro += (
            f"I've loaded {added} common income, expense and saving items with a zero amount. "
            "Set the ones that apply to you with /edit.\n\n"
        )
    await message.answer(
        intro + "Record what comes in and goes out, and I'll tell you whether you're in surplus.\n\n"
        "Type /help for all commands."
    )


@router.message(Command("help"))
async def cmd_help(message: Message):
    periods = "|".join(available_periods(settings.quarterly_reporting))
    await message.answer(
        "Items:\n"
        f"  /income [{periods}] — list income\n"
        f"  /expenses [{periods}] — list expenses\n"
        f"  /savings [{periods}] — list savings\n"
        "  /add expense 50 weekly Coffee | Food & Groceries\n"
        "  /edit expense <id> 60 [frequency [new name]] [| category]\n"
        "  /remove expense <id>\n\n"
        "Reports:\n"
        f"  /summary [{periods}] — totals, balance and chart\n"
        f"  /breakdown <income|expense|saving> [{periods}] — totals by category\n\n"
        "Frequencies: weekly, fortnightly, monthly, quarterly, annually"
    )
