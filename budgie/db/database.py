import aiosqlite

from budgie.config import settings

COLLECTIONS: dict[str, str] = {
    "income": "income_items",
    "expense": "expense_items",
    "saving": "saving_items",
}

_ITEM_TABLE = """
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER PRIMARY KEY,
    owner_id INTEGER NOT NULL,
    name TEXT NOT NULL CHECK(length(trim(name)) > 0),
    amount REAL NOT NULL CHECK(amount >= 0 AND amount <= 1000000000000),
    frequency TEXT NOT NULL DEFAULT 'monthly'
        CHECK(frequency IN ('weekly', 'fortnightly', 'monthly', 'quarterly', 'annually')),
    category TEXT NOT NULL DEFAULT 'Other' CHECK(length(trim(category)) > 0),
    is_default BOOLEAN NOT NULL DEFAULT 0,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_{table}_owner ON {table}(owner_id);
"""

SCHEMA = "".join(_ITEM_TABLE.format(table=table) for table in COLLECTIONS.values())


class UnknownCollection(ValueError):
    pass


def table_for(collection: str) -> str:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise UnknownCollection(
            f"Unknown collection '{collection}'. Choose from: {', '.join(COLLECTIONS)}"
        ) from None


_db: aiosqlite.Connection | None = None


async def get_db() -> aiosqlite.Connection:
    global _db
    if _db is None:
        _db = await aiosqlite.connect(settings.db_path)
        _db.row_factory = aiosqlite.Row
        await _db.execute("PRAGMA journal_mode=WAL")
    return _db


async def close_db():
    global _db
    if _db is not None:
        await _db.close()
        _db = None


async def init_db():
    db = await get_db()
    await db.executescript(SCHEMA)
    await db.commit()
