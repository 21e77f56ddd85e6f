import logging

from budgie.categories import template_items
from budgie.db.database import get_db, table_for
from budgie.db.models import LineItem

logger = logging.getLogger(__name__)


async def list_items(owner_id: int, collection: str) -> list[LineItem]:
    table = table_for(collection)
    db = await get_db()
    cursor = await db.execute(
        f"SELECT * FROM {table} WHERE owner_id = ? ORDER BY id",
        (owner_id,),
    )
    rows = await cursor.fetchall()
    return [LineItem.from_row(row) for row in rows]


async def get_item(owner_id: int, collection: str, item_id: int) -> LineItem | None:
    table = table_for(collection)
    db = await get_db()
    cursor = await db.execute(
        f"SELECT * FROM {table} WHERE owner_id = ? AND id = ?",
        (owner_id, item_id),
    )
    row = await cursor.fetchone()
    return LineItem.from_row(row) if row else None


async def create_item(collection: str, item: LineItem) -> int:
    table = table_for(collection)
    db = await get_db()
    cursor = await db.execute(
        f"""INSERT INTO {table} (owner_id, name, amount, frequency, category, is_default)
        VALUES (?, ?, ?, ?, ?, ?)""",
        (item.owner_id, item.name, item.amount, item.frequency, item.category, item.is_default),
    )
    await db.commit()
    assert cursor.lastrowid is not None
    logger.debug("Created %s item %d", collection, cursor.lastrowid, extra={"owner_id": item.owner_id})
    return cursor.lastrowid


async def update_item(collection: str, item: LineItem) -> bool:
    """Replace every mutable field of a stored item. The id never changes."""
    if item.id is None:
        return False
    table = table_for(collection)
    db = await get_db()
    cursor = await db.execute(
        f"""UPDATE {table}
        SET name = ?, amount = ?, frequency = ?, category = ?, is_default = ?
        WHERE id = ? AND owner_id = ?""",
        (item.name, item.amount, item.frequency, item.category, item.is_default, item.id, item.owner_id),
    )
    await db.commit()
    return cursor.rowcount > 0


async def delete_item(owner_id: int, collection: str, item_id: int) -> bool:
    table = table_for(collection)
    db = await get_db()
    cursor = await db.execute(
        f"DELETE FROM {table} WHERE id = ? AND owner_id = ?",
        (item_id, owner_id),
    )
    await db.commit()
    return cursor.rowcount > 0


async def seed_defaults(owner_id: int, collection: str) -> int:
    """Insert template items the owner doesn't have yet. Returns how many were added."""
    table = table_for(collection)
    db = await get_db()
    cursor = await db.execute(f"SELECT name FROM {table} WHERE owner_id = ?", (owner_id,))
    existing = {row[0] for row in await cursor.fetchall()}

    missing = [item for item in template_items(collection, owner_id) if item.name not in existing]
    if not missing:
        return 0
    await db.executemany(
        f"""INSERT INTO {table} (owner_id, name, amount, frequency, category, is_default)
        VALUES (?, ?, ?, ?, ?, ?)""",
        [(i.owner_id, i.name, i.amount, i.frequency, i.category, i.is_default) for i in missing],
    )
    await db.commit()
    logger.info(
        "Seeded %d default items",
        len(missing),
        extra={"owner_id": owner_id, "collection": collection},
    )
    return len(missing)
