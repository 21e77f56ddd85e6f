from budgie.categories import (
    EXPENSE_TEMPLATES,
    group_by_category,
    known_categories,
    template_items,
)
from budgie.db.models import LineItem


def _item(name: str, category: str) -> LineItem:
    return LineItem(id=None, owner_id=1, name=name, amount=10.0, frequency="weekly", category=category)


def test_known_categories_end_with_other():
    cats = known_categories("expense")
    assert cats[0] == "Housing"
    assert cats[-1] == "Other"
    assert cats.count("Other") == 1


def test_saving_templates_already_have_other():
    cats = known_categories("saving")
    assert cats == ["Savings", "Investments", "Other"]


def test_known_categories_unknown_collection():
    assert known_categories("nope") == ["Other"]


def test_template_items_are_defaults():
    items = template_items("expense", owner_id=7)
    assert len(items) == sum(len(entries) for _, entries in EXPENSE_TEMPLATES)
    assert all(i.is_default and i.amount == 0 and i.owner_id == 7 for i in items)
    assert items[0].name == "Mortgage & rent"
    assert items[0].category == "Housing"


def test_group_known_first_then_first_appearance():
    items = [
        _item("Pizza", "Takeaway"),
        _item("Petrol", "Transport"),
        _item("Misc", ""),
        _item("Vet", "Pets"),
        _item("Rent", "Housing"),
        _item("Kebab", "Takeaway"),
    ]
    groups = group_by_category(items, known_categories("expense"))
    assert list(groups) == ["Housing", "Transport", "Other", "Takeaway", "Pets"]
    assert [i.name for i in groups["Takeaway"]] == ["Pizza", "Kebab"]


def test_group_omits_empty_buckets_and_keeps_every_item():
    items = [_item("A", "Housing"), _item("B", "Custom"), _item("C", "Housing")]
    groups = group_by_category(items, known_categories("expense"))
    assert all(groups.values())
    flattened = [i for members in groups.values() for i in members]
    assert sorted(i.name for i in flattened) == ["A", "B", "C"]


def test_group_empty():
    assert group_by_category([], known_categories("income")) == {}
