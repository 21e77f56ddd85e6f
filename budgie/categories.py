from collections.abc import Iterable

from budgie.db.models import DEFAULT_CATEGORY, LineItem

Template = list[tuple[str, list[tuple[str, str]]]]

INCOME_TEMPLATES: Template = [
    (
        "Employment",
        [
            ("Salary", "fortnightly"),
            ("Wages", "weekly"),
            ("Overtime", "fortnightly"),
            ("Bonuses", "annually"),
        ],
    ),
    ("Investments", [("Rental Income", "monthly")]),
    (
        "Government Benefits",
        [
            ("Family Tax Benefit", "fortnightly"),
            ("JobSeeker", "fortnightly"),
            ("OOHC payment", "fortnightly"),
        ],
    ),
    ("Business", [("Freelance Income", "monthly")]),
]

EXPENSE_TEMPLATES: Template = [
    (
        "Housing",
        [
            ("Mortgage & rent", "monthly"),
            ("Council rates", "quarterly"),
            ("Electricity", "quarterly"),
            ("Gas", "quarterly"),
            ("Water", "quarterly"),
            ("Internet / mobile plans", "monthly"),
            ("Pay TV", "monthly"),
            ("Pest control", "annually"),
        ],
    ),
    (
        "Insurance",
        [
            ("Car insurance", "annually"),
            ("Home & contents insurance", "annually"),
            ("Personal & life insurance", "annually"),
            ("Health insurance", "monthly"),
        ],
    ),
    (
        "Financial",
        [
            ("Car loan", "monthly"),
            ("Help debt", "fortnightly"),
            ("Savings", "weekly"),
            ("Investment Fund", "monthly"),
        ],
    ),
    (
        "Food & Groceries",
        [
            ("Supermarket", "weekly"),
            ("Coffee", "weekly"),
            ("Lunches bought", "weekly"),
            ("Take-away & snacks", "weekly"),
            ("Restaurants", "monthly"),
        ],
    ),
    (
        "Personal & Medical",
        [
            ("Hair & beauty", "monthly"),
            ("Medicines & pharmacy", "monthly"),
            ("Dental", "annually"),
            ("Doctors & medical", "monthly"),
            ("Clothing & shoes", "monthly"),
            ("Computers & gadgets", "monthly"),
            ("Sports & gym", "monthly"),
            ("Education", "annually"),
            ("Pet care & vet", "monthly"),
        ],
    ),
    (
        "Entertainment",
        [
            ("Books", "monthly"),
            ("Movies & music", "monthly"),
            ("Holidays", "annually"),
            ("Celebrations & gifts", "monthly"),
        ],
    ),
    (
        "Transport",
        [
            ("Bus & train & ferry", "weekly"),
            ("Petrol", "weekly"),
            ("Road tolls & parking", "weekly"),
            ("Rego & licence", "annually"),
            ("Repairs & maintenance", "monthly"),
        ],
    ),
    (
        "Children",
        [
            ("Toys", "weekly"),
            ("Childcare", "weekly"),
            ("School supplies", "annually"),
            ("Pocket money", "weekly"),
        ],
    ),
]

SAVING_TEMPLATES: Template = [
    (
        "Savings",
        [
            ("Emergency Fund", "monthly"),
            ("Retirement Savings", "monthly"),
            ("Vacation Fund", "monthly"),
        ],
    ),
    (
        "Investments",
        [
            ("Stock Investments", "monthly"),
            ("Bond Investments", "monthly"),
        ],
    ),
    ("Other", [("Miscellaneous Savings", "monthly")]),
]

TEMPLATES: dict[str, Template] = {
    "income": INCOME_TEMPLATES,
    "expense": EXPENSE_TEMPLATES,
    "saving": SAVING_TEMPLATES,
}


def known_categories(collection: str) -> list[str]:
    """Predefined categories for a collection, with the fallback bucket last."""
    names = [category for category, _ in TEMPLATES.get(collection, [])]
    if DEFAULT_CATEGORY not in names:
        names.append(DEFAULT_CATEGORY)
    return names


def template_items(collection: str, owner_id: int) -> list[LineItem]:
    return [
        LineItem(
            id=None,
            owner_id=owner_id,
            name=name,
            amount=0.0,
            frequency=frequency,
            category=category,
            is_default=True,
        )
        for category, entries in TEMPLATES.get(collection, [])
        for name, frequency in entries
    ]


def group_by_category(items: Iterable[LineItem], known: Iterable[str] = ()) -> dict[str, list[LineItem]]:
    """Bucket items by category.

    Known categories come first in the given order, any other category
    follows in order of first appearance. Empty buckets are dropped and
    items keep their relative input order.
    """
    buckets: dict[str, list[LineItem]] = {name: [] for name in known}
    for item in items:
        buckets.setdefault(item.category or DEFAULT_CATEGORY, []).append(item)
    return {name: members for name, members in buckets.items() if members}
