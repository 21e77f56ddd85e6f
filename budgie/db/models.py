import math
from dataclasses import dataclass

FREQUENCIES: tuple[str, ...] = ("weekly", "fortnightly", "monthly", "quarterly", "annually")

DEFAULT_CATEGORY = "Other"

# keeps annualized sums finite
MAX_AMOUNT = 1_000_000_000_000


class InvalidLineItem(ValueError):
    pass


@dataclass(slots=True)
class LineItem:
    id: int | None
    owner_id: int
    name: str
    amount: float
    frequency: str = "monthly"
    category: str = DEFAULT_CATEGORY
    is_default: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidLineItem("Name must not be empty")
        self.name = self.name.strip()
        if self.frequency not in FREQUENCIES:
            raise InvalidLineItem(f"Invalid frequency '{self.frequency}'")
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float)):
            raise InvalidLineItem(f"Amount must be a number, got {self.amount!r}")
        if not 0 <= self.amount <= MAX_AMOUNT or not math.isfinite(self.amount):
            raise InvalidLineItem(f"Amount must be between 0 and {MAX_AMOUNT:,}, got {self.amount}")
        self.amount = float(self.amount)
        if self.category is not None and not isinstance(self.category, str):
            raise InvalidLineItem(f"Category must be text, got {self.category!r}")
        self.category = (self.category or "").strip() or DEFAULT_CATEGORY
        self.is_default = bool(self.is_default)

    @classmethod
    def from_row(cls, row) -> "LineItem":
        data = dict(row)
        return cls(
            id=data["id"],
            owner_id=data["owner_id"],
            name=data["name"],
            amount=data["amount"],
            frequency=data["frequency"],
            category=data["category"],
            is_default=data["is_default"],
        )


@dataclass(slots=True)
class AggregateResult:
    frequency: str
    totals: dict[str, float]
    total: float


@dataclass(slots=True)
class Summary:
    period: str
    income: AggregateResult
    expenses: AggregateResult
    savings: AggregateResult
    balance: float
    is_surplus: bool
