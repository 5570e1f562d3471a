from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Category(str, Enum):
    # income
    SALARY = "salary"
    FREELANCE = "freelance"
    INVESTMENT = "investment"
    BUSINESS = "business"
    OTHER_INCOME = "other_income"
    # expense
    FOOD = "food"
    TRANSPORTATION = "transportation"
    HOUSING = "housing"
    UTILITIES = "utilities"
    ENTERTAINMENT = "entertainment"
    HEALTHCARE = "healthcare"
    SHOPPING = "shopping"
    EDUCATION = "education"
    TRAVEL = "travel"
    OTHER_EXPENSE = "other_expense"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]

    @property
    def type(self) -> TransactionType:
        return CATEGORY_TYPES[self]


class BudgetPeriod(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class BudgetStatus(str, Enum):
    UNDER = "under"
    ON_TRACK = "on-track"
    OVER = "over"


CATEGORY_DISPLAY_NAMES: Dict[Category, str] = {
    Category.SALARY: "Salary",
    Category.FREELANCE: "Freelance",
    Category.INVESTMENT: "Investment",
    Category.BUSINESS: "Business",
    Category.OTHER_INCOME: "Other Income",
    Category.FOOD: "Food & Dining",
    Category.TRANSPORTATION: "Transportation",
    Category.HOUSING: "Housing",
    Category.UTILITIES: "Utilities",
    Category.ENTERTAINMENT: "Entertainment",
    Category.HEALTHCARE: "Healthcare",
    Category.SHOPPING: "Shopping",
    Category.EDUCATION: "Education",
    Category.TRAVEL: "Travel",
    Category.OTHER_EXPENSE: "Other Expenses",
}

CATEGORY_TYPES: Dict[Category, TransactionType] = {
    Category.SALARY: TransactionType.INCOME,
    Category.FREELANCE: TransactionType.INCOME,
    Category.INVESTMENT: TransactionType.INCOME,
    Category.BUSINESS: TransactionType.INCOME,
    Category.OTHER_INCOME: TransactionType.INCOME,
    Category.FOOD: TransactionType.EXPENSE,
    Category.TRANSPORTATION: TransactionType.EXPENSE,
    Category.HOUSING: TransactionType.EXPENSE,
    Category.UTILITIES: TransactionType.EXPENSE,
    Category.ENTERTAINMENT: TransactionType.EXPENSE,
    Category.HEALTHCARE: TransactionType.EXPENSE,
    Category.SHOPPING: TransactionType.EXPENSE,
    Category.EDUCATION: TransactionType.EXPENSE,
    Category.TRAVEL: TransactionType.EXPENSE,
    Category.OTHER_EXPENSE: TransactionType.EXPENSE,
}


def categories_for(type_: TransactionType) -> Tuple[Category, ...]:
    """Categories allowed for the given transaction type, in declaration order."""
    return tuple(c for c in Category if CATEGORY_TYPES[c] is TransactionType(type_))


INCOME_CATEGORIES = categories_for(TransactionType.INCOME)
EXPENSE_CATEGORIES = categories_for(TransactionType.EXPENSE)


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float                 # always positive, sign comes from type
    description: str
    category: Category
    type: TransactionType
    date: date                    # economic date, datetime also accepted
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        # wire strings and enum members must hash alike in grouped totals
        object.__setattr__(self, "category", Category(self.category))
        object.__setattr__(self, "type", TransactionType(self.type))


# At most one budget per expense category
@dataclass(frozen=True)
class Budget:
    id: str
    category: Category
    amount: float
    period: BudgetPeriod
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "category", Category(self.category))
        object.__setattr__(self, "period", BudgetPeriod(self.period))


@dataclass(frozen=True)
class Window:
    month: int   # 1..12
    year: int

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def contains(self, d: date) -> bool:
        return d.month == self.month and d.year == self.year


@dataclass(frozen=True)
class MonthSlot:
    key: str      # 'YYYY-MM'
    label: str    # 'Jan 2025'
    window: Window


class MonthlyTotal(NamedTuple):
    label: str
    total: float


@dataclass(frozen=True)
class MonthlyStats:
    total: float
    average: float


@dataclass(frozen=True)
class CategoryTotal:
    category: Category
    amount: float

    @property
    def name(self) -> str:
        return self.category.display_name


@dataclass(frozen=True)
class CategoryShare:
    category: Category
    amount: float
    share: float  # percent of the grand total

    @property
    def name(self) -> str:
        return self.category.display_name


@dataclass(frozen=True)
class BudgetAnalysis:
    category: Category
    budget_amount: float   # monthly-normalized
    actual_amount: float
    difference: float
    percentage: float
    status: BudgetStatus


@dataclass(frozen=True)
class BudgetWarning:
    category: Category
    spent: float
    budget: float
    percentage: float
    is_over: bool

    @property
    def name(self) -> str:
        return self.category.display_name


@dataclass(frozen=True)
class Insights:
    this_month_total: float
    last_month_total: float
    spending_change_percent: float
    top_categories: Tuple[CategoryTotal, ...]
    daily_average: float
    projected_monthly: float
    budget_warnings: Tuple[BudgetWarning, ...]
    high_expenses: Tuple[Transaction, ...]


@dataclass(frozen=True)
class Summary:
    total_income: float
    total_expenses: float
    balance: float
    this_month_income: float
    this_month_expenses: float
    last_month_income: float
    last_month_expenses: float
    income_change_percent: float
    expense_change_percent: float
    savings_rate: float
