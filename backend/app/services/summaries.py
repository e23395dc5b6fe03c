"""Aggregate views computed from financial record snapshots.

Every function here is pure: callers load the records (and income figures)
from the database and pass them in, nothing is cached and inputs are never
mutated. Records only need ``category``, ``amount`` and ``date`` attributes,
so ORM rows and lightweight stand-ins are treated alike.

Records filed under the ``Income`` category count as credits; every other
category counts as a debit.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.expense import ExpenseCategory
from ..revenue import NumericRevenue, Revenue, TextualRevenue, revenue_from_raw

WEEK_SPAN_DAYS = 7
DAY_KEY_FORMAT = "%Y-%m-%d"
DATE_LABEL_FORMAT = "%a %b %d %Y"
CENTS = Decimal("0.01")
ZERO = Decimal("0")
DEFAULT_PRECISION = 28

_LEADING_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")
_CURRENCY_PREFIX = re.compile(r"^[^\d.]*[A-Za-z]+\.")
_NON_NUMERIC = re.compile(r"[^\d.]")


class NoIncomeDataError(LookupError):
    """Raised when a balance is requested but no income figures exist."""


@dataclass(frozen=True)
class Totals:
    total_income: Decimal
    total_expenses: Decimal


@dataclass(frozen=True)
class WeeklyTotals:
    total_income: Decimal
    total_expenses: Decimal
    from_label: str
    to_label: str


@dataclass(frozen=True)
class DailyTotals:
    day: str
    total_income: Decimal
    total_expense: Decimal


@dataclass(frozen=True)
class Balance:
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        return ZERO
    return result if result.is_finite() else ZERO


def _as_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return None


def is_income(record: Any) -> bool:
    return getattr(record, "category", None) == ExpenseCategory.INCOME.value


def partition_amount(record: Any) -> Tuple[Decimal, Decimal]:
    """Return ``(income, expense)`` contributed by a single record."""

    amount = _to_decimal(getattr(record, "amount", None))
    if is_income(record):
        return amount, ZERO
    return ZERO, amount


def compute_totals(records: Iterable[Any]) -> Totals:
    total_income = ZERO
    total_expenses = ZERO
    for record in records:
        income, expense = partition_amount(record)
        total_income += income
        total_expenses += expense
    return Totals(total_income=total_income, total_expenses=total_expenses)


def weekly_window(as_of: date | datetime) -> Tuple[datetime, datetime]:
    """Return the inclusive bounds of the seven calendar days ending on ``as_of``."""

    end_day = as_of.date() if isinstance(as_of, datetime) else as_of
    start_day = end_day - timedelta(days=WEEK_SPAN_DAYS - 1)
    return datetime.combine(start_day, time.min), datetime.combine(end_day, time.max)


def filter_by_date_range(records: Iterable[Any], start: datetime, end: datetime) -> List[Any]:
    """Keep records dated within ``[start, end]``; undated records are dropped."""

    selected = []
    for record in records:
        moment = _as_datetime(getattr(record, "date", None))
        if moment is not None and start <= moment <= end:
            selected.append(record)
    return selected


def format_date_label(moment: date | datetime) -> str:
    return moment.strftime(DATE_LABEL_FORMAT)


def compute_weekly_totals(records: Iterable[Any], as_of: date | datetime) -> WeeklyTotals:
    start, end = weekly_window(as_of)
    totals = compute_totals(filter_by_date_range(records, start, end))
    return WeeklyTotals(
        total_income=totals.total_income,
        total_expenses=totals.total_expenses,
        from_label=format_date_label(start),
        to_label=format_date_label(end),
    )


def compute_daily_chart_series(records: Iterable[Any], as_of: date | datetime) -> List[DailyTotals]:
    """Group windowed records per calendar day, oldest day first.

    Days without records are not filled in.
    """

    start, end = weekly_window(as_of)
    grouped: Dict[str, List[Decimal]] = defaultdict(lambda: [ZERO, ZERO])
    for record in filter_by_date_range(records, start, end):
        day_key = _as_datetime(record.date).strftime(DAY_KEY_FORMAT)
        income, expense = partition_amount(record)
        grouped[day_key][0] += income
        grouped[day_key][1] += expense

    return [
        DailyTotals(day=day_key, total_income=sums[0], total_expense=sums[1])
        for day_key, sums in sorted(grouped.items())
    ]


def _revenue_of(figure: Any) -> Optional[Revenue]:
    try:
        return revenue_from_raw(getattr(figure, "total_revenue", None))
    except (TypeError, ValueError):
        return None


def normalize_revenue(revenue: Revenue | None) -> Decimal:
    """Convert a revenue figure to a number, reading currency text when needed.

    A lettered currency prefix with its dot (``"Rs."``) is dropped first, then
    text keeps only digits and dots and the leading decimal number is parsed,
    so ``".75"`` still reads as 0.75.
    Anything unparseable counts as zero.
    """

    if revenue is None:
        return ZERO
    if isinstance(revenue, NumericRevenue):
        return _to_decimal(revenue.value)

    cleaned = _NON_NUMERIC.sub("", _CURRENCY_PREFIX.sub("", revenue.text, count=1))
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return ZERO
    return Decimal(match.group())


def _exact_precision(values: Iterable[Decimal]) -> int:
    """Digits needed to add and round ``values`` without losing integer digits."""

    widest = max((value.adjusted() for value in values if value), default=0)
    return max(DEFAULT_PRECISION, widest + 4)


def _round_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_balance(income_figures: Sequence[Any], expense_records: Iterable[Any]) -> Balance:
    """Compare recorded income against every expense record.

    Expense records are not partitioned by category here: each one is a debit
    against the separately recorded income.
    """

    if not income_figures:
        raise NoIncomeDataError("Income not found")

    incomes = [normalize_revenue(_revenue_of(figure)) for figure in income_figures]
    expenses = [_to_decimal(getattr(record, "amount", None)) for record in expense_records]

    with localcontext() as ctx:
        # Room for the carries of every addition.
        ctx.prec = _exact_precision(incomes + expenses) + len(str(len(incomes) + len(expenses)))
        total_income = sum(incomes, ZERO)
        total_expenses = sum(expenses, ZERO)
        balance = total_income - total_expenses
        return Balance(
            total_income=_round_cents(total_income),
            total_expenses=_round_cents(total_expenses),
            balance=_round_cents(balance),
        )


def compute_total_income(income_figures: Iterable[Any]) -> Decimal:
    """Sum numeric revenue figures only; textual figures contribute zero."""

    total = ZERO
    for figure in income_figures:
        revenue = _revenue_of(figure)
        if isinstance(revenue, TextualRevenue) or revenue is None:
            continue
        total += _to_decimal(revenue.value)
    return total
