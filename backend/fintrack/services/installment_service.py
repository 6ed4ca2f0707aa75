"""Installment expansion and month-key helpers."""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal

from fintrack.schemas.transaction import Transaction

INSTALLMENT_DAY = 5
INSTALLMENT_CATEGORY = "Installment"

CENTS = Decimal("0.01")


def add_months(month_key: str, offset: int) -> str:
    """Shift a ``yyyy-mm`` key by ``offset`` months (negative allowed)."""
    year, month = (int(part) for part in month_key.split("-"))
    index = year * 12 + (month - 1) + offset
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def installment_amount(total_try: Decimal, months: int) -> Decimal:
    """Per-month share, rounded half-up to cents.

    The shares are not adjusted to add back up to ``total_try``: 100 over
    3 months gives 33.33 each.
    """
    return (Decimal(total_try) / months).quantize(CENTS, rounding=ROUND_HALF_UP)


def expand_installments(transactions: list[Transaction]) -> list[Transaction]:
    """Replace every installment transaction with one entry per covered month.

    Other transactions pass through untouched and keep their position.
    """
    expanded: list[Transaction] = []

    for txn in transactions:
        if not txn.is_installment or txn.installment_meta is None:
            expanded.append(txn)
            continue

        meta = txn.installment_meta
        amount = installment_amount(meta.total_try, meta.months)

        for i in range(meta.months):
            year, month = (int(part) for part in add_months(meta.start_month, i).split("-"))
            expanded.append(
                txn.model_copy(
                    update={
                        "id": f"{txn.id}-{i + 1}",
                        "amount_try": amount,
                        "date": dt.date(year, month, INSTALLMENT_DAY),
                        "title": f"{txn.title} ({i + 1}/{meta.months})",
                        "is_installment": False,
                        "installment_meta": None,
                    }
                )
            )

    return expanded


def get_monthly_transactions(month_key: str, transactions: list[Transaction]) -> list[Transaction]:
    """Transactions dated in ``month_key``, newest first."""
    return sorted(
        (t for t in transactions if t.month_key == month_key),
        key=lambda t: t.date,
        reverse=True,
    )


def get_installment_summary(transactions: list[Transaction]) -> list[Transaction]:
    return [t for t in transactions if t.category == INSTALLMENT_CATEGORY]
