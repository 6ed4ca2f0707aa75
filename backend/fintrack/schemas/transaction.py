"""Transaction schemas for request/response validation."""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Literal

from pydantic import Field, model_validator

from fintrack.core.exceptions import ValidationError
from fintrack.schemas.base import CamelModel

TransactionType = Literal["income", "expense"]
PaymentMethod = Literal["card", "cash", "transfer"]

MONTH_KEY_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class InstallmentMeta(CamelModel):
    total_try: Decimal
    months: int = Field(ge=1)
    start_month: str = Field(pattern=MONTH_KEY_PATTERN)  # "2026-03"


class InstallmentCheck(CamelModel):
    """Rejects installment rows that carry no installmentMeta."""

    @model_validator(mode="after")
    def check_installment_meta(self):
        if self.is_installment and self.installment_meta is None:
            raise ValueError("installment transactions require installmentMeta")
        return self


class Transaction(InstallmentCheck):
    id: str
    title: str
    amount_try: Decimal
    date: dt.date
    category: str
    type: TransactionType
    payment_method: PaymentMethod | None = None
    is_installment: bool = False
    installment_meta: InstallmentMeta | None = None

    @property
    def month_key(self) -> str:
        return self.date.strftime("%Y-%m")


class TransactionCreate(InstallmentCheck):
    title: str
    amount_try: Decimal
    date: dt.date
    category: str
    type: TransactionType
    payment_method: PaymentMethod | None = None
    is_installment: bool = False
    installment_meta: InstallmentMeta | None = None


class TransactionUpdate(CamelModel):
    title: str | None = None
    amount_try: Decimal | None = None
    date: dt.date | None = None
    category: str | None = None
    payment_method: PaymentMethod | None = None


class TransactionForm(CamelModel):
    """Raw budget-entry form input, validated before anything is sent."""

    title: str = ""
    amount_try: str
    date: dt.date
    category: str = ""
    type: TransactionType = "expense"
    payment_method: PaymentMethod = "card"
    is_installment: bool = False
    installment_months: str = "2"

    def to_create(self) -> TransactionCreate:
        try:
            amount = Decimal(self.amount_try.strip())
        except InvalidOperation:
            amount = None
        if amount is None or not amount.is_finite() or amount <= 0:
            raise ValidationError("Please enter a valid amount.")

        is_expense = self.type == "expense"
        installment = is_expense and self.is_installment
        months = 0
        if installment:
            try:
                months = int(self.installment_months)
            except ValueError:
                months = 0
            if months < 2:
                raise ValidationError("Installments must be at least 2 months.")

        if is_expense and not self.category:
            raise ValidationError("Please select a category.")

        return TransactionCreate(
            title=self.title.strip() or "Untitled Transaction",
            amount_try=amount,
            date=self.date,
            category=self.category if is_expense else "OTHER",
            type=self.type,
            payment_method=self.payment_method if is_expense else "transfer",
            is_installment=installment,
            installment_meta=(
                InstallmentMeta(
                    total_try=amount,
                    months=months,
                    start_month=self.date.strftime("%Y-%m"),
                )
                if installment
                else None
            ),
        )
