# services/interest_service.py
"""
Interest Service - simple interest on a declining principal balance.

When a mortgage payment is recorded:
1. days = whole days from the last payment date to the payment date (>= 0),
   or 0 when there is no previous payment
2. interest = balance * daily_rate * days, rounded half-up to cents
3. payment > interest: the remainder goes to principal;
   otherwise the whole payment is absorbed by interest
4. the lot is paid in full once cumulative principal reaches the sale price

There is no compounding or amortization schedule. The grace period is
recorded with each payment but is not subtracted from the day count.

Everything in this module is pure; persistence lives in payment_service.
"""
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple, Optional

from config import DEFAULT_DAILY_INTEREST_RATE

CENT = Decimal("0.01")
ZERO = Decimal("0")


class PaymentAllocation(NamedTuple):
     """Split of one payment between accrued interest and principal."""
     days: int
     interest: Decimal
     principal: Decimal
     new_balance: Decimal


class InterestPreview(NamedTuple):
     """What the buyer would owe if paying on a given date."""
     days: int
     interest: Decimal
     balance: Decimal
     total_due: Decimal


def to_decimal(value) -> Decimal:
     """Convert numbers (including floats) without binary noise."""
     if value is None:
          return ZERO
     if isinstance(value, Decimal):
          return value
     return Decimal(str(value))


def round_currency(value) -> Decimal:
     """Round half-up to two decimal places."""
     return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _as_date(value) -> date:
     if isinstance(value, datetime):
          return value.date()
     return value


def days_between(start: Optional[date], end: date) -> int:
     """Whole days from start to end, never negative; 0 when start is unknown."""
     if start is None:
          return 0
     return max(0, (_as_date(end) - _as_date(start)).days)


def compute_interest(balance, daily_rate, days: int) -> Decimal:
     """Simple interest for the given number of days, rounded to cents."""
     return round_currency(to_decimal(balance) * to_decimal(daily_rate) * days)


def allocate_payment(
     balance,
     daily_rate,
     last_payment_date: Optional[date],
     payment_amount,
     payment_date: date,
) -> PaymentAllocation:
     """
     Split a payment into interest and principal.

     Args:
          balance: Remaining principal before this payment
          daily_rate: Daily interest rate (e.g. 0.001 for 0.1% per day)
          last_payment_date: Date of the previous payment, or None
          payment_amount: Total amount received
          payment_date: Date the payment was made

     Returns:
          PaymentAllocation with days, interest, principal and new balance
     """
     balance = to_decimal(balance)
     amount = to_decimal(payment_amount)
     days = days_between(last_payment_date, payment_date)
     interest = compute_interest(balance, daily_rate, days)

     if amount > interest:
          principal = round_currency(amount - interest)
     else:
          principal = ZERO.quantize(CENT)

     return PaymentAllocation(
          days=days,
          interest=interest,
          principal=principal,
          new_balance=round_currency(balance - principal),
     )


def preview_interest(
     balance,
     daily_rate,
     last_payment_date: Optional[date],
     as_of: date,
     today: Optional[date] = None,
) -> InterestPreview:
     """
     Interest owed if the buyer paid on `as_of`.

     Without a previous payment the days are counted from today rather
     than treated as zero, so a future date shows the interest that
     would accrue by then.
     """
     if last_payment_date is not None:
          days = days_between(last_payment_date, as_of)
     else:
          days = days_between(today or date.today(), as_of)
     balance = round_currency(balance)
     interest = compute_interest(balance, daily_rate, days)
     return InterestPreview(days=days, interest=interest, balance=balance, total_due=balance + interest)


def resolve_daily_rate(lot_rate, global_rate=None) -> Decimal:
     """Per-lot override, then the user's global rate, then the configured default."""
     if lot_rate is not None:
          return to_decimal(lot_rate)
     if global_rate is not None:
          return to_decimal(global_rate)
     return to_decimal(DEFAULT_DAILY_INTEREST_RATE)


def principal_of(payment) -> Decimal:
     """Principal applied by a payment; rows without a split count in full."""
     if payment.principal_amount is not None:
          return to_decimal(payment.principal_amount)
     return to_decimal(payment.amount)


def principal_paid(payments: Iterable) -> Decimal:
     return sum((principal_of(p) for p in payments), ZERO)


def interest_paid(payments: Iterable) -> Decimal:
     return sum((to_decimal(p.interest_amount) for p in payments), ZERO)


def remaining_balance(sale_price, payments: Iterable) -> Decimal:
     """Sale price minus cumulative principal (may go negative on overpayment)."""
     return round_currency(to_decimal(sale_price) - principal_paid(payments))


def is_paid_in_full(sale_price, cumulative_principal) -> bool:
     return to_decimal(cumulative_principal) >= to_decimal(sale_price)
