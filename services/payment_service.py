# services/payment_service.py
"""
Payment Service - recording money received against properties and lots.

Mortgage lots get their payments split into interest and principal (see
interest_service); every other payment is all principal. After each
subdivision payment the lot's last payment date and interest total are
updated and the paid-in-full check runs. A pending property becomes
sold once its payments cover the sale price.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import DEFAULT_GRACE_PERIOD_DAYS
from models import (
     Payment,
     Property,
     PropertyStatus,
     Subdivision,
     SubdivisionStatus,
     PaymentPlanType,
)
from services.exceptions import NotFoundError, ValidationError
from services.interest_service import (
     ZERO,
     allocate_payment,
     interest_paid,
     is_paid_in_full,
     preview_interest,
     principal_of,
     principal_paid,
     remaining_balance,
     resolve_daily_rate,
     round_currency,
     to_decimal,
     InterestPreview,
)
from services.settings_service import get_global_daily_rate
from services import receipt_service

logger = logging.getLogger(__name__)


def _get_target(db: Session, property_id: Optional[int], subdivision_id: Optional[int]):
     if (property_id is None) == (subdivision_id is None):
          raise ValidationError("A payment belongs to exactly one of a property or a subdivision")
     if subdivision_id is not None:
          lot = db.get(Subdivision, subdivision_id)
          if lot is None:
               raise NotFoundError(f"Subdivision with ID {subdivision_id} not found")
          return lot
     prop = db.get(Property, property_id)
     if prop is None:
          raise NotFoundError(f"Property with ID {property_id} not found")
     return prop


def list_payments(
     db: Session,
     property_id: Optional[int] = None,
     subdivision_id: Optional[int] = None,
) -> List[Payment]:
     """Payments of a property or a lot, newest payment date first."""
     _get_target(db, property_id, subdivision_id)
     query = db.query(Payment)
     if subdivision_id is not None:
          query = query.filter(Payment.subdivision_id == subdivision_id)
     else:
          query = query.filter(Payment.property_id == property_id)
     return query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()


def _allocate_lot_payment(db: Session, user_id: int, lot: Subdivision, payment: Payment) -> Decimal:
     """Fill in the interest snapshot on a mortgage payment. Returns the interest charged."""
     rate = resolve_daily_rate(lot.daily_interest_rate, get_global_daily_rate(db, user_id))
     balance = remaining_balance(lot.sale_price, lot.payments)
     allocation = allocate_payment(balance, rate, lot.last_payment_date, payment.amount, payment.payment_date)

     payment.principal_amount = allocation.principal
     payment.interest_amount = allocation.interest if allocation.interest > 0 else None
     payment.days_since_last_payment = allocation.days
     payment.interest_calculation_date = payment.payment_date
     payment.interest_rate_used = rate
     if lot.interest_grace_period_days is not None:
          payment.grace_period_days = lot.interest_grace_period_days
     else:
          payment.grace_period_days = DEFAULT_GRACE_PERIOD_DAYS

     logger.debug(
          "Lot %s: balance=%s rate=%s days=%s interest=%s principal=%s",
          lot.id, balance, rate, allocation.days, allocation.interest, allocation.principal,
     )
     return allocation.interest


def add_payment(
     db: Session,
     user_id: int,
     amount,
     payment_date: date,
     property_id: Optional[int] = None,
     subdivision_id: Optional[int] = None,
     buyer_id: Optional[int] = None,
     notes: Optional[str] = None,
     send_receipt_to: Optional[str] = None,
) -> Optional[Payment]:
     """
     Record a payment against a property or a lot.

     Args:
          db: Database session
          user_id: Authenticated user recording the payment
          amount: Amount received (must be positive)
          payment_date: Date the money was received
          property_id: Target property (exclusive with subdivision_id)
          subdivision_id: Target lot (exclusive with property_id)
          buyer_id: Paying buyer; defaults to the target's buyer
          notes: Free text
          send_receipt_to: If given, a receipt is created and sent to this address

     Raises:
          NotFoundError: If the target doesn't exist
          ValidationError: If the amount or target is invalid

     Returns:
          The stored payment, or None if the database write failed
     """
     amount = round_currency(amount)
     if amount <= 0:
          raise ValidationError("Payment amount must be greater than zero")

     target = _get_target(db, property_id, subdivision_id)
     payment = Payment(
          user_id=user_id,
          property_id=property_id,
          subdivision_id=subdivision_id,
          buyer_id=buyer_id if buyer_id is not None else target.buyer_id,
          amount=amount,
          payment_date=payment_date,
          notes=(notes or "").strip() or None,
     )

     try:
          if subdivision_id is not None:
               _apply_lot_payment(db, user_id, target, payment)
          else:
               payment.principal_amount = amount
               target.payments.append(payment)
               db.flush()
               _update_property_sale_status(db, target)
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error adding payment of %s", amount)
          return None

     logger.info("Recorded payment %s of %s (property=%s, subdivision=%s)", payment.id, amount, property_id, subdivision_id)

     if send_receipt_to:
          receipt = receipt_service.get_or_create_receipt(db, user_id, payment.id)
          if receipt is not None:
               receipt_service.send_receipt(db, user_id, receipt.id, send_receipt_to)

     return payment


def _apply_lot_payment(db: Session, user_id: int, lot: Subdivision, payment: Payment) -> None:
     interest = ZERO
     if lot.payment_plan_type == PaymentPlanType.MORTGAGE:
          interest = _allocate_lot_payment(db, user_id, lot, payment)
     else:
          payment.principal_amount = payment.amount

     previous_principal = principal_paid(lot.payments)
     lot.payments.append(payment)

     lot.last_payment_date = payment.payment_date
     if interest > 0:
          lot.total_interest_charged = round_currency(to_decimal(lot.total_interest_charged) + interest)

     if is_paid_in_full(lot.sale_price, previous_principal + principal_of(payment)):
          lot.status = SubdivisionStatus.PAID_IN_FULL
          logger.info("Subdivision %s paid in full", lot.id)


def _update_property_sale_status(db: Session, prop: Property) -> None:
     if prop.status != PropertyStatus.PENDING:
          return
     total = sum(
          (to_decimal(p.amount) for p in db.query(Payment).filter(Payment.property_id == prop.id, Payment.subdivision_id.is_(None))),
          ZERO,
     )
     if total >= to_decimal(prop.sale_price):
          prop.status = PropertyStatus.SOLD
          logger.info("Property %s sold", prop.id)


def delete_payment(db: Session, payment_id: int) -> bool:
     """
     Delete a payment (and, by cascade, its receipt and documents).
     The lot's balance and status are not recomputed.
     """
     payment = db.get(Payment, payment_id)
     if payment is None:
          raise NotFoundError(f"Payment with ID {payment_id} not found")
     parents = [payment.subdivision, payment.property]
     try:
          db.delete(payment)
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error deleting payment %s", payment_id)
          return False
     for parent in parents:
          if parent is not None:
               db.expire(parent, ["payments"])
     return True


def payment_summary(db: Session, property_id: Optional[int] = None, subdivision_id: Optional[int] = None) -> dict:
     """Sale price, totals and remaining balance for a property or a lot."""
     target = _get_target(db, property_id, subdivision_id)
     payments = list_payments(db, property_id=property_id, subdivision_id=subdivision_id)
     sale_price = round_currency(target.sale_price)
     return {
          "sale_price": sale_price,
          "payment_count": len(payments),
          "total_paid": round_currency(sum((to_decimal(p.amount) for p in payments), ZERO)),
          "principal_paid": round_currency(principal_paid(payments)),
          "interest_paid": round_currency(interest_paid(payments)),
          "remaining_balance": remaining_balance(sale_price, payments),
     }


def interest_preview(db: Session, user_id: int, subdivision_id: int, as_of: date) -> InterestPreview:
     """
     What the buyer of a lot would owe if paying on `as_of`.
     Only mortgage lots accrue interest; any other lot previews 0 days.
     """
     lot = db.get(Subdivision, subdivision_id)
     if lot is None:
          raise NotFoundError(f"Subdivision with ID {subdivision_id} not found")
     balance = round_currency(remaining_balance(lot.sale_price, lot.payments))
     if lot.payment_plan_type != PaymentPlanType.MORTGAGE:
          return InterestPreview(days=0, interest=ZERO, balance=balance, total_due=balance)
     rate = resolve_daily_rate(lot.daily_interest_rate, get_global_daily_rate(db, user_id))
     return preview_interest(balance, rate, lot.last_payment_date, as_of)
