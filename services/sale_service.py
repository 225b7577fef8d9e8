# services/sale_service.py
"""
Sale Service - selling lots, placing holds and putting properties under sale.

There is no central state machine: each operation sets the status it
implies and nothing checks the status it came from.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import (
     Buyer,
     Payment,
     Property,
     PropertyStatus,
     Subdivision,
     SubdivisionStatus,
     PaymentPlanType,
     PaymentType,
)
from services.exceptions import NotFoundError, ValidationError
from services.interest_service import round_currency

logger = logging.getLogger(__name__)

FULL_PAYMENT_NOTE = "Full payment"

# plan -> (status, payment_type)
PLAN_STATES = {
     PaymentPlanType.FULL: (SubdivisionStatus.SOLD, PaymentType.FULL),
     PaymentPlanType.MORTGAGE: (SubdivisionStatus.MORTGAGE, PaymentType.MORTGAGE),
     PaymentPlanType.HOLD: (SubdivisionStatus.ON_HOLD, PaymentType.INSTALLMENT),
}


def hold_deposit_note(hold_until_date: date) -> str:
     return f"Hold deposit - Hold until {hold_until_date.isoformat()}"


def _get_lot(db: Session, subdivision_id: int) -> Subdivision:
     lot = db.get(Subdivision, subdivision_id)
     if lot is None:
          raise NotFoundError(f"Subdivision with ID {subdivision_id} not found")
     return lot


def _check_buyer(db: Session, buyer_id: int) -> None:
     if db.get(Buyer, buyer_id) is None:
          raise NotFoundError(f"Buyer with ID {buyer_id} not found")


def sell_subdivision(
     db: Session,
     user_id: int,
     subdivision_id: int,
     buyer_id: int,
     sale_price,
     plan: PaymentPlanType,
     daily_interest_rate=None,
     grace_period_days: Optional[int] = None,
     hold_amount=None,
     hold_until_date: Optional[date] = None,
     today: Optional[date] = None,
) -> Optional[Subdivision]:
     """
     Sell a lot under a payment plan.

     - full: status sold, a "Full payment" record for the sale price, then paid in full
     - mortgage: status mortgage, optional daily rate override
     - hold: status on_hold, a deposit payment for the hold amount

     Returns:
          The updated lot, or None if the database write failed
     """
     plan = PaymentPlanType(plan)
     sale_price = round_currency(sale_price)
     if sale_price < 0:
          raise ValidationError("Sale price cannot be negative")
     if plan == PaymentPlanType.HOLD and (hold_amount is None or hold_until_date is None):
          raise ValidationError("Hold amount and hold-until date are required for a hold")

     lot = _get_lot(db, subdivision_id)
     _check_buyer(db, buyer_id)
     today = today or date.today()

     status, payment_type = PLAN_STATES[plan]
     lot.buyer_id = buyer_id
     lot.sale_price = sale_price
     lot.status = status
     lot.payment_type = payment_type
     lot.payment_plan_type = plan
     if plan == PaymentPlanType.MORTGAGE and daily_interest_rate is not None:
          lot.daily_interest_rate = daily_interest_rate
     if grace_period_days is not None:
          lot.interest_grace_period_days = grace_period_days
     if plan == PaymentPlanType.HOLD:
          lot.hold_amount = round_currency(hold_amount)
          lot.hold_until_date = hold_until_date

     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error updating subdivision %s sale", subdivision_id)
          return None

     logger.info("Subdivision %s sold to buyer %s (%s plan)", lot.id, buyer_id, plan.value)

     if plan == PaymentPlanType.HOLD and lot.hold_amount > 0:
          _insert_sale_payment(db, user_id, lot, lot.hold_amount, hold_deposit_note(hold_until_date), today)
     elif plan == PaymentPlanType.FULL:
          if _insert_sale_payment(db, user_id, lot, sale_price, FULL_PAYMENT_NOTE, today):
               lot.status = SubdivisionStatus.PAID_IN_FULL
               try:
                    db.commit()
               except SQLAlchemyError:
                    db.rollback()
                    logger.exception("Error marking subdivision %s paid in full", lot.id)

     return lot


def _insert_sale_payment(db: Session, user_id: int, lot: Subdivision, amount, notes: str, payment_date: date) -> bool:
     payment = Payment(
          user_id=user_id,
          subdivision_id=lot.id,
          buyer_id=lot.buyer_id,
          amount=amount,
          payment_date=payment_date,
          notes=notes,
          principal_amount=amount,
     )
     lot.payments.append(payment)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error creating %r payment for subdivision %s", notes, lot.id)
          return False
     return True


def place_hold(
     db: Session,
     user_id: int,
     subdivision_id: int,
     buyer_id: int,
     hold_amount,
     hold_until_date: date,
     notes: Optional[str] = None,
     today: Optional[date] = None,
) -> Optional[Subdivision]:
     """
     Reserve a lot for a buyer until a date against a deposit.

     The deposit payment is best effort: if it can't be stored the
     hold still stands.

     Returns:
          The updated lot, or None if the hold itself couldn't be stored
     """
     hold_amount = round_currency(hold_amount)
     if hold_amount <= 0:
          raise ValidationError("Hold amount must be greater than zero")

     lot = _get_lot(db, subdivision_id)
     _check_buyer(db, buyer_id)

     lot.buyer_id = buyer_id
     lot.status = SubdivisionStatus.ON_HOLD
     lot.hold_until_date = hold_until_date
     lot.hold_amount = hold_amount
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error placing hold on subdivision %s", subdivision_id)
          return None

     deposit = Payment(
          user_id=user_id,
          subdivision_id=lot.id,
          buyer_id=buyer_id,
          amount=hold_amount,
          payment_date=today or date.today(),
          notes=(notes or "").strip() or hold_deposit_note(hold_until_date),
     )
     lot.payments.append(deposit)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error creating hold payment for subdivision %s", subdivision_id)

     logger.info("Subdivision %s on hold for buyer %s until %s", lot.id, buyer_id, hold_until_date)
     return lot


def sell_property(db: Session, property_id: int, buyer_id: int, sale_price) -> Optional[Property]:
     """Put a whole property under sale; it stays pending until paid."""
     sale_price = round_currency(sale_price)
     if sale_price < 0:
          raise ValidationError("Sale price cannot be negative")

     prop = db.get(Property, property_id)
     if prop is None:
          raise NotFoundError(f"Property with ID {property_id} not found")
     _check_buyer(db, buyer_id)

     prop.buyer_id = buyer_id
     prop.sale_price = sale_price
     prop.status = PropertyStatus.PENDING
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error selling property %s", property_id)
          return None
     return prop
