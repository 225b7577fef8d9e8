# services/receipt_service.py
"""
Receipt Service - receipts for recorded payments and their e-mail log.

A payment has at most one receipt, created on first view. "Sending" a
receipt always writes a ReceiptEmail row; real delivery through the
e-mail provider only happens when RECEIPT_EMAIL_DELIVERY is enabled.
"""
import logging
import random
import string
import time
from decimal import Decimal
from typing import Optional

import requests
from sqlalchemy import or_, and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import config
from models import Payment, Receipt, ReceiptEmail
from services.exceptions import NotFoundError, ValidationError
from services.interest_service import to_decimal, round_currency
from utils.email import EmailDeliveryError, send_receipt_email as deliver_receipt_email

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_uppercase


def _to_base36(number: int) -> str:
     if number == 0:
          return "0"
     digits = []
     while number:
          number, rem = divmod(number, 36)
          digits.append(_BASE36[rem])
     return "".join(reversed(digits))


def generate_receipt_number(now_ms: Optional[int] = None) -> str:
     """RCP-<millisecond timestamp in base36>-<4 random characters>"""
     if now_ms is None:
          now_ms = int(time.time() * 1000)
     suffix = "".join(random.choices(_BASE36, k=4))
     return f"RCP-{_to_base36(now_ms)}-{suffix}"


def get_receipt_for_payment(db: Session, payment_id: int) -> Optional[Receipt]:
     return db.query(Receipt).filter(Receipt.payment_id == payment_id).first()


def get_or_create_receipt(db: Session, user_id: int, payment_id: int) -> Optional[Receipt]:
     """
     Fetch the payment's receipt, creating it on first use.

     Raises:
          NotFoundError: If the payment doesn't exist

     Returns:
          The receipt, or None if the database write failed
     """
     payment = db.get(Payment, payment_id)
     if payment is None:
          raise NotFoundError(f"Payment with ID {payment_id} not found")

     existing = get_receipt_for_payment(db, payment_id)
     if existing:
          return existing

     receipt = Receipt(user_id=user_id, payment_id=payment_id, receipt_number=generate_receipt_number())
     db.add(receipt)
     try:
          db.commit()
     except IntegrityError:
          # Another request created it first (or the number collided)
          db.rollback()
          return get_receipt_for_payment(db, payment_id)
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error creating receipt for payment %s", payment_id)
          return None
     return receipt


def total_paid_before(db: Session, payment: Payment) -> Decimal:
     """
     Sum of amounts of the same property's or lot's payments made before
     this one (earlier date, or same date and recorded earlier).
     """
     query = db.query(Payment)
     if payment.subdivision_id is not None:
          query = query.filter(Payment.subdivision_id == payment.subdivision_id)
     else:
          query = query.filter(Payment.property_id == payment.property_id, Payment.subdivision_id.is_(None))
     earlier = query.filter(
          or_(
               Payment.payment_date < payment.payment_date,
               and_(Payment.payment_date == payment.payment_date, Payment.id < payment.id),
          )
     ).all()
     return sum((to_decimal(p.amount) for p in earlier), Decimal("0"))


def build_receipt_view(db: Session, receipt: Receipt) -> dict:
     """Everything the printable receipt shows."""
     payment = receipt.payment
     if payment.subdivision is not None:
          sale_price = payment.subdivision.sale_price
          subdivision_title = payment.subdivision.title
          property_title = payment.subdivision.property.title if payment.subdivision.property else None
     else:
          sale_price = payment.property.sale_price if payment.property else 0
          subdivision_title = None
          property_title = payment.property.title if payment.property else None

     paid_before = total_paid_before(db, payment)
     balance_after = round_currency(to_decimal(sale_price) - (paid_before + to_decimal(payment.amount)))

     return {
          "id": receipt.id,
          "receipt_number": receipt.receipt_number,
          "created_at": receipt.created_at,
          "payment": payment,
          "buyer": payment.buyer,
          "property_title": property_title,
          "subdivision_title": subdivision_title,
          "sale_price": round_currency(sale_price),
          "total_paid_before": round_currency(paid_before),
          "balance_after": balance_after,
          "emails": sorted(receipt.emails, key=lambda e: (e.sent_at, e.id), reverse=True),
     }


def send_receipt(db: Session, user_id: int, receipt_id: int, email_address: str) -> Optional[ReceiptEmail]:
     """
     Record that a receipt was sent to an address, delivering it if enabled.

     Raises:
          NotFoundError: If the receipt doesn't exist
          ValidationError: If the address is blank

     Returns:
          The ReceiptEmail record, or None if the database write failed
     """
     email_address = (email_address or "").strip()
     if not email_address:
          raise ValidationError("Email address is required")

     receipt = db.get(Receipt, receipt_id)
     if receipt is None:
          raise NotFoundError(f"Receipt with ID {receipt_id} not found")

     record = ReceiptEmail(user_id=user_id, email_address=email_address)
     receipt.emails.append(record)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error recording receipt email for receipt %s", receipt_id)
          return None

     if config.RECEIPT_EMAIL_DELIVERY:
          view = build_receipt_view(db, receipt)
          try:
               deliver_receipt_email(
                    to_email=email_address,
                    receipt_number=receipt.receipt_number,
                    amount=f"{round_currency(view['payment'].amount):,}",
                    payment_date=view["payment"].payment_date.isoformat(),
                    balance=f"{view['balance_after']:,}",
               )
          except (EmailDeliveryError, requests.RequestException):
               logger.warning("Receipt %s recorded but delivery to %s failed", receipt.receipt_number, email_address, exc_info=True)
     else:
          logger.info("Receipt %s sent to %s (delivery disabled)", receipt.receipt_number, email_address)

     return record
