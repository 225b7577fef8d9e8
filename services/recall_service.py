# services/recall_service.py
"""
Recall Service - reverse a lot's sale or hold.

The recall archives the current sale state into a history row, deletes the
lot's receipt e-mails, receipts, documents and payments, and resets the lot
to available. Every step commits on its own; a failed step is logged and
the recall carries on. Only a failed reset makes the recall fail, and
nothing done before it is undone.

Document rows are removed but their stored files are left in blob storage.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import (
     Document,
     Payment,
     PaymentType,
     Receipt,
     ReceiptEmail,
     Subdivision,
     SubdivisionRecallHistory,
     SubdivisionStatus,
)
from services.exceptions import NotFoundError, ValidationError
from services.interest_service import ZERO, to_decimal

logger = logging.getLogger(__name__)


def _run_step(db: Session, name: str, subdivision_id: int, action) -> bool:
     """Run one recall step in its own transaction."""
     try:
          action()
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("[Recall] Error %s for subdivision %s", name, subdivision_id)
          return False
     logger.info("[Recall] %s done for subdivision %s", name.capitalize(), subdivision_id)
     return True


def build_history(lot: Subdivision, user_id: int, reason: str, total_paid: Decimal) -> SubdivisionRecallHistory:
     """Snapshot of the lot's sale state before it is cleared."""
     buyer = lot.buyer
     sale_price = to_decimal(lot.sale_price)
     return SubdivisionRecallHistory(
          subdivision_id=lot.id,
          user_id=user_id,
          buyer_id=lot.buyer_id,
          recall_reason=reason,
          sale_price=sale_price if sale_price > 0 else None,
          total_paid=total_paid,
          hold_amount=lot.hold_amount or None,
          hold_until_date=lot.hold_until_date,
          payment_plan_type=lot.payment_plan_type.value if lot.payment_plan_type else None,
          buyer_name=buyer.name if buyer else None,
          buyer_email=buyer.email if buyer else None,
          buyer_phone=buyer.phone if buyer else None,
     )


def reset_subdivision(lot: Subdivision) -> None:
     lot.status = SubdivisionStatus.AVAILABLE
     lot.buyer_id = None
     lot.sale_price = 0
     lot.hold_until_date = None
     lot.hold_amount = None
     lot.payment_type = PaymentType.FULL
     lot.payment_plan_type = None
     lot.daily_interest_rate = None
     lot.interest_grace_period_days = None
     lot.last_payment_date = None
     lot.total_interest_charged = None
     lot.recall_date = None
     lot.recall_reason = None


def recall_subdivision(db: Session, user_id: int, subdivision_id: int, reason: str) -> Optional[Subdivision]:
     """
     Recall a lot.

     Raises:
          NotFoundError: If the lot doesn't exist
          ValidationError: If the reason is blank

     Returns:
          The reset lot, or None if the final reset failed
     """
     reason = (reason or "").strip()
     if not reason:
          raise ValidationError("A recall reason is required")

     lot = db.get(Subdivision, subdivision_id)
     if lot is None:
          raise NotFoundError(f"Subdivision with ID {subdivision_id} not found")

     logger.info("[Recall] Starting recall for subdivision %s", subdivision_id)

     payments = db.query(Payment).filter(Payment.subdivision_id == subdivision_id).all()
     payment_ids: List[int] = [p.id for p in payments]
     total_paid = sum((to_decimal(p.amount) for p in payments), ZERO)
     logger.info("[Recall] Found %d payments to delete", len(payment_ids))

     receipt_ids: List[int] = []
     if payment_ids:
          receipt_ids = [r.id for r in db.query(Receipt.id).filter(Receipt.payment_id.in_(payment_ids))]
          logger.info("[Recall] Found %d receipts to delete", len(receipt_ids))

     document_ids = [d.id for d in db.query(Document.id).filter(Document.subdivision_id == subdivision_id)]
     if payment_ids:
          document_ids += [d.id for d in db.query(Document.id).filter(Document.payment_id.in_(payment_ids))]
     logger.info("[Recall] Found %d documents to delete", len(document_ids))

     history = build_history(lot, user_id, reason, total_paid)
     _run_step(db, "saving recall history", subdivision_id, lambda: db.add(history))

     if receipt_ids:
          _run_step(
               db, "deleting receipt emails", subdivision_id,
               lambda: db.query(ReceiptEmail)
               .filter(ReceiptEmail.receipt_id.in_(receipt_ids))
               .delete(synchronize_session=False),
          )
          _run_step(
               db, "deleting receipts", subdivision_id,
               lambda: db.query(Receipt).filter(Receipt.id.in_(receipt_ids)).delete(synchronize_session=False),
          )

     if document_ids:
          _run_step(
               db, "deleting documents", subdivision_id,
               lambda: db.query(Document).filter(Document.id.in_(document_ids)).delete(synchronize_session=False),
          )

     if payment_ids:
          _run_step(
               db, "deleting payments", subdivision_id,
               lambda: db.query(Payment)
               .filter(Payment.subdivision_id == subdivision_id)
               .delete(synchronize_session=False),
          )

     # Bulk deletes bypass the identity map
     db.expire_all()
     lot = db.get(Subdivision, subdivision_id)
     if lot is None:
          logger.error("[Recall] Subdivision %s vanished during recall", subdivision_id)
          return None

     if not _run_step(db, "resetting subdivision", subdivision_id, lambda: reset_subdivision(lot)):
          return None

     logger.info("[Recall] Subdivision %s reset to available", subdivision_id)
     return lot


def list_recall_history(db: Session, subdivision_id: int) -> List[SubdivisionRecallHistory]:
     return (
          db.query(SubdivisionRecallHistory)
          .filter(SubdivisionRecallHistory.subdivision_id == subdivision_id)
          .order_by(SubdivisionRecallHistory.recalled_at.desc(), SubdivisionRecallHistory.id.desc())
          .all()
     )
