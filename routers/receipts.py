# routers/receipts.py
"""
Receipt API routes.

A payment's receipt is created the first time it is asked for.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user_id
from models import Receipt
from routers.common import failed, http_error, not_found
from schemas.receipt import ReceiptEmailRequest, ReceiptEmailResponse, ReceiptResponse
from services import receipt_service
from services.exceptions import LandAssetError

router = APIRouter(prefix="/api/receipts", tags=["receipts"])


@router.get("/payment/{payment_id}", response_model=ReceiptResponse, summary="Get or create a payment's receipt")
def receipt_for_payment(payment_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     try:
          receipt = receipt_service.get_or_create_receipt(db, user_id, payment_id)
     except LandAssetError as e:
          raise http_error(e)
     if receipt is None:
          raise failed("create receipt")
     return receipt_service.build_receipt_view(db, receipt)


@router.get("/{receipt_id}", response_model=ReceiptResponse, summary="Get a receipt")
def get_receipt(receipt_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     receipt = db.get(Receipt, receipt_id)
     if not receipt:
          raise not_found("Receipt", receipt_id)
     return receipt_service.build_receipt_view(db, receipt)


@router.post(
     "/{receipt_id}/email",
     response_model=ReceiptEmailResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Send a receipt by e-mail"
)
def email_receipt(
     receipt_id: int,
     body: ReceiptEmailRequest,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Records the send. Actual delivery only happens when enabled in configuration,
     and a failed delivery still keeps the record.
     """
     try:
          record = receipt_service.send_receipt(db, user_id, receipt_id, body.email_address)
     except LandAssetError as e:
          raise http_error(e)
     if record is None:
          raise failed("record receipt email")
     return record
