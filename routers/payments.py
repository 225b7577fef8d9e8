# routers/payments.py
"""
Payment API routes.

Payments are recorded against either a property or a lot. Mortgage lots
get each payment split into interest and principal at insert time.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user_id
from models import Payment
from routers.common import failed, http_error, not_found
from schemas.payment import PaymentCreate, PaymentResponse, PaymentListResponse, PaymentSummaryResponse
from services import payment_service
from services.exceptions import LandAssetError

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("", response_model=PaymentListResponse, summary="List payments of a property or lot")
def list_payments(
     property_id: Optional[int] = Query(None, gt=0),
     subdivision_id: Optional[int] = Query(None, gt=0),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """Newest payment date first. Pass exactly one of property_id / subdivision_id."""
     try:
          payments = payment_service.list_payments(db, property_id=property_id, subdivision_id=subdivision_id)
     except LandAssetError as e:
          raise http_error(e)
     return PaymentListResponse(
          payments=[PaymentResponse.model_validate(p) for p in payments],
          total=len(payments),
     )


@router.get("/summary", response_model=PaymentSummaryResponse, summary="Payment totals of a property or lot")
def payment_summary(
     property_id: Optional[int] = Query(None, gt=0),
     subdivision_id: Optional[int] = Query(None, gt=0),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     try:
          return payment_service.payment_summary(db, property_id=property_id, subdivision_id=subdivision_id)
     except LandAssetError as e:
          raise http_error(e)


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED, summary="Record a payment")
def create_payment(
     body: PaymentCreate,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Record a payment.

     - **property_id** / **subdivision_id**: exactly one
     - **amount**: must be positive
     - **payment_date**: defaults to today
     - **send_receipt_to**: optional address to send the receipt to right away
     """
     try:
          payment = payment_service.add_payment(
               db,
               user_id,
               amount=body.amount,
               payment_date=body.payment_date,
               property_id=body.property_id,
               subdivision_id=body.subdivision_id,
               buyer_id=body.buyer_id,
               notes=body.notes,
               send_receipt_to=body.send_receipt_to,
          )
     except LandAssetError as e:
          raise http_error(e)
     if payment is None:
          raise failed("add payment")
     return payment


@router.get("/{payment_id}", response_model=PaymentResponse, summary="Get a payment")
def get_payment(payment_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     payment = db.get(Payment, payment_id)
     if not payment:
          raise not_found("Payment", payment_id)
     return payment


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a payment")
def delete_payment(payment_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     """The lot's status and last payment date are left as they are."""
     try:
          deleted = payment_service.delete_payment(db, payment_id)
     except LandAssetError as e:
          raise http_error(e)
     if not deleted:
          raise failed("delete payment")
     return None
