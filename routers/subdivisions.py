# routers/subdivisions.py
"""
Subdivision (lot) API routes.

Provides lot CRUD and search, the sale/hold/recall workflows, recall
history and the interest calculator.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user_id
from routers.common import failed, http_error, not_found
from schemas.subdivision import (
     SubdivisionUpdate,
     SubdivisionResponse,
     SubdivisionSaleRequest,
     HoldRequest,
     RecallRequest,
     RecallHistoryResponse,
     InterestPreviewResponse,
     SubdivisionSearchResult,
     SubdivisionSearchResponse,
)
from services import payment_service, recall_service, sale_service
from services.exceptions import LandAssetError
from services.subdivision_service import SubdivisionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/subdivisions", tags=["subdivisions"])


def _get_lot(db: Session, subdivision_id: int):
     lot = SubdivisionService.get(db, subdivision_id)
     if not lot:
          raise not_found("Subdivision", subdivision_id)
     return lot


@router.get("/search", response_model=SubdivisionSearchResponse, summary="Search lots")
def search_subdivisions(
     sale_price: Optional[Decimal] = Query(None, description="Exact sale price"),
     submission_date: Optional[date] = Query(None, description="Exact submission date"),
     acres: Optional[Decimal] = Query(None, description="Exact acreage"),
     lot_number: Optional[str] = Query(None),
     surveyor_plan_number: Optional[str] = Query(None),
     registration_number: Optional[str] = Query(None),
     mutation_number: Optional[str] = Query(None),
     owner_first_name: Optional[str] = Query(None),
     owner_middle_name: Optional[str] = Query(None),
     owner_last_name: Optional[str] = Query(None),
     title_nes_number: Optional[str] = Query(None),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Search lots across all properties.

     - **sale_price**, **submission_date**, **acres**: exact match
     - everything else: case-insensitive "contains"
     """
     rows = SubdivisionService.search(
          db,
          sale_price=sale_price,
          submission_date=submission_date,
          acres=acres,
          lot_number=lot_number,
          surveyor_plan_number=surveyor_plan_number,
          registration_number=registration_number,
          mutation_number=mutation_number,
          owner_first_name=owner_first_name,
          owner_middle_name=owner_middle_name,
          owner_last_name=owner_last_name,
          title_nes_number=title_nes_number,
     )
     results = [
          SubdivisionSearchResult(
               **SubdivisionResponse.model_validate(row["subdivision"]).model_dump(),
               property_title=row["property_title"],
          )
          for row in rows
     ]
     return SubdivisionSearchResponse(results=results, total=len(results))


@router.get("/{subdivision_id}", response_model=SubdivisionResponse, summary="Get a lot with its buyer")
def get_subdivision(subdivision_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     return _get_lot(db, subdivision_id)


@router.put("/{subdivision_id}", response_model=SubdivisionResponse, summary="Update a lot")
def update_subdivision(
     subdivision_id: int,
     body: SubdivisionUpdate,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     lot = _get_lot(db, subdivision_id)
     for field, value in body.model_dump(exclude_unset=True).items():
          setattr(lot, field, value)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error updating subdivision %s", subdivision_id)
          raise failed("update subdivision")
     db.refresh(lot)
     return lot


@router.delete("/{subdivision_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a lot")
def delete_subdivision(subdivision_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     lot = _get_lot(db, subdivision_id)
     try:
          db.delete(lot)
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error deleting subdivision %s", subdivision_id)
          raise failed("delete subdivision")
     return None


@router.post("/{subdivision_id}/sale", response_model=SubdivisionResponse, summary="Sell a lot")
def sell_subdivision(
     subdivision_id: int,
     body: SubdivisionSaleRequest,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Sell a lot under a payment plan.

     - **full**: recorded as fully paid right away
     - **mortgage**: payments accrue simple daily interest
     - **hold**: requires hold_amount and hold_until_date; the deposit is recorded as a payment
     """
     try:
          lot = sale_service.sell_subdivision(
               db,
               user_id,
               subdivision_id,
               buyer_id=body.buyer_id,
               sale_price=body.sale_price,
               plan=body.payment_plan_type,
               daily_interest_rate=body.daily_interest_rate,
               grace_period_days=body.interest_grace_period_days,
               hold_amount=body.hold_amount,
               hold_until_date=body.hold_until_date,
          )
     except LandAssetError as e:
          raise http_error(e)
     if lot is None:
          raise failed("update subdivision sale")
     return _get_lot(db, subdivision_id)


@router.post("/{subdivision_id}/hold", response_model=SubdivisionResponse, summary="Place a hold on a lot")
def place_hold(
     subdivision_id: int,
     body: HoldRequest,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     try:
          lot = sale_service.place_hold(
               db,
               user_id,
               subdivision_id,
               buyer_id=body.buyer_id,
               hold_amount=body.hold_amount,
               hold_until_date=body.hold_until_date,
               notes=body.notes,
          )
     except LandAssetError as e:
          raise http_error(e)
     if lot is None:
          raise failed("place hold")
     return _get_lot(db, subdivision_id)


@router.post("/{subdivision_id}/recall", response_model=SubdivisionResponse, summary="Recall a lot")
def recall_subdivision(
     subdivision_id: int,
     body: RecallRequest,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Reverse a sale or hold. Payments, receipts and documents of the lot are
     deleted and a history record keeps the buyer and totals.
     """
     try:
          lot = recall_service.recall_subdivision(db, user_id, subdivision_id, body.reason)
     except LandAssetError as e:
          raise http_error(e)
     if lot is None:
          raise failed("recall subdivision")
     return _get_lot(db, subdivision_id)


@router.get(
     "/{subdivision_id}/recall-history",
     response_model=List[RecallHistoryResponse],
     summary="List a lot's recalls"
)
def recall_history(subdivision_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     _get_lot(db, subdivision_id)
     return recall_service.list_recall_history(db, subdivision_id)


@router.get(
     "/{subdivision_id}/interest",
     response_model=InterestPreviewResponse,
     summary="Interest owed as of a date"
)
def interest_preview(
     subdivision_id: int,
     as_of: Optional[date] = Query(None, description="Date the buyer would pay (defaults to today)"),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     as_of = as_of or date.today()
     try:
          preview = payment_service.interest_preview(db, user_id, subdivision_id, as_of)
     except LandAssetError as e:
          raise http_error(e)
     return InterestPreviewResponse(as_of=as_of, **preview._asdict())
