# routers/buyers.py
"""
Buyer API routes for land-asset backend.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user_id
from models import Buyer, Payment, Property, Subdivision
from routers.common import failed, not_found
from schemas.buyer import BuyerCreate, BuyerUpdate, BuyerResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/buyers", tags=["buyers"])


def _get_buyer(db: Session, buyer_id: int) -> Buyer:
     buyer = db.query(Buyer).filter(Buyer.id == buyer_id).first()
     if not buyer:
          raise not_found("Buyer", buyer_id)
     return buyer


@router.post("", response_model=BuyerResponse, status_code=status.HTTP_201_CREATED, summary="Create a buyer")
def create_buyer(body: BuyerCreate, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     """
     Create a buyer.

     - **name**: full name, or
     - **first_name** / **middle_name** / **last_name**: joined into the name
     """
     buyer = Buyer(
          user_id=user_id,
          name=body.name,
          email=(body.email or "").strip() or None,
          phone=(body.phone or "").strip() or None,
          address=body.address,
     )
     db.add(buyer)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error creating buyer")
          raise failed("create buyer")
     db.refresh(buyer)
     return buyer


@router.get("", response_model=List[BuyerResponse], summary="List buyers")
def list_buyers(db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     return db.query(Buyer).order_by(Buyer.name.asc(), Buyer.id.asc()).all()


@router.get("/{buyer_id}", response_model=BuyerResponse, summary="Get a buyer")
def get_buyer(buyer_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     return _get_buyer(db, buyer_id)


@router.put("/{buyer_id}", response_model=BuyerResponse, summary="Update a buyer")
def update_buyer(
     buyer_id: int,
     body: BuyerUpdate,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     buyer = _get_buyer(db, buyer_id)
     for field, value in body.model_dump(exclude_unset=True).items():
          setattr(buyer, field, value)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error updating buyer %s", buyer_id)
          raise failed("update buyer")
     db.refresh(buyer)
     return buyer


@router.delete("/{buyer_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a buyer")
def delete_buyer(buyer_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     """Properties, lots and payments that referenced the buyer keep their rows with no buyer."""
     buyer = _get_buyer(db, buyer_id)
     try:
          for model in (Subdivision, Payment, Property):
               db.execute(update(model).where(model.buyer_id == buyer_id).values(buyer_id=None))
          db.delete(buyer)
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error deleting buyer %s", buyer_id)
          raise failed("delete buyer")
     return None
