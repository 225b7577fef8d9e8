# routers/properties.py
"""
Property API routes.

Plain CRUD over properties, plus putting a whole property under sale.
Lots, payments and documents hang off a property but have their own routers.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from database import get_session
from dependencies import get_current_user_id
from models import Property, Subdivision
from routers.common import failed, http_error, not_found
from schemas.property import (
     PropertyCreate,
     PropertyUpdate,
     PropertySaleRequest,
     PropertyResponse,
     PropertyDetailResponse,
)
from schemas.subdivision import SubdivisionCreate, SubdivisionResponse
from services import sale_service
from services.exceptions import LandAssetError
from services.subdivision_service import SubdivisionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _get_property(db: Session, property_id: int) -> Property:
     prop = (
          db.query(Property)
          .options(joinedload(Property.buyer))
          .filter(Property.id == property_id)
          .first()
     )
     if not prop:
          raise not_found("Property", property_id)
     return prop


@router.post(
     "",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a property"
)
def create_property(
     body: PropertyCreate,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     prop = Property(user_id=user_id, **body.model_dump())
     db.add(prop)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error creating property")
          raise failed("create property")
     db.refresh(prop)
     return prop


@router.get("", response_model=List[PropertyResponse], summary="List properties")
def list_properties(db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     """All properties, newest first, with their buyer."""
     return (
          db.query(Property)
          .options(joinedload(Property.buyer))
          .order_by(Property.created_at.desc(), Property.id.desc())
          .all()
     )


@router.get("/{property_id}", response_model=PropertyDetailResponse, summary="Get a property with its lots")
def get_property(property_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     """Lots come back newest first."""
     return _get_property(db, property_id)


@router.put("/{property_id}", response_model=PropertyResponse, summary="Update a property")
def update_property(
     property_id: int,
     body: PropertyUpdate,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     prop = _get_property(db, property_id)
     for field, value in body.model_dump(exclude_unset=True).items():
          setattr(prop, field, value)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error updating property %s", property_id)
          raise failed("update property")
     db.refresh(prop)
     return prop


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a property")
def delete_property(property_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     """Deletes the property together with its lots, payments and documents."""
     prop = _get_property(db, property_id)
     try:
          db.delete(prop)
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error deleting property %s", property_id)
          raise failed("delete property")
     return None


@router.post("/{property_id}/sale", response_model=PropertyResponse, summary="Put a property under sale")
def sell_property(
     property_id: int,
     body: PropertySaleRequest,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """Sets buyer and price; the property stays pending until payments cover the price."""
     try:
          prop = sale_service.sell_property(db, property_id, body.buyer_id, body.sale_price)
     except LandAssetError as e:
          raise http_error(e)
     if prop is None:
          raise failed("sell property")
     return _get_property(db, property_id)


@router.post(
     "/{property_id}/subdivisions",
     response_model=SubdivisionResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a lot to a property"
)
def create_subdivision(
     property_id: int,
     body: SubdivisionCreate,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """New lots start available with payment type full."""
     _get_property(db, property_id)
     lot = Subdivision(property_id=property_id, user_id=user_id, **body.model_dump())
     db.add(lot)
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error creating subdivision for property %s", property_id)
          raise failed("create subdivision")
     db.refresh(lot)
     return lot


@router.get(
     "/{property_id}/subdivisions",
     response_model=List[SubdivisionResponse],
     summary="List a property's lots"
)
def list_subdivisions(property_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     _get_property(db, property_id)
     return SubdivisionService.for_property(db, property_id)

