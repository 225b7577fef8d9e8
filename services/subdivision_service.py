# services/subdivision_service.py
"""
Subdivision Service - lot lookup and search.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from models import Subdivision

UNKNOWN_PROPERTY = "Unknown Property"

# Filters matched as case-insensitive substrings
TEXT_FILTERS = (
     "lot_number",
     "surveyor_plan_number",
     "registration_number",
     "mutation_number",
     "owner_first_name",
     "owner_middle_name",
     "owner_last_name",
     "title_nes_number",
)


class SubdivisionService:
     """Service class for lot queries that go beyond plain CRUD."""

     @staticmethod
     def get(db: Session, subdivision_id: int) -> Optional[Subdivision]:
          return (
               db.query(Subdivision)
               .populate_existing()
               .options(joinedload(Subdivision.buyer))
               .filter(Subdivision.id == subdivision_id)
               .first()
          )

     @staticmethod
     def search(
          db: Session,
          sale_price: Optional[Decimal] = None,
          submission_date: Optional[date] = None,
          acres: Optional[Decimal] = None,
          **text_filters: Optional[str],
     ) -> List[dict]:
          """
          Search lots across all properties.

          Sale price, submission date and acres must match exactly; the
          legal-description fields in TEXT_FILTERS match anywhere, ignoring
          case. Blank filters are ignored.

          Returns:
               Rows of {"subdivision": Subdivision, "property_title": str}, newest first
          """
          unknown = set(text_filters) - set(TEXT_FILTERS)
          if unknown:
               raise TypeError(f"Unknown search filter(s): {', '.join(sorted(unknown))}")

          query = db.query(Subdivision).options(joinedload(Subdivision.property))
          if sale_price is not None:
               query = query.filter(Subdivision.sale_price == sale_price)
          if submission_date is not None:
               query = query.filter(Subdivision.submission_date == submission_date)
          if acres is not None:
               query = query.filter(Subdivision.acres == acres)
          for field, value in text_filters.items():
               value = (value or "").strip()
               if value:
                    query = query.filter(getattr(Subdivision, field).ilike(f"%{value}%"))

          results = query.order_by(Subdivision.created_at.desc(), Subdivision.id.desc()).all()
          return [
               {
                    "subdivision": lot,
                    "property_title": lot.property.title if lot.property else UNKNOWN_PROPERTY,
               }
               for lot in results
          ]

     @staticmethod
     def for_property(db: Session, property_id: int) -> List[Subdivision]:
          return (
               db.query(Subdivision)
               .options(joinedload(Subdivision.buyer))
               .filter(Subdivision.property_id == property_id)
               .order_by(Subdivision.created_at.desc(), Subdivision.id.desc())
               .all()
          )

