# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models import PropertyStatus
from .buyer import BuyerResponse
from .subdivision import SubdivisionResponse


class PropertyCreate(BaseModel):
     """Schema for creating a new property."""
     title: str = Field(..., min_length=1, max_length=255)
     description: Optional[str] = None
     sale_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=14, decimal_places=2)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Riverside Estate",
                    "description": "40 acres along the river road",
                    "sale_price": 250000.00
               }
          }
     )


class PropertyUpdate(BaseModel):
     """Schema for updating a property."""
     title: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = None
     sale_price: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
     status: Optional[PropertyStatus] = None

     @field_validator("title", "sale_price", "status")
     @classmethod
     def not_null(cls, value, info):
          if value is None:
               raise ValueError(f"{info.field_name} cannot be null")
          return value


class PropertySaleRequest(BaseModel):
     """Put a whole property under sale (status becomes pending)."""
     buyer_id: int = Field(..., gt=0)
     sale_price: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)


class PropertyResponse(BaseModel):
     """Schema for property response."""
     id: int
     user_id: int
     title: str
     description: Optional[str] = None
     status: PropertyStatus
     sale_price: Decimal
     buyer_id: Optional[int] = None
     buyer: Optional[BuyerResponse] = None
     created_at: datetime
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class PropertyDetailResponse(PropertyResponse):
     """Property with its lots, newest first."""
     subdivisions: List[SubdivisionResponse] = []
