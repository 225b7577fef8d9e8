# schemas/subdivision.py
"""
Pydantic schemas for Subdivision (lot) API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from models import SubdivisionStatus, PaymentPlanType, PaymentType
from .buyer import BuyerResponse


class SubdivisionFields(BaseModel):
     """Descriptive fields shared by create and update."""
     description: Optional[str] = None
     lot_number: Optional[str] = Field(None, max_length=100)
     surveyor_plan_number: Optional[str] = Field(None, max_length=100)
     registration_number: Optional[str] = Field(None, max_length=100)
     mutation_number: Optional[str] = Field(None, max_length=100)
     acres: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=4)
     length: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     width: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     owner_first_name: Optional[str] = Field(None, max_length=100)
     owner_middle_name: Optional[str] = Field(None, max_length=100)
     owner_last_name: Optional[str] = Field(None, max_length=100)
     title_nes_number: Optional[str] = Field(None, max_length=100)
     submission_date: Optional[date] = None


class SubdivisionCreate(SubdivisionFields):
     """Schema for creating a lot. New lots start available with payment type full."""
     title: str = Field(..., min_length=1, max_length=255)
     sale_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=14, decimal_places=2)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Lot 4",
                    "lot_number": "4",
                    "acres": 1.25,
                    "sale_price": 15000.00,
                    "owner_first_name": "Ana",
                    "owner_last_name": "Reyes"
               }
          }
     )


class SubdivisionUpdate(SubdivisionFields):
     """Schema for updating a lot's descriptive fields."""
     title: Optional[str] = Field(None, min_length=1, max_length=255)
     sale_price: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
     daily_interest_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=6)
     interest_grace_period_days: Optional[int] = Field(None, ge=0)

     @field_validator("title", "sale_price")
     @classmethod
     def not_null(cls, value, info):
          if value is None:
               raise ValueError(f"{info.field_name} cannot be null")
          return value


class SubdivisionSaleRequest(BaseModel):
     """Sell a lot under a payment plan."""
     buyer_id: int = Field(..., gt=0)
     sale_price: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
     payment_plan_type: PaymentPlanType
     daily_interest_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=6)
     interest_grace_period_days: Optional[int] = Field(None, ge=0)
     hold_amount: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
     hold_until_date: Optional[date] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "buyer_id": 1,
                    "sale_price": 10000.00,
                    "payment_plan_type": "mortgage",
                    "daily_interest_rate": 0.001,
                    "interest_grace_period_days": 30
               }
          }
     )

     @model_validator(mode="after")
     def check_hold_fields(self):
          if self.payment_plan_type == PaymentPlanType.HOLD:
               if self.hold_amount is None or self.hold_until_date is None:
                    raise ValueError("hold_amount and hold_until_date are required for a hold")
          return self


class HoldRequest(BaseModel):
     """Reserve a lot for a buyer against a deposit."""
     buyer_id: int = Field(..., gt=0)
     hold_amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
     hold_until_date: date
     notes: Optional[str] = None


class RecallRequest(BaseModel):
     reason: str = Field(..., min_length=1)


class SubdivisionResponse(SubdivisionFields):
     """Schema for lot response."""
     id: int
     property_id: int
     user_id: int
     title: str
     status: SubdivisionStatus
     sale_price: Decimal
     buyer_id: Optional[int] = None
     buyer: Optional[BuyerResponse] = None

     hold_until_date: Optional[date] = None
     hold_amount: Optional[Decimal] = None
     payment_type: PaymentType
     payment_plan_type: Optional[PaymentPlanType] = None
     daily_interest_rate: Optional[Decimal] = None
     interest_grace_period_days: Optional[int] = None
     last_payment_date: Optional[date] = None
     total_interest_charged: Optional[Decimal] = None
     recall_date: Optional[date] = None
     recall_reason: Optional[str] = None

     created_at: datetime
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class SubdivisionSearchResult(SubdivisionResponse):
     property_title: str


class RecallHistoryResponse(BaseModel):
     id: int
     subdivision_id: int
     buyer_id: Optional[int] = None
     recall_reason: str
     sale_price: Optional[Decimal] = None
     total_paid: Decimal
     hold_amount: Optional[Decimal] = None
     hold_until_date: Optional[date] = None
     payment_plan_type: Optional[str] = None
     buyer_name: Optional[str] = None
     buyer_email: Optional[str] = None
     buyer_phone: Optional[str] = None
     recalled_at: datetime

     model_config = ConfigDict(from_attributes=True)


class InterestPreviewResponse(BaseModel):
     as_of: date
     days: int
     interest: Decimal
     balance: Decimal
     total_due: Decimal


class SubdivisionSearchResponse(BaseModel):
     results: List[SubdivisionSearchResult]
     total: int
