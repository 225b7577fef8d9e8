# schemas/payment.py
"""
Pydantic schemas for Payment API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, model_validator

from .buyer import BuyerResponse


class PaymentCreate(BaseModel):
     """
     Schema for recording a payment against a property or a lot.

     Exactly one of property_id / subdivision_id must be set.
     """
     property_id: Optional[int] = Field(None, gt=0)
     subdivision_id: Optional[int] = Field(None, gt=0)
     buyer_id: Optional[int] = Field(None, gt=0, description="Defaults to the property's or lot's buyer")
     amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
     payment_date: date = Field(default_factory=date.today)
     notes: Optional[str] = None
     send_receipt_to: Optional[str] = Field(
          None,
          max_length=255,
          description="Create a receipt right away and send it to this address",
     )

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "subdivision_id": 1,
                    "amount": 500.00,
                    "payment_date": "2026-03-01",
                    "notes": "March installment",
                    "send_receipt_to": "maria@example.com"
               }
          }
     )

     @model_validator(mode="after")
     def check_target(self):
          if (self.property_id is None) == (self.subdivision_id is None):
               raise ValueError("Provide exactly one of property_id or subdivision_id")
          return self


class PaymentResponse(BaseModel):
     """Schema for payment response, including the interest split."""
     id: int
     user_id: int
     property_id: Optional[int] = None
     subdivision_id: Optional[int] = None
     buyer_id: Optional[int] = None
     buyer: Optional[BuyerResponse] = None
     amount: Decimal
     payment_date: date
     notes: Optional[str] = None
     principal_amount: Optional[Decimal] = None
     interest_amount: Optional[Decimal] = None
     days_since_last_payment: Optional[int] = None
     interest_calculation_date: Optional[date] = None
     interest_rate_used: Optional[Decimal] = None
     grace_period_days: Optional[int] = None
     created_at: datetime

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 7,
                    "user_id": 1,
                    "subdivision_id": 1,
                    "amount": 500.00,
                    "payment_date": "2026-03-01",
                    "principal_amount": 200.00,
                    "interest_amount": 300.00,
                    "days_since_last_payment": 30,
                    "interest_rate_used": 0.001,
                    "grace_period_days": 30,
                    "created_at": "2026-03-01T10:30:00"
               }
          }
     )


class PaymentListResponse(BaseModel):
     payments: List[PaymentResponse]
     total: int


class PaymentSummaryResponse(BaseModel):
     """Totals for a property or a lot."""
     sale_price: Decimal
     payment_count: int
     total_paid: Decimal
     principal_paid: Decimal
     interest_paid: Decimal
     remaining_balance: Decimal
