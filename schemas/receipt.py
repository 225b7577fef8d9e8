# schemas/receipt.py
"""
Pydantic schemas for Receipt API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from .buyer import BuyerResponse
from .payment import PaymentResponse


class ReceiptEmailRequest(BaseModel):
     email_address: str = Field(..., min_length=3, max_length=255)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "email_address": "maria@example.com"
               }
          }
     )


class ReceiptEmailResponse(BaseModel):
     id: int
     receipt_id: int
     email_address: str
     sent_at: datetime

     model_config = ConfigDict(from_attributes=True)


class ReceiptResponse(BaseModel):
     """Everything needed to print a receipt."""
     id: int
     receipt_number: str
     created_at: datetime
     payment: PaymentResponse
     buyer: Optional[BuyerResponse] = None
     property_title: Optional[str] = None
     subdivision_title: Optional[str] = None
     sale_price: Decimal
     total_paid_before: Decimal
     balance_after: Decimal
     emails: List[ReceiptEmailResponse] = []

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 1,
                    "receipt_number": "RCP-LZ3K1Q2A-X7QF",
                    "created_at": "2026-03-01T10:31:00",
                    "property_title": "Riverside Estate",
                    "subdivision_title": "Lot 4",
                    "sale_price": 10000.00,
                    "total_paid_before": 1000.00,
                    "balance_after": 8500.00,
                    "emails": []
               }
          }
     )
