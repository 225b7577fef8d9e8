# schemas/buyer.py
"""
Pydantic schemas for Buyer API request/response validation.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator


def compose_name(first_name=None, middle_name=None, last_name=None, name=None) -> str:
     """Join the name parts that were given; fall back to the full name."""
     parts = [p.strip() for p in (first_name, middle_name, last_name) if p and p.strip()]
     if parts:
          return " ".join(parts)
     return (name or "").strip()


class BuyerCreate(BaseModel):
     """
     Schema for creating a buyer.

     Either a full `name` or at least one of the name parts is required;
     the parts win when both are given.
     """
     name: Optional[str] = Field(None, max_length=255)
     first_name: Optional[str] = Field(None, max_length=100)
     middle_name: Optional[str] = Field(None, max_length=100)
     last_name: Optional[str] = Field(None, max_length=100)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = Field(None, max_length=50)
     address: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "first_name": "Maria",
                    "last_name": "Santos",
                    "email": "maria@example.com",
                    "phone": "555-0100"
               }
          }
     )

     @model_validator(mode="after")
     def build_name(self):
          self.name = compose_name(self.first_name, self.middle_name, self.last_name, self.name)
          if not self.name:
               raise ValueError("Buyer name is required")
          return self


class BuyerUpdate(BaseModel):
     """Schema for updating a buyer."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = Field(None, max_length=50)
     address: Optional[str] = None

     @field_validator("name")
     @classmethod
     def name_not_null(cls, value):
          if value is None:
               raise ValueError("name cannot be null")
          return value


class BuyerResponse(BaseModel):
     """Schema for buyer response."""
     id: int
     name: str
     email: Optional[str] = None
     phone: Optional[str] = None
     address: Optional[str] = None
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)
