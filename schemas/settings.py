# schemas/settings.py
"""
Pydantic schemas for per-user settings.
"""
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict


class InterestSettings(BaseModel):
     """Default daily interest rate used when a lot has no rate of its own."""
     global_daily_interest_rate: Decimal = Field(..., ge=0, max_digits=10, decimal_places=6)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "global_daily_interest_rate": 0.001
               }
          }
     )
