# models/subdivision.py
import enum

from sqlalchemy import (
     Column, Integer, String, Text, Numeric, Date, DateTime, ForeignKey, Enum, func
)
from sqlalchemy.orm import relationship

from .base import Base, enum_values


class SubdivisionStatus(str, enum.Enum):
     """Lifecycle status of a lot."""
     ON_HOLD = "on_hold"
     AVAILABLE = "available"
     MORTGAGE = "mortgage"
     SOLD = "sold"
     PAID_IN_FULL = "paid_in_full"
     RECALLED = "recalled"


class PaymentPlanType(str, enum.Enum):
     """Plan chosen when the lot was sold."""
     FULL = "full"
     MORTGAGE = "mortgage"
     HOLD = "hold"


class PaymentType(str, enum.Enum):
     """Legacy payment type kept alongside the plan type."""
     FULL = "full"
     MORTGAGE = "mortgage"
     INSTALLMENT = "installment"


class Subdivision(Base):
     """
     Subdivision model - an independently sellable lot within a property.

     Sale, hold and interest state live directly on the row and are
     cleared again by a recall.
     """
     __tablename__ = "subdivisions"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     user_id = Column(Integer, nullable=False, index=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)

     status = Column(
          Enum(SubdivisionStatus, name="subdivision_status", values_callable=enum_values),
          default=SubdivisionStatus.AVAILABLE,
          nullable=False,
          index=True,
     )
     sale_price = Column(Numeric(14, 2), default=0, nullable=False)
     buyer_id = Column(Integer, ForeignKey("buyers.id", ondelete="SET NULL"), nullable=True)

     # Lot information
     lot_number = Column(String(100), nullable=True)
     surveyor_plan_number = Column(String(100), nullable=True)
     registration_number = Column(String(100), nullable=True)
     mutation_number = Column(String(100), nullable=True)

     # Physical dimensions
     acres = Column(Numeric(12, 4), nullable=True)
     length = Column(Numeric(12, 2), nullable=True)
     width = Column(Numeric(12, 2), nullable=True)

     # Owner information
     owner_first_name = Column(String(100), nullable=True)
     owner_middle_name = Column(String(100), nullable=True)
     owner_last_name = Column(String(100), nullable=True)
     title_nes_number = Column(String(100), nullable=True)
     submission_date = Column(Date, nullable=True)

     # Hold
     hold_until_date = Column(Date, nullable=True)
     hold_amount = Column(Numeric(14, 2), nullable=True)

     # Payment plan and interest
     payment_type = Column(
          Enum(PaymentType, name="payment_type", values_callable=enum_values),
          default=PaymentType.FULL,
          nullable=False,
     )
     payment_plan_type = Column(
          Enum(PaymentPlanType, name="payment_plan_type", values_callable=enum_values),
          nullable=True,
     )
     daily_interest_rate = Column(Numeric(10, 6), nullable=True)
     interest_grace_period_days = Column(Integer, nullable=True)  # stored, never applied
     last_payment_date = Column(Date, nullable=True)
     total_interest_charged = Column(Numeric(14, 2), nullable=True)

     # Recall
     recall_date = Column(Date, nullable=True)
     recall_reason = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     property = relationship("Property", back_populates="subdivisions")
     buyer = relationship("Buyer")
     payments = relationship("Payment", back_populates="subdivision", cascade="all, delete-orphan")
     documents = relationship("Document", back_populates="subdivision", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Subdivision(id={self.id}, title='{self.title}', status='{self.status.value}')>"
