# models/payment.py
from sqlalchemy import Column, Integer, Numeric, Date, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from .base import Base


class Payment(Base):
     """
     Payment model - money received against a property or a lot.

     The principal/interest split is computed once at insert time and
     never recomputed.
     """
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=True, index=True)
     subdivision_id = Column(Integer, ForeignKey("subdivisions.id", ondelete="CASCADE"), nullable=True, index=True)
     buyer_id = Column(Integer, ForeignKey("buyers.id", ondelete="SET NULL"), nullable=True)

     amount = Column(Numeric(14, 2), nullable=False)
     payment_date = Column(Date, nullable=False, index=True)
     notes = Column(Text, nullable=True)

     # Interest allocation snapshot
     principal_amount = Column(Numeric(14, 2), nullable=True)
     interest_amount = Column(Numeric(14, 2), nullable=True)
     days_since_last_payment = Column(Integer, nullable=True)
     interest_calculation_date = Column(Date, nullable=True)
     interest_rate_used = Column(Numeric(10, 6), nullable=True)
     grace_period_days = Column(Integer, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     property = relationship("Property", back_populates="payments")
     subdivision = relationship("Subdivision", back_populates="payments")
     buyer = relationship("Buyer")
     receipt = relationship("Receipt", back_populates="payment", uselist=False, cascade="all, delete-orphan")
     documents = relationship("Document", back_populates="payment", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Payment(id={self.id}, amount={self.amount}, payment_date={self.payment_date})>"
