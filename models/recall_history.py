# models/recall_history.py
"""
SubdivisionRecallHistory model - archive of a lot's sale state at recall time.

The recall deletes payments, receipts and documents; this row is the only
trace of the reversed sale that remains for reporting.
"""
from sqlalchemy import Column, Integer, String, Text, Numeric, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from .base import Base


class SubdivisionRecallHistory(Base):
     __tablename__ = "subdivision_recall_history"

     id = Column(Integer, primary_key=True, autoincrement=True)
     subdivision_id = Column(Integer, ForeignKey("subdivisions.id", ondelete="CASCADE"), nullable=False, index=True)
     user_id = Column(Integer, nullable=False, index=True)
     buyer_id = Column(Integer, nullable=True)  # no FK: the buyer may be deleted later
     recall_reason = Column(Text, nullable=False)

     sale_price = Column(Numeric(14, 2), nullable=True)
     total_paid = Column(Numeric(14, 2), nullable=False, default=0)
     hold_amount = Column(Numeric(14, 2), nullable=True)
     hold_until_date = Column(Date, nullable=True)
     payment_plan_type = Column(String(20), nullable=True)

     # Buyer snapshot
     buyer_name = Column(String(255), nullable=True)
     buyer_email = Column(String(255), nullable=True)
     buyer_phone = Column(String(50), nullable=True)

     recalled_at = Column(DateTime, server_default=func.now(), nullable=False)

     subdivision = relationship("Subdivision")

     def __repr__(self):
          return f"<SubdivisionRecallHistory(id={self.id}, subdivision_id={self.subdivision_id}, buyer='{self.buyer_name}')>"
