# models/receipt.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from .base import Base


class Receipt(Base):
     """Receipt model - at most one per payment."""
     __tablename__ = "receipts"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, nullable=False, index=True)
     payment_id = Column(
          Integer,
          ForeignKey("payments.id", ondelete="CASCADE"),
          nullable=False,
          unique=True,
          index=True,
     )
     receipt_number = Column(String(64), nullable=False, unique=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     payment = relationship("Payment", back_populates="receipt")
     emails = relationship(
          "ReceiptEmail",
          back_populates="receipt",
          cascade="all, delete-orphan",
          order_by="[ReceiptEmail.sent_at.desc(), ReceiptEmail.id.desc()]",
     )

     def __repr__(self):
          return f"<Receipt(id={self.id}, receipt_number='{self.receipt_number}')>"


class ReceiptEmail(Base):
     """
     Write-only record that a receipt was sent to an address.
     Delivery itself is optional (see utils.email).
     """
     __tablename__ = "receipt_emails"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, nullable=False, index=True)
     receipt_id = Column(Integer, ForeignKey("receipts.id", ondelete="CASCADE"), nullable=False, index=True)
     email_address = Column(String(255), nullable=False)
     sent_at = Column(DateTime, server_default=func.now(), nullable=False)

     receipt = relationship("Receipt", back_populates="emails")

     def __repr__(self):
          return f"<ReceiptEmail(id={self.id}, receipt_id={self.receipt_id}, to='{self.email_address}')>"
