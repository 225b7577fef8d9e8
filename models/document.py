# models/document.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from .base import Base


class Document(Base):
     """
     Document model - metadata for a file held in blob storage.
     Attached to exactly one of a property, a lot or a payment.
     """
     __tablename__ = "documents"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=True, index=True)
     subdivision_id = Column(Integer, ForeignKey("subdivisions.id", ondelete="CASCADE"), nullable=True, index=True)
     payment_id = Column(Integer, ForeignKey("payments.id", ondelete="CASCADE"), nullable=True, index=True)

     name = Column(String(255), nullable=False)
     file_path = Column(String(500), nullable=False)  # opaque blob key
     file_size = Column(Integer, nullable=True)
     file_type = Column(String(255), nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     property = relationship("Property", back_populates="documents")
     subdivision = relationship("Subdivision", back_populates="documents")
     payment = relationship("Payment", back_populates="documents")

     def __repr__(self):
          return f"<Document(id={self.id}, name='{self.name}')>"
