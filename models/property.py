# models/property.py
import enum

from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship

from .base import Base, enum_values


class PropertyStatus(str, enum.Enum):
     """Sale status of a whole property."""
     AVAILABLE = "available"
     PENDING = "pending"
     SOLD = "sold"


class Property(Base):
     """
     Property model - a registered land parcel that may be split into lots.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, nullable=False, index=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)

     # Sale
     status = Column(
          Enum(PropertyStatus, name="property_status", values_callable=enum_values),
          default=PropertyStatus.AVAILABLE,
          nullable=False,
     )
     sale_price = Column(Numeric(14, 2), default=0, nullable=False)
     buyer_id = Column(Integer, ForeignKey("buyers.id", ondelete="SET NULL"), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     buyer = relationship("Buyer")
     subdivisions = relationship(
          "Subdivision",
          back_populates="property",
          cascade="all, delete-orphan",
          order_by="Subdivision.created_at.desc()",
     )
     payments = relationship("Payment", back_populates="property", cascade="all, delete-orphan")
     documents = relationship("Document", back_populates="property", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Property(id={self.id}, title='{self.title}', status='{self.status.value}')>"
