# models/buyer.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func

from .base import Base


class Buyer(Base):
     """Buyer model - a party that holds, buys or pays for land."""
     __tablename__ = "buyers"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, nullable=False, index=True)
     name = Column(String(255), nullable=False, index=True)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)
     address = Column(Text, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Buyer(id={self.id}, name='{self.name}')>"
