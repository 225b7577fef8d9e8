# models/system_setting.py
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint, func

from .base import Base

GLOBAL_DAILY_INTEREST_RATE = "global_daily_interest_rate"


class SystemSetting(Base):
     """Per-user key/value setting (e.g. the default daily interest rate)."""
     __tablename__ = "system_settings"
     __table_args__ = (UniqueConstraint("user_id", "setting_key", name="uq_system_settings_user_key"),)

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, nullable=False, index=True)
     setting_key = Column(String(100), nullable=False)
     setting_value = Column(String(255), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     def __repr__(self):
          return f"<SystemSetting(user_id={self.user_id}, key='{self.setting_key}', value='{self.setting_value}')>"
