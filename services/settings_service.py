# services/settings_service.py
"""Per-user system settings (currently just the default daily interest rate)."""
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import SystemSetting, GLOBAL_DAILY_INTEREST_RATE
from services.exceptions import ValidationError

logger = logging.getLogger(__name__)


def get_setting(db: Session, user_id: int, key: str) -> Optional[str]:
     row = (
          db.query(SystemSetting)
          .filter(SystemSetting.user_id == user_id, SystemSetting.setting_key == key)
          .first()
     )
     return row.setting_value if row else None


def get_global_daily_rate(db: Session, user_id: int) -> Optional[Decimal]:
     """The user's configured default rate, or None when unset or unparseable."""
     value = get_setting(db, user_id, GLOBAL_DAILY_INTEREST_RATE)
     if value is None:
          return None
     try:
          return Decimal(value)
     except InvalidOperation:
          logger.warning("Ignoring invalid %s=%r for user %s", GLOBAL_DAILY_INTEREST_RATE, value, user_id)
          return None


def set_global_daily_rate(db: Session, user_id: int, rate: Decimal) -> Optional[SystemSetting]:
     """
     Create or update the user's default daily interest rate.

     Returns:
          The stored setting, or None if the database write failed
     """
     if rate < 0:
          raise ValidationError("Daily interest rate cannot be negative")

     row = (
          db.query(SystemSetting)
          .filter(SystemSetting.user_id == user_id, SystemSetting.setting_key == GLOBAL_DAILY_INTEREST_RATE)
          .first()
     )
     if row is None:
          row = SystemSetting(user_id=user_id, setting_key=GLOBAL_DAILY_INTEREST_RATE)
          db.add(row)
     row.setting_value = str(rate)

     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error saving %s for user %s", GLOBAL_DAILY_INTEREST_RATE, user_id)
          return None
     return row
