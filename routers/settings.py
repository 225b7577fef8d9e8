# routers/settings.py
"""
Per-user settings routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user_id
from routers.common import failed, http_error
from schemas.settings import InterestSettings
from services import settings_service
from services.exceptions import LandAssetError
from services.interest_service import resolve_daily_rate

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/interest", response_model=InterestSettings, summary="Default daily interest rate")
def get_interest_settings(db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     """Falls back to the configured default when the user hasn't set one."""
     rate = resolve_daily_rate(None, settings_service.get_global_daily_rate(db, user_id))
     return InterestSettings(global_daily_interest_rate=rate)


@router.put("/interest", response_model=InterestSettings, summary="Set the default daily interest rate")
def set_interest_settings(
     body: InterestSettings,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     try:
          row = settings_service.set_global_daily_rate(db, user_id, body.global_daily_interest_rate)
     except LandAssetError as e:
          raise http_error(e)
     if row is None:
          raise failed("save settings")
     return body
