# routers/common.py
"""
Helpers shared by the API routers.
"""
from fastapi import HTTPException, status

from services.exceptions import LandAssetError, NotFoundError, ValidationError


def http_error(exc: LandAssetError) -> HTTPException:
     """Map a service exception to the HTTP error the client sees."""
     if isinstance(exc, NotFoundError):
          return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
     if isinstance(exc, ValidationError):
          return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
     return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def failed(action: str) -> HTTPException:
     """A store write failed and was rolled back; the client may retry."""
     return HTTPException(
          status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
          detail=f"Failed to {action}",
     )


def not_found(label: str, item_id: int) -> HTTPException:
     return HTTPException(
          status_code=status.HTTP_404_NOT_FOUND,
          detail=f"{label} with ID {item_id} not found",
     )
