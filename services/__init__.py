from .exceptions import LandAssetError, NotFoundError, ValidationError
from .subdivision_service import SubdivisionService
from .interest_service import (
     allocate_payment,
     preview_interest,
     remaining_balance,
     round_currency,
     PaymentAllocation,
     InterestPreview,
)

__all__ = [
     "LandAssetError",
     "NotFoundError",
     "ValidationError",
     "SubdivisionService",
     "allocate_payment",
     "preview_interest",
     "remaining_balance",
     "round_currency",
     "PaymentAllocation",
     "InterestPreview",
]
