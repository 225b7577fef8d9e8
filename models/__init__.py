# models/__init__.py
from .base import Base
from .buyer import Buyer
from .property import Property, PropertyStatus
from .subdivision import Subdivision, SubdivisionStatus, PaymentPlanType, PaymentType
from .payment import Payment
from .document import Document
from .receipt import Receipt, ReceiptEmail
from .recall_history import SubdivisionRecallHistory
from .system_setting import SystemSetting, GLOBAL_DAILY_INTEREST_RATE

__all__ = [
     "Base",
     "Buyer",
     "Property",
     "PropertyStatus",
     "Subdivision",
     "SubdivisionStatus",
     "PaymentPlanType",
     "PaymentType",
     "Payment",
     "Document",
     "Receipt",
     "ReceiptEmail",
     "SubdivisionRecallHistory",
     "SystemSetting",
     "GLOBAL_DAILY_INTEREST_RATE",
]
