# schemas/__init__.py
from .buyer import BuyerCreate, BuyerUpdate, BuyerResponse
from .subdivision import (
     SubdivisionCreate,
     SubdivisionUpdate,
     SubdivisionResponse,
     SubdivisionSaleRequest,
     HoldRequest,
     RecallRequest,
     RecallHistoryResponse,
     InterestPreviewResponse,
     SubdivisionSearchResult,
     SubdivisionSearchResponse,
)
from .property import (
     PropertyCreate,
     PropertyUpdate,
     PropertySaleRequest,
     PropertyResponse,
     PropertyDetailResponse,
)
from .payment import PaymentCreate, PaymentResponse, PaymentListResponse, PaymentSummaryResponse
from .document import (
     DocumentResponse,
     LabelledDocumentResponse,
     DocumentListResponse,
     DocumentCountResponse,
     SignedUrlResponse,
)
from .receipt import ReceiptEmailRequest, ReceiptEmailResponse, ReceiptResponse
from .settings import InterestSettings

__all__ = [
     "BuyerCreate",
     "BuyerUpdate",
     "BuyerResponse",
     "SubdivisionCreate",
     "SubdivisionUpdate",
     "SubdivisionResponse",
     "SubdivisionSaleRequest",
     "HoldRequest",
     "RecallRequest",
     "RecallHistoryResponse",
     "InterestPreviewResponse",
     "SubdivisionSearchResult",
     "SubdivisionSearchResponse",
     "PropertyCreate",
     "PropertyUpdate",
     "PropertySaleRequest",
     "PropertyResponse",
     "PropertyDetailResponse",
     "PaymentCreate",
     "PaymentResponse",
     "PaymentListResponse",
     "PaymentSummaryResponse",
     "DocumentResponse",
     "LabelledDocumentResponse",
     "DocumentListResponse",
     "DocumentCountResponse",
     "SignedUrlResponse",
     "ReceiptEmailRequest",
     "ReceiptEmailResponse",
     "ReceiptResponse",
     "InterestSettings",
]
