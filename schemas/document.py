# schemas/document.py
"""
Pydantic schemas for Document API responses.
Uploads arrive as multipart form data, so there are no request bodies here.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict


class DocumentResponse(BaseModel):
     id: int
     user_id: int
     property_id: Optional[int] = None
     subdivision_id: Optional[int] = None
     payment_id: Optional[int] = None
     name: str
     file_path: str
     file_size: Optional[int] = None
     file_type: Optional[str] = None
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class LabelledDocumentResponse(DocumentResponse):
     """A document shown in a property's combined list, with where it came from."""
     source: str
     source_type: str


class DocumentListResponse(BaseModel):
     documents: List[DocumentResponse]
     total: int


class DocumentCountResponse(BaseModel):
     count: int


class SignedUrlResponse(BaseModel):
     url: str
     expires_in: int
