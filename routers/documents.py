# routers/documents.py
"""
Document API routes.

Files go to blob storage; rows here only keep the opaque storage key.
Every document belongs to exactly one property, lot or payment.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from config import SIGNED_URL_TTL_SECONDS
from database import get_session
from dependencies import get_current_user_id
from routers.common import failed, http_error
from schemas.document import (
     DocumentResponse,
     LabelledDocumentResponse,
     DocumentListResponse,
     DocumentCountResponse,
     SignedUrlResponse,
)
from services import document_service
from services.document_service import UploadedFile
from services.exceptions import LandAssetError

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _read(upload: UploadFile) -> UploadedFile:
     return UploadedFile(name=upload.filename or "file", content_type=upload.content_type, data=upload.file.read())


@router.post(
     "",
     response_model=List[DocumentResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Upload documents"
)
def upload_documents(
     files: List[UploadFile] = File(...),
     property_id: Optional[int] = Form(None),
     subdivision_id: Optional[int] = Form(None),
     payment_id: Optional[int] = Form(None),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """Files that fail to upload are skipped; the response lists the ones stored."""
     try:
          return document_service.upload_documents(
               db,
               user_id,
               [_read(f) for f in files],
               property_id=property_id,
               subdivision_id=subdivision_id,
               payment_id=payment_id,
          )
     except LandAssetError as e:
          raise http_error(e)


@router.get("", response_model=DocumentListResponse, summary="List documents")
def list_documents(
     property_id: Optional[int] = Query(None),
     subdivision_id: Optional[int] = Query(None),
     payment_id: Optional[int] = Query(None),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     try:
          documents = document_service.list_documents(
               db, property_id=property_id, subdivision_id=subdivision_id, payment_id=payment_id
          )
     except LandAssetError as e:
          raise http_error(e)
     return DocumentListResponse(
          documents=[DocumentResponse.model_validate(d) for d in documents],
          total=len(documents),
     )


@router.get("/count", response_model=DocumentCountResponse, summary="Count documents")
def count_documents(
     property_id: Optional[int] = Query(None),
     subdivision_id: Optional[int] = Query(None),
     payment_id: Optional[int] = Query(None),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     try:
          count = document_service.count_documents(
               db, property_id=property_id, subdivision_id=subdivision_id, payment_id=payment_id
          )
     except LandAssetError as e:
          raise http_error(e)
     return DocumentCountResponse(count=count)


@router.get(
     "/property/{property_id}/all",
     response_model=List[LabelledDocumentResponse],
     summary="All documents under a property"
)
def all_documents_for_property(
     property_id: int,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """The property's own documents, its lots', and those of payments against either, newest first."""
     try:
          labelled = document_service.all_documents_for_property(db, property_id)
     except LandAssetError as e:
          raise http_error(e)
     return [
          LabelledDocumentResponse(
               **DocumentResponse.model_validate(item.document).model_dump(),
               source=item.source,
               source_type=item.source_type,
          )
          for item in labelled
     ]


@router.get("/{document_id}/url", response_model=SignedUrlResponse, summary="Temporary download link")
def document_url(document_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     try:
          url = document_service.signed_url(db, document_id)
     except LandAssetError as e:
          raise http_error(e)
     return SignedUrlResponse(url=url, expires_in=SIGNED_URL_TTL_SECONDS)


@router.put("/{document_id}", response_model=DocumentResponse, summary="Replace a document's file")
def replace_document(
     document_id: int,
     file: UploadFile = File(...),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     try:
          document = document_service.replace_document(db, user_id, document_id, _read(file))
     except LandAssetError as e:
          raise http_error(e)
     if document is None:
          raise failed("replace document")
     return document


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a document")
def delete_document(document_id: int, db: Session = Depends(get_session), user_id: int = Depends(get_current_user_id)):
     try:
          deleted = document_service.delete_document(db, document_id)
     except LandAssetError as e:
          raise http_error(e)
     if not deleted:
          raise failed("delete document")
     return None
