# services/document_service.py
"""
Document Service - files attached to properties, lots and payments.

File bytes live in blob storage under an opaque key; the documents table
holds the metadata. Storage errors on upload skip that file; storage
errors on removal are logged and the database side still proceeds.
"""
import logging
import os
import random
import string
import time
from typing import Iterable, List, NamedTuple, Optional

from azure.core.exceptions import AzureError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from azure_blob import upload_to_blob, delete_from_blob, generate_signed_url
from models import Document, Payment, Property, Subdivision
from services.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_KEY_CHARS = string.ascii_lowercase + string.digits


class UploadedFile(NamedTuple):
     """A file received from the client, already read into memory."""
     name: str
     content_type: Optional[str]
     data: bytes


class LabelledDocument(NamedTuple):
     document: Document
     source: str
     source_type: str  # property | subdivision | payment


def build_storage_key(user_id: int, filename: str, now_ms: Optional[int] = None) -> str:
     """<user_id>/<millisecond timestamp>-<random>.<ext>"""
     if now_ms is None:
          now_ms = int(time.time() * 1000)
     ext = os.path.splitext(filename)[1].lstrip(".") or filename.rsplit("/", 1)[-1]
     token = "".join(random.choices(_KEY_CHARS, k=6))
     return f"{user_id}/{now_ms}-{token}.{ext}"


def _owner_filter(property_id: Optional[int], subdivision_id: Optional[int], payment_id: Optional[int]):
     owners = [
          (Document.property_id, property_id),
          (Document.subdivision_id, subdivision_id),
          (Document.payment_id, payment_id),
     ]
     given = [(column, value) for column, value in owners if value is not None]
     if len(given) != 1:
          raise ValidationError("A document belongs to exactly one of a property, a subdivision or a payment")
     column, value = given[0]
     return column == value


def _check_owner(db: Session, property_id, subdivision_id, payment_id) -> None:
     for model, value, label in (
          (Property, property_id, "Property"),
          (Subdivision, subdivision_id, "Subdivision"),
          (Payment, payment_id, "Payment"),
     ):
          if value is not None and db.get(model, value) is None:
               raise NotFoundError(f"{label} with ID {value} not found")


def upload_documents(
     db: Session,
     user_id: int,
     files: Iterable[UploadedFile],
     property_id: Optional[int] = None,
     subdivision_id: Optional[int] = None,
     payment_id: Optional[int] = None,
) -> List[Document]:
     """
     Store each file and record it against its owner.

     Returns:
          The documents that were stored; files whose upload failed are skipped
     """
     _owner_filter(property_id, subdivision_id, payment_id)
     _check_owner(db, property_id, subdivision_id, payment_id)

     stored = []
     for upload in files:
          key = build_storage_key(user_id, upload.name)
          try:
               upload_to_blob(upload.data, key, content_type=upload.content_type)
          except AzureError:
               logger.exception("Upload of %s failed", upload.name)
               continue

          document = Document(
               user_id=user_id,
               property_id=property_id,
               subdivision_id=subdivision_id,
               payment_id=payment_id,
               name=upload.name,
               file_path=key,
               file_size=len(upload.data),
               file_type=upload.content_type,
          )
          db.add(document)
          try:
               db.commit()
          except SQLAlchemyError:
               db.rollback()
               logger.exception("Error recording document %s", upload.name)
               continue
          stored.append(document)

     logger.info("Stored %d document(s)", len(stored))
     return stored


def list_documents(
     db: Session,
     property_id: Optional[int] = None,
     subdivision_id: Optional[int] = None,
     payment_id: Optional[int] = None,
) -> List[Document]:
     condition = _owner_filter(property_id, subdivision_id, payment_id)
     return db.query(Document).filter(condition).order_by(Document.created_at.desc(), Document.id.desc()).all()


def count_documents(
     db: Session,
     property_id: Optional[int] = None,
     subdivision_id: Optional[int] = None,
     payment_id: Optional[int] = None,
) -> int:
     condition = _owner_filter(property_id, subdivision_id, payment_id)
     return db.query(Document).filter(condition).count()


def get_document(db: Session, document_id: int) -> Document:
     document = db.get(Document, document_id)
     if document is None:
          raise NotFoundError(f"Document with ID {document_id} not found")
     return document


def signed_url(db: Session, document_id: int) -> str:
     """Temporary download link for a document."""
     return generate_signed_url(get_document(db, document_id).file_path)


def replace_document(db: Session, user_id: int, document_id: int, upload: UploadedFile) -> Optional[Document]:
     """
     Swap the file behind a document: upload the new file, remove the old
     one, then point the row at the new key.

     Returns:
          The updated document, or None if the upload or update failed
     """
     document = get_document(db, document_id)
     old_key = document.file_path
     new_key = build_storage_key(user_id, upload.name)

     try:
          upload_to_blob(upload.data, new_key, content_type=upload.content_type)
     except AzureError:
          logger.exception("Upload of replacement for document %s failed", document_id)
          return None

     try:
          delete_from_blob(old_key)
     except AzureError:
          logger.warning("Could not remove old file %s", old_key, exc_info=True)

     document.name = upload.name
     document.file_path = new_key
     document.file_size = len(upload.data)
     document.file_type = upload.content_type
     try:
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error updating document %s", document_id)
          return None
     return document


def delete_document(db: Session, document_id: int) -> bool:
     """Remove the stored file, then the row."""
     document = get_document(db, document_id)
     try:
          delete_from_blob(document.file_path)
     except AzureError:
          logger.warning("Could not remove file %s", document.file_path, exc_info=True)

     try:
          db.delete(document)
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Error deleting document %s", document_id)
          return False
     return True


def all_documents_for_property(db: Session, property_id: int) -> List[LabelledDocument]:
     """
     Every document under a property: its own, its lots', and those of
     payments against either, labelled by where they came from and
     sorted newest first.
     """
     prop = db.get(Property, property_id)
     if prop is None:
          raise NotFoundError(f"Property with ID {property_id} not found")

     lots = {lot.id: lot for lot in prop.subdivisions}
     labelled = [LabelledDocument(doc, "Property", "property") for doc in prop.documents]

     if lots:
          for doc in db.query(Document).filter(Document.subdivision_id.in_(list(lots))):
               labelled.append(LabelledDocument(doc, lots[doc.subdivision_id].title or "Subdivision", "subdivision"))

     property_payment_ids = [p.id for p in db.query(Payment.id).filter(Payment.property_id == property_id)]
     if property_payment_ids:
          for doc in db.query(Document).filter(Document.payment_id.in_(property_payment_ids)):
               labelled.append(LabelledDocument(doc, "Property Payment", "payment"))

     if lots:
          lot_of_payment = dict(
               db.query(Payment.id, Payment.subdivision_id).filter(Payment.subdivision_id.in_(list(lots))).all()
          )
          if lot_of_payment:
               for doc in db.query(Document).filter(Document.payment_id.in_(list(lot_of_payment))):
                    title = lots[lot_of_payment[doc.payment_id]].title or "Subdivision"
                    labelled.append(LabelledDocument(doc, f"{title} Payment", "payment"))

     labelled.sort(key=lambda item: (item.document.created_at, item.document.id), reverse=True)
     return labelled
