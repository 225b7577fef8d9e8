from datetime import datetime, timedelta, timezone
from functools import lru_cache

from azure.storage.blob import BlobServiceClient, BlobSasPermissions, ContentSettings, generate_blob_sas

from config import (
     AZURE_STORAGE_ACCOUNT,
     AZURE_STORAGE_KEY,
     AZURE_DOCUMENTS_CONTAINER,
     SIGNED_URL_TTL_SECONDS,
)


@lru_cache(maxsize=1)
def get_blob_service() -> BlobServiceClient:
     return BlobServiceClient.from_connection_string(
          f"DefaultEndpointsProtocol=https;"
          f"AccountName={AZURE_STORAGE_ACCOUNT};"
          f"AccountKey={AZURE_STORAGE_KEY};"
          f"EndpointSuffix=core.windows.net"
     )


def upload_to_blob(data, blob_name: str, content_type: str | None = None, container: str = AZURE_DOCUMENTS_CONTAINER) -> str:
     """
     Uploads file bytes (or a file-like object) under an opaque key.
     Returns the key, which is what gets stored on the document row.
     """
     blob_client = get_blob_service().get_blob_client(container=container, blob=blob_name)
     content_settings = ContentSettings(content_type=content_type) if content_type else None
     blob_client.upload_blob(data, overwrite=True, content_settings=content_settings)
     return blob_name


def generate_signed_url(
     blob_name: str,
     expires_in: int = SIGNED_URL_TTL_SECONDS,
     container: str = AZURE_DOCUMENTS_CONTAINER,
) -> str:
     """
     Read-only SAS URL for a stored file, valid for `expires_in` seconds
     """
     sas = generate_blob_sas(
          account_name=AZURE_STORAGE_ACCOUNT,
          container_name=container,
          blob_name=blob_name,
          account_key=AZURE_STORAGE_KEY,
          permission=BlobSasPermissions(read=True),
          expiry=datetime.now(timezone.utc) + timedelta(seconds=expires_in),
     )
     return f"https://{AZURE_STORAGE_ACCOUNT}.blob.core.windows.net/{container}/{blob_name}?{sas}"


def delete_from_blob(blob_name: str, container: str = AZURE_DOCUMENTS_CONTAINER) -> None:
     """
     Deletes a stored file by its key
     """
     blob_client = get_blob_service().get_blob_client(container=container, blob=blob_name)
     blob_client.delete_blob()
