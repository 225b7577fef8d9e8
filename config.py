# config.py
"""
Environment-driven settings for the Land Asset Manager backend.

Values come from the process environment, with a local .env file
loaded first (python-dotenv). Import the constants directly:

     from config import DATABASE_URL, JWT_SECRET
"""
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load .env
load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
     return os.getenv(name, default).lower() == "true"


# Database
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")

# DATABASE_URL wins over the DB_* parts (tests point it at SQLite)
DATABASE_URL = os.getenv("DATABASE_URL") or (
     f"mssql+pymssql://{quote_plus(DB_USER or '')}:{quote_plus(DB_PASS or '')}"
     f"@{DB_SERVER}:{DB_PORT}/{DB_NAME}"
)
SQL_ECHO = _flag("SQL_ECHO")

# Auth (tokens are issued elsewhere, we only verify them)
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# HTTP
CORS_ORIGINS = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]
PORT = int(os.getenv("PORT", "10000"))

# Blob storage
AZURE_STORAGE_ACCOUNT = os.getenv("AZURE_STORAGE_ACCOUNT")
AZURE_STORAGE_KEY = os.getenv("AZURE_STORAGE_KEY")
AZURE_DOCUMENTS_CONTAINER = os.getenv("AZURE_DOCUMENTS_CONTAINER", "documents")
SIGNED_URL_TTL_SECONDS = int(os.getenv("SIGNED_URL_TTL_SECONDS", "3600"))

# Interest defaults
DEFAULT_DAILY_INTEREST_RATE = os.getenv("DEFAULT_DAILY_INTEREST_RATE", "0.001")
DEFAULT_GRACE_PERIOD_DAYS = int(os.getenv("DEFAULT_GRACE_PERIOD_DAYS", "30"))

# Receipt e-mail (records are always written, delivery is opt-in)
BREVO_API_KEY = os.getenv("BREVO_API_KEY")
RECEIPT_EMAIL_DELIVERY = _flag("RECEIPT_EMAIL_DELIVERY")
RECEIPT_SENDER_NAME = os.getenv("RECEIPT_SENDER_NAME", "Land Asset Manager")
RECEIPT_SENDER_EMAIL = os.getenv("RECEIPT_SENDER_EMAIL", "noreply@landassets.local")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "standard")
