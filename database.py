# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Engine configuration (MS SQL Server via pymssql, or any DATABASE_URL)
- Session factory for dependency injection
- Connection utilities

Usage:
     from database import get_session

     @router.get("/properties")
     def list_properties(db: Session = Depends(get_session)):
          return db.query(Property).all()
"""
import logging
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)


def make_engine(url: str = DATABASE_URL) -> Engine:
     """
     Build an engine for the given URL.

     SQLite (local runs and tests) gets a single shared connection;
     everything else gets a recycled connection pool.
     """
     if url.startswith("sqlite"):
          return create_engine(
               url,
               connect_args={"check_same_thread": False},
               poolclass=StaticPool,
               echo=SQL_ECHO,
          )
     return create_engine(
          url,
          poolclass=QueuePool,
          pool_size=5,
          max_overflow=10,
          pool_timeout=30,
          pool_recycle=1800,  # Recycle connections after 30 minutes
          echo=SQL_ECHO,
     )


engine = make_engine()

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     Services commit their own work; whatever is left pending when the
     request finishes is committed here, or rolled back on error.

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def check_connection() -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception:
          logger.exception("Database connection failed")
          return False
