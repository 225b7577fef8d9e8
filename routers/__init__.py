# routers/__init__.py
from . import buyers, documents, payments, properties, receipts, settings, subdivisions

ALL_ROUTERS = [
     properties.router,
     subdivisions.router,
     buyers.router,
     payments.router,
     documents.router,
     receipts.router,
     settings.router,
]

__all__ = ["ALL_ROUTERS"]
