"""
Domain-specific exceptions for the service layer.

These exceptions represent business rule violations and should be
caught in routers and converted to appropriate HTTP responses.
"""


class LandAssetError(Exception):
     """Base exception for all service errors."""
     pass


class NotFoundError(LandAssetError):
     """Raised when a property, lot, buyer, payment or document does not exist."""
     pass


class ValidationError(LandAssetError):
     """Raised when a request is well-formed but breaks a business rule."""
     pass
