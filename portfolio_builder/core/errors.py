"""Domain errors raised by the service layer.

Every error carries the HTTP status it maps to; the handlers registered in
``portfolio_builder.main`` render them as ``{"message": ...}``.
"""
from fastapi import status


class PortfolioBuilderError(Exception):
    """Base class for request-scoped failures."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortfolioBuilderError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(PortfolioBuilderError):
    """Missing, malformed or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(PortfolioBuilderError):
    """Authenticated, but not the owner of the record."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(PortfolioBuilderError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(PortfolioBuilderError):
    status_code = status.HTTP_409_CONFLICT


class PrivateResourceError(PortfolioBuilderError):
    """Anonymous read of a portfolio that is not public."""

    status_code = status.HTTP_403_FORBIDDEN
