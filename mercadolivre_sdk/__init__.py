"""
SDK Python para a API do Mercado Livre
"""
from mercadolivre_sdk.authentication import Authentication
from mercadolivre_sdk.client import MercadoLivre, MercadoLivreConfig
from mercadolivre_sdk.errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    InsufficientPermissionsError,
    InvalidTokenError,
    MercadoLivreError,
    RateLimitError,
    ResourceNotFoundError,
    ServerError,
    TokenExpiredError,
    TooManyRequestsError,
    ValidationError,
    create_error_from_response,
    is_mercadolivre_error,
)
from mercadolivre_sdk.types import MLItem, MLOrder, MLQuestion, MLUser, Paging, TokenResponse

__version__ = "1.0.0"

__all__ = [
    "Authentication",
    "MercadoLivre",
    "MercadoLivreConfig",
    "MercadoLivreError",
    "AuthenticationError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InsufficientPermissionsError",
    "ResourceNotFoundError",
    "ValidationError",
    "BadRequestError",
    "ConflictError",
    "RateLimitError",
    "TooManyRequestsError",
    "ServerError",
    "create_error_from_response",
    "is_mercadolivre_error",
    "MLItem",
    "MLOrder",
    "MLQuestion",
    "MLUser",
    "Paging",
    "TokenResponse",
]
