"""
Hierarquia de exceções do SDK do Mercado Livre
"""
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class MercadoLivreError(Exception):
    """Erro base retornado pela API do Mercado Livre"""

    default_message = "Erro desconhecido"
    default_status_code: Optional[int] = None
    default_error_code: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        response: Any = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.error_code = error_code or self.default_error_code
        self.response = response

    def to_dict(self) -> dict:
        return {
            "name": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "error_code": self.error_code,
            "response": self.response,
        }

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r}, status_code={self.status_code}, error_code={self.error_code!r})"


class AuthenticationError(MercadoLivreError):
    default_message = "Falha na autenticação"
    default_status_code = 401
    default_error_code = "AUTH_ERROR"


class TokenExpiredError(AuthenticationError):
    default_message = "Token de acesso expirado"
    default_error_code = "TOKEN_EXPIRED"


class InvalidTokenError(AuthenticationError):
    default_message = "Token de acesso inválido"
    default_error_code = "INVALID_TOKEN"


class InsufficientPermissionsError(MercadoLivreError):
    default_message = "Permissões insuficientes"
    default_status_code = 403
    default_error_code = "INSUFFICIENT_PERMISSIONS"


class ResourceNotFoundError(MercadoLivreError):
    default_message = "Recurso não encontrado"
    default_status_code = 404
    default_error_code = "RESOURCE_NOT_FOUND"


class ValidationError(MercadoLivreError):
    default_message = "Erro de validação"
    default_status_code = 400
    default_error_code = "VALIDATION_ERROR"


class BadRequestError(ValidationError):
    default_message = "Requisição inválida"
    default_error_code = "BAD_REQUEST"


class ConflictError(MercadoLivreError):
    default_message = "Conflito com o estado atual do recurso"
    default_status_code = 409
    default_error_code = "CONFLICT"


class RateLimitError(MercadoLivreError):
    """Limite de requisições excedido; retry_after em segundos quando informado"""

    default_message = "Limite de requisições excedido"
    default_status_code = 429
    default_error_code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, message=None, retry_after: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["retry_after"] = self.retry_after
        return data


class TooManyRequestsError(RateLimitError):
    default_message = "Muitas requisições"
    default_error_code = "TOO_MANY_REQUESTS"


class ServerError(MercadoLivreError):
    default_message = "Erro interno do servidor do Mercado Livre"
    default_status_code = 500
    default_error_code = "SERVER_ERROR"


def _parse_body(response) -> Any:
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return getattr(response, "text", None) or None


def _parse_retry_after(headers) -> Optional[int]:
    if not headers:
        return None
    value = headers.get("Retry-After") or headers.get("retry-after")
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def create_error_from_response(response) -> MercadoLivreError:
    """Converte uma resposta HTTP de erro na exceção correspondente"""
    status = getattr(response, "status_code", None) or 500
    data = _parse_body(response)
    body = data if isinstance(data, dict) else {}

    message = body.get("message") or body.get("error") or "Erro desconhecido"
    error_code = body.get("code") or body.get("error_code") or body.get("error") or str(status)
    kwargs = {"status_code": status, "error_code": error_code, "response": data}

    if status == 400:
        return BadRequestError(message, **kwargs)
    if status == 401:
        if "expired" in str(message).lower():
            return TokenExpiredError(message, **kwargs)
        return InvalidTokenError(message, **kwargs)
    if status == 403:
        return InsufficientPermissionsError(message, **kwargs)
    if status == 404:
        return ResourceNotFoundError(message, **kwargs)
    if status == 409:
        return ConflictError(message, **kwargs)
    if status == 422:
        return ValidationError(message, **kwargs)
    if status == 429:
        return RateLimitError(message, retry_after=_parse_retry_after(getattr(response, "headers", None)), **kwargs)
    if status >= 500:
        return ServerError(message, **kwargs)

    logger.debug(f"Status sem mapeamento específico: {status}")
    return MercadoLivreError(message, **kwargs)


def is_mercadolivre_error(error: Any) -> bool:
    return isinstance(error, MercadoLivreError)
