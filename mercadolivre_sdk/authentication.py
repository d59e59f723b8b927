"""
Fachada de autenticação OAuth do Mercado Livre
"""
import logging
from typing import Any, Optional
from urllib.parse import urlencode

from mercadolivre_sdk.errors import AuthenticationError
from mercadolivre_sdk.types import TokenResponse

logger = logging.getLogger(__name__)


class Authentication:
    """
    Operações de OAuth delegadas ao cliente HTTP.

    Não controla expiração nem faz renovação automática: quem chama decide
    quando trocar, renovar ou revogar tokens.
    """

    def __init__(self, client, config):
        self.client = client
        self.config = config

    def get_authorization_url(self, state: Optional[str] = None, response_type: str = "code") -> str:
        """URL para onde o vendedor é enviado para autorizar a aplicação"""
        if not self.config.client_id or not self.config.redirect_uri:
            raise AuthenticationError("client_id e redirect_uri são obrigatórios para gerar a URL de autorização")

        params = {
            "response_type": response_type,
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
        }
        if state:
            params["state"] = state

        return f"{self.config.auth_url}?{urlencode(params)}"

    def exchange_code_for_token(self, code: str, redirect_uri: Optional[str] = None) -> TokenResponse:
        logger.info("Trocando código de autorização por token")
        return self.client.exchange_code_for_token(code, redirect_uri)

    def refresh_access_token(self, refresh_token: Optional[str] = None) -> TokenResponse:
        logger.info("Renovando access token")
        return self.client.refresh_access_token(refresh_token)

    def get_client_credentials_token(self) -> TokenResponse:
        return self.client.get_client_credentials_token()

    def revoke_token(self, access_token: Optional[str] = None) -> Any:
        return self.client.revoke_token(access_token)

    def get_current_token(self) -> Optional[str]:
        return self.client.get_access_token()

    def is_authenticated(self) -> bool:
        return self.client.is_authenticated()
