"""
Fábrica de clientes do SDK configurados com as credenciais da aplicação
"""
from typing import Optional

from mercadolivre_sdk import MercadoLivre, MercadoLivreConfig
from mlhub.config.settings import settings


def create_ml_client(access_token: Optional[str] = None, refresh_token: Optional[str] = None,
                     site_id: Optional[str] = None) -> MercadoLivre:
    config = MercadoLivreConfig(
        access_token=access_token,
        refresh_token=refresh_token,
        client_id=settings.ml_app_id or None,
        client_secret=settings.ml_client_secret or None,
        redirect_uri=settings.ml_redirect_uri,
        site_id=site_id or settings.ml_site_id,
        timeout=settings.ml_timeout,
        base_url=settings.ml_api_base_url,
        auth_url=settings.ml_auth_url,
    )
    return MercadoLivre(config)
