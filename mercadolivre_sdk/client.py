"""
Cliente HTTP do Mercado Livre
"""
import logging
from typing import Any, Optional

import requests
from pydantic import BaseModel

from mercadolivre_sdk.authentication import Authentication
from mercadolivre_sdk.errors import AuthenticationError, MercadoLivreError, create_error_from_response
from mercadolivre_sdk.resources import (
    AdvertisingResource,
    BillingResource,
    CatalogResource,
    CategoriesResource,
    ClaimsResource,
    CurrenciesResource,
    FavoritesResource,
    FeedbackResource,
    FlexResource,
    FulfillmentResource,
    ItemsResource,
    LocationsResource,
    MessagesResource,
    ModerationsResource,
    NotificationsResource,
    OrdersResource,
    PaymentsResource,
    PicturesResource,
    PricingResource,
    PromotionsResource,
    QuestionsResource,
    ReportsResource,
    ReputationResource,
    SearchResource,
    ShipmentsResource,
    SitesResource,
    TrendsResource,
    UsersResource,
    VariationsResource,
    VisitsResource,
)
from mercadolivre_sdk.types import TokenResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.mercadolibre.com"
DEFAULT_AUTH_URL = "https://auth.mercadolivre.com.br/authorization"
USER_AGENT = "mercadolivre-sdk-python/1.0"


class MercadoLivreConfig(BaseModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    site_id: str = "MLB"
    timeout: float = 30
    base_url: str = DEFAULT_BASE_URL
    auth_url: str = DEFAULT_AUTH_URL


class MercadoLivre:
    """Cliente da API do Mercado Livre com os recursos como atributos"""

    def __init__(self, config: Optional[MercadoLivreConfig] = None, session=None, **overrides):
        base = config.model_dump() if config else {}
        base.update({key: value for key, value in overrides.items() if value is not None})
        self.config = MercadoLivreConfig(**base)
        self.session = session or requests.Session()

        self.auth = Authentication(self, self.config)

        self.advertising = AdvertisingResource(self)
        self.billing = BillingResource(self)
        self.catalog = CatalogResource(self)
        self.categories = CategoriesResource(self)
        self.claims = ClaimsResource(self)
        self.currencies = CurrenciesResource(self)
        self.favorites = FavoritesResource(self)
        self.feedback = FeedbackResource(self)
        self.flex = FlexResource(self)
        self.fulfillment = FulfillmentResource(self)
        self.items = ItemsResource(self)
        self.locations = LocationsResource(self)
        self.messages = MessagesResource(self)
        self.moderations = ModerationsResource(self)
        self.notifications = NotificationsResource(self)
        self.orders = OrdersResource(self)
        self.payments = PaymentsResource(self)
        self.pictures = PicturesResource(self)
        self.pricing = PricingResource(self)
        self.promotions = PromotionsResource(self)
        self.questions = QuestionsResource(self)
        self.reports = ReportsResource(self)
        self.reputation = ReputationResource(self)
        self.search = SearchResource(self)
        self.shipments = ShipmentsResource(self)
        self.sites = SitesResource(self)
        self.trends = TrendsResource(self)
        self.users = UsersResource(self)
        self.variations = VariationsResource(self)
        self.visits = VisitsResource(self)

    # Configuração

    def set_access_token(self, access_token: Optional[str]):
        self.config.access_token = access_token

    def get_access_token(self) -> Optional[str]:
        return self.config.access_token

    def set_refresh_token(self, refresh_token: Optional[str]):
        self.config.refresh_token = refresh_token

    def get_refresh_token(self) -> Optional[str]:
        return self.config.refresh_token

    def set_credentials(self, client_id: str, client_secret: str, redirect_uri: Optional[str] = None):
        self.config.client_id = client_id
        self.config.client_secret = client_secret
        if redirect_uri:
            self.config.redirect_uri = redirect_uri

    def set_site_id(self, site_id: str):
        self.config.site_id = site_id

    def get_site_id(self) -> str:
        return self.config.site_id

    def is_authenticated(self) -> bool:
        return bool(self.config.access_token)

    def has_credentials(self) -> bool:
        return bool(self.config.client_id and self.config.client_secret)

    # HTTP

    def build_url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self, authenticated: bool, form: bool, files) -> dict:
        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
            "X-Format-New": "true",
        }
        if form:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        elif not files:
            headers["Content-Type"] = "application/json"
        if authenticated and self.config.access_token:
            headers["Authorization"] = f"Bearer {self.config.access_token}"
        return headers

    @staticmethod
    def _parse_response(response) -> Any:
        if not response.content:
            return None
        content_type = (response.headers.get("Content-Type") or "").lower()
        if "json" in content_type:
            return response.json()
        if content_type.startswith("text/"):
            return response.text
        return response.content

    def request(
        self,
        method: str,
        path: str,
        data: Any = None,
        params: Optional[dict] = None,
        files: Optional[dict] = None,
        form: bool = False,
        authenticated: bool = True,
    ) -> Any:
        url = self.build_url(path)
        kwargs = {
            "headers": self._headers(authenticated, form, files),
            "timeout": self.config.timeout,
        }
        if params:
            kwargs["params"] = params
        if files:
            kwargs["files"] = files
            if data is not None:
                kwargs["data"] = data
        elif data is not None:
            if form:
                kwargs["data"] = data
            else:
                kwargs["json"] = data

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"Erro de conexão com o Mercado Livre: {method} {path}: {e}")
            raise MercadoLivreError(
                f"Erro de conexão com o Mercado Livre: {e}",
                error_code="NETWORK_ERROR",
            ) from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if response.status_code >= 400:
            error = create_error_from_response(response)
            logger.warning(f"❌ {method} {path} falhou: {error.status_code} {error.message}")
            raise error

        return self._parse_response(response)

    def get(self, path: str, params: Optional[dict] = None, **kwargs) -> Any:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, data: Any = None, **kwargs) -> Any:
        return self.request("POST", path, data=data, **kwargs)

    def put(self, path: str, data: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, data=data, **kwargs)

    def patch(self, path: str, data: Any = None, **kwargs) -> Any:
        return self.request("PATCH", path, data=data, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)

    # OAuth

    def _store_tokens(self, token: TokenResponse) -> TokenResponse:
        self.config.access_token = token.access_token
        if token.refresh_token:
            self.config.refresh_token = token.refresh_token
        return token

    def exchange_code_for_token(self, code: str, redirect_uri: Optional[str] = None) -> TokenResponse:
        """Troca o código de autorização por access/refresh token"""
        data = {
            "grant_type": "authorization_code",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": code,
            "redirect_uri": redirect_uri or self.config.redirect_uri,
        }
        result = self.post("/oauth/token", data, form=True, authenticated=False)
        return self._store_tokens(TokenResponse(**result))

    def refresh_access_token(self, refresh_token: Optional[str] = None) -> TokenResponse:
        """Renova o access token usando o refresh token"""
        token = refresh_token or self.config.refresh_token
        if not token:
            raise AuthenticationError("Refresh token não informado")
        data = {
            "grant_type": "refresh_token",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "refresh_token": token,
        }
        result = self.post("/oauth/token", data, form=True, authenticated=False)
        return self._store_tokens(TokenResponse(**result))

    def get_client_credentials_token(self) -> TokenResponse:
        data = {
            "grant_type": "client_credentials",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
        }
        result = self.post("/oauth/token", data, form=True, authenticated=False)
        return self._store_tokens(TokenResponse(**result))

    def revoke_token(self, access_token: Optional[str] = None) -> Any:
        data = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "token": access_token or self.config.access_token,
        }
        return self.post("/oauth/token/revoke", data, form=True, authenticated=False)
