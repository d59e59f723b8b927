"""
Recurso de sites (países) do Mercado Livre
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class SitesResource(Resource):

    def list(self):
        return self.client.get("/sites")

    def get(self, site_id: str) -> dict:
        return self.client.get(self._path("/sites/{}", site_id))

    def get_categories(self, site_id: str):
        return self.client.get(self._path("/sites/{}/categories", site_id))

    def get_listing_types(self, site_id: str):
        return self.client.get(self._path("/sites/{}/listing_types", site_id))

    def get_listing_type(self, site_id: str, listing_type_id: str) -> dict:
        return self.client.get(self._path("/sites/{}/listing_types/{}", site_id, listing_type_id))

    def get_listing_prices(
        self,
        site_id: str,
        price: Optional[float] = None,
        category_id: Optional[str] = None,
        listing_type_id: Optional[str] = None,
        quantity: Optional[int] = None,
        currency_id: Optional[str] = None,
    ):
        """Tarifas de venda por tipo de anúncio para o preço e categoria informados"""
        query = {
            "price": price,
            "category_id": category_id,
            "listing_type_id": listing_type_id,
            "quantity": quantity,
            "currency_id": currency_id,
        }
        return self.client.get(self._path("/sites/{}/listing_prices", site_id, query=query))

    def get_listing_exposures(self, site_id: str):
        return self.client.get(self._path("/sites/{}/listing_exposures", site_id))

    def get_payment_methods(self, site_id: str):
        return self.client.get(self._path("/sites/{}/payment_methods", site_id))

    def get_shipping_methods(self, site_id: str):
        return self.client.get(self._path("/sites/{}/shipping_methods", site_id))

    def search_domain(self, site_id: str, q: str, limit: Optional[int] = None):
        """Predição de domínio/categoria a partir de um título"""
        return self.client.get(self._path("/sites/{}/domain_discovery/search", site_id, query={"q": q, "limit": limit}))
