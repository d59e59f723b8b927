"""
Recurso de catálogo (produtos e user products)
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class CatalogResource(Resource):

    def search_products(
        self,
        q: Optional[str] = None,
        product_identifier: Optional[str] = None,
        domain_id: Optional[str] = None,
        status: Optional[str] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        site_id: Optional[str] = None,
    ) -> dict:
        query = {
            "site_id": site_id or self.site_id,
            "q": q,
            "product_identifier": product_identifier,
            "domain_id": domain_id,
            "status": status,
            "offset": offset,
            "limit": limit,
        }
        return self.client.get(self._path("/products/search", query=query))

    def get_product(self, product_id: str) -> dict:
        return self.client.get(self._path("/products/{}", product_id))

    def get_product_items(self, product_id: str, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        """Anúncios que competem no produto de catálogo"""
        return self.client.get(self._path("/products/{}/items", product_id, query={"offset": offset, "limit": limit}))

    def get_user_product(self, user_product_id: str) -> dict:
        return self.client.get(self._path("/user-products/{}", user_product_id))

    def get_catalog_suggestions(self, user_id, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        query = {"offset": offset, "limit": limit}
        return self.client.get(self._path("/catalog_suggestions/users/{}/suggestions/search", user_id, query=query))

    def get_technical_specs(self, domain_id: str, channel_id: Optional[str] = None) -> dict:
        return self.client.get(
            self._path("/catalog_domains/{}/technical_specs", domain_id, query={"channel_id": channel_id})
        )

    def get_eligibility(self, item_id: str) -> dict:
        return self.client.get(self._path("/items/{}/catalog_listing_eligibility", item_id))

    def opt_in(self, item_id: str, catalog_product_id: str, variation_id=None) -> dict:
        data = {"item_id": item_id, "catalog_product_id": catalog_product_id}
        if variation_id is not None:
            data["variation_id"] = variation_id
        return self.client.post("/items/catalog_listings", data)
