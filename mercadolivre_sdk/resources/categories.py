"""
Recurso de categorias
"""
from mercadolivre_sdk.resources.base import Resource


class CategoriesResource(Resource):

    def get(self, category_id: str) -> dict:
        return self.client.get(self._path("/categories/{}", category_id))

    def get_children(self, category_id: str) -> list:
        category = self.get(category_id)
        return (category or {}).get("children_categories", [])

    def get_attributes(self, category_id: str) -> list:
        return self.client.get(self._path("/categories/{}/attributes", category_id))

    def get_technical_specs(self, category_id: str) -> dict:
        return self.client.get(self._path("/categories/{}/technical_specs/input", category_id))

    def get_shipping_preferences(self, category_id: str) -> dict:
        return self.client.get(self._path("/categories/{}/shipping_preferences", category_id))

    def get_promotion_packs(self, category_id: str) -> list:
        return self.client.get(self._path("/categories/{}/classifieds_promotion_packs", category_id))

    def get_domain(self, domain_id: str) -> dict:
        return self.client.get(self._path("/catalog_domains/{}", domain_id))
