"""
Recurso de promoções do vendedor (seller-promotions)
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource

APP_VERSION = "v2"


class PromotionsResource(Resource):

    def list(self, user_id) -> dict:
        return self.client.get(self._path("/seller-promotions/users/{}", user_id, query={"app_version": APP_VERSION}))

    def get(self, promotion_id: str, promotion_type: str) -> dict:
        query = {"promotion_type": promotion_type, "app_version": APP_VERSION}
        return self.client.get(self._path("/seller-promotions/promotions/{}", promotion_id, query=query))

    def get_items(self, promotion_id: str, promotion_type: str, status: Optional[str] = None,
                  search_after: Optional[str] = None, limit: Optional[int] = None) -> dict:
        query = {
            "promotion_type": promotion_type,
            "status": status,
            "searchAfter": search_after,
            "limit": limit,
            "app_version": APP_VERSION,
        }
        return self.client.get(self._path("/seller-promotions/promotions/{}/items", promotion_id, query=query))

    def create(self, data: dict) -> dict:
        return self.client.post(self._path("/seller-promotions/promotions", query={"app_version": APP_VERSION}), data)

    def delete(self, promotion_id: str, promotion_type: str):
        query = {"promotion_type": promotion_type, "app_version": APP_VERSION}
        return self.client.delete(self._path("/seller-promotions/promotions/{}", promotion_id, query=query))

    def get_item_promotions(self, item_id: str):
        return self.client.get(self._path("/seller-promotions/items/{}", item_id, query={"app_version": APP_VERSION}))

    def add_item(self, item_id: str, data: dict) -> dict:
        """data deve conter promotion_id, promotion_type e os preços da oferta"""
        return self.client.post(self._path("/seller-promotions/items/{}", item_id, query={"app_version": APP_VERSION}), data)

    def remove_item(self, item_id: str, promotion_type: str, promotion_id: Optional[str] = None):
        query = {"promotion_type": promotion_type, "promotion_id": promotion_id, "app_version": APP_VERSION}
        return self.client.delete(self._path("/seller-promotions/items/{}", item_id, query=query))

    def get_candidate(self, candidate_id: str) -> dict:
        return self.client.get(self._path("/seller-promotions/candidates/{}", candidate_id, query={"app_version": APP_VERSION}))
