"""
Recurso de reputação e desempenho
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class ReputationResource(Resource):

    def get_seller_reputation(self, user_id) -> Optional[dict]:
        """Bloco seller_reputation do perfil público do vendedor"""
        user = self.client.get(self._path("/users/{}", user_id))
        return (user or {}).get("seller_reputation")

    def get_item_reviews(self, item_id: str, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        return self.client.get(self._path("/reviews/item/{}", item_id, query={"offset": offset, "limit": limit}))

    def get_item_performance(self, item_id: str) -> dict:
        return self.client.get(self._path("/item/{}/performance", item_id))

    def get_user_product_performance(self, user_product_id: str) -> dict:
        return self.client.get(self._path("/user-product/{}/performance", user_product_id))

    def get_seller_recovery_status(self, user_id) -> dict:
        return self.client.get(self._path("/users/{}/reputation/seller_recovery/status", user_id))
