"""
Recurso de usuários
"""
from typing import List, Optional

from mercadolivre_sdk.errors import ResourceNotFoundError
from mercadolivre_sdk.resources.base import Resource


class UsersResource(Resource):

    def get_me(self) -> dict:
        """Usuário dono do access token atual"""
        return self.client.get("/users/me")

    def get(self, user_id) -> dict:
        return self.client.get(self._path("/users/{}", user_id))

    def get_by_ids(self, user_ids: List) -> list:
        return self.client.get(self._path("/users", query={"ids": list(user_ids)}))

    def get_addresses(self, user_id) -> list:
        return self.client.get(self._path("/users/{}/addresses", user_id))

    def get_accepted_payment_methods(self, user_id) -> list:
        return self.client.get(self._path("/users/{}/accepted_payment_methods", user_id))

    def get_items(self, user_id, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        return self.search_items(user_id, offset=offset, limit=limit)

    def search_items(
        self,
        user_id,
        status: Optional[str] = None,
        sku: Optional[str] = None,
        tags: Optional[str] = None,
        search_type: Optional[str] = None,
        scroll_id: Optional[str] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> dict:
        """
        Busca os anúncios de um vendedor.

        search_type="scan" habilita paginação por scroll_id para mais de 1000 itens.
        """
        query = {
            "status": status,
            "sku": sku,
            "tags": tags,
            "search_type": search_type,
            "scroll_id": scroll_id,
            "offset": offset,
            "limit": limit,
        }
        return self.client.get(self._path("/users/{}/items/search", user_id, query=query))

    def is_blocked(self, user_id) -> bool:
        try:
            result = self.client.get(self._path("/users/{}/blocked", user_id))
        except ResourceNotFoundError:
            return False
        if isinstance(result, dict):
            return bool(result.get("blocked", True))
        return True

    def get_brands(self, user_id) -> dict:
        return self.client.get(self._path("/users/{}/brands", user_id))

    def get_shipping_preferences(self, user_id) -> dict:
        return self.client.get(self._path("/users/{}/shipping_preferences", user_id))

    def get_seller_recovery_status(self, user_id) -> dict:
        return self.client.get(self._path("/users/{}/reputation/seller_recovery/status", user_id))
