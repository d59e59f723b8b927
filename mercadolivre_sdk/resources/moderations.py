"""
Recurso de moderações e qualidade de anúncios
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class ModerationsResource(Resource):

    def get_infractions(self, user_id, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        return self.client.get(self._path("/moderations/infractions/{}", user_id, query={"offset": offset, "limit": limit}))

    def get_item_moderation(self, item_id: str) -> dict:
        return self.client.get(self._path("/moderations/last_moderation/{}", item_id))

    def get_paused_items(self, user_id, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        """Anúncios pausados por moderação"""
        query = {"status": "paused", "tags": "moderation_penalty", "offset": offset, "limit": limit}
        return self.client.get(self._path("/users/{}/items/search", user_id, query=query))

    def get_catalog_quality(self, seller_id, include_items: bool = False, version: Optional[str] = "v3") -> dict:
        query = {"seller_id": seller_id, "include_items": include_items, "v": version}
        return self.client.get(self._path("/catalog_quality/status", query=query))

    def get_picture_diagnostic(self, picture_id: str, context: Optional[str] = None) -> dict:
        return self.client.get(self._path("/moderations/pictures/diagnostic/{}", picture_id, query={"context": context}))
