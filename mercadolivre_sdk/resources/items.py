"""
Recurso de anúncios (items)
"""
from typing import List, Optional

from mercadolivre_sdk.resources.base import Resource


class ItemsResource(Resource):
    """Consulta, publicação e alteração de anúncios"""

    def get(self, item_id: str, attributes: Optional[List[str]] = None, include_attributes: Optional[str] = None) -> dict:
        query = {"attributes": attributes, "include_attributes": include_attributes}
        return self.client.get(self._path("/items/{}", item_id, query=query))

    def get_by_ids(self, item_ids: List[str], attributes: Optional[List[str]] = None) -> list:
        """Multiget de até 20 anúncios: cada entrada vem como {code, body}"""
        query = {"ids": list(item_ids), "attributes": attributes}
        return self.client.get(self._path("/items", query=query))

    def create(self, data: dict) -> dict:
        return self.client.post("/items", data)

    def validate(self, data: dict):
        return self.client.post("/items/validate", data)

    def update(self, item_id: str, data: dict) -> dict:
        return self.client.put(self._path("/items/{}", item_id), data)

    def pause(self, item_id: str) -> dict:
        return self.update(item_id, {"status": "paused"})

    def activate(self, item_id: str) -> dict:
        return self.update(item_id, {"status": "active"})

    def close(self, item_id: str) -> dict:
        return self.update(item_id, {"status": "closed"})

    def delete(self, item_id: str) -> dict:
        # O anúncio precisa estar fechado antes de ser marcado como excluído
        self.close(item_id)
        return self.update(item_id, {"deleted": "true"})

    def relist(self, item_id: str, data: dict) -> dict:
        return self.client.post(self._path("/items/{}/relist", item_id), data)

    def get_description(self, item_id: str) -> dict:
        return self.client.get(self._path("/items/{}/description", item_id))

    def set_description(self, item_id: str, plain_text: str) -> dict:
        return self.client.post(self._path("/items/{}/description", item_id), {"plain_text": plain_text})

    def update_description(self, item_id: str, plain_text: str) -> dict:
        return self.client.put(
            self._path("/items/{}/description", item_id, query={"api_version": 2}),
            {"plain_text": plain_text},
        )

    def get_pictures(self, item_id: str) -> list:
        item = self.get(item_id, attributes=["pictures"])
        return (item or {}).get("pictures", [])

    def get_prices(self, item_id: str) -> dict:
        return self.client.get(self._path("/items/{}/prices", item_id))

    def get_sale_price(self, item_id: str, context: Optional[str] = None) -> dict:
        return self.client.get(self._path("/items/{}/sale_price", item_id, query={"context": context}))

    def get_shipping_options(self, item_id: str, zip_code: Optional[str] = None, quantity: Optional[int] = None) -> dict:
        query = {"zip_code": zip_code, "quantity": quantity}
        return self.client.get(self._path("/items/{}/shipping_options", item_id, query=query))

    def get_price_to_win(self, item_id: str, site_id: Optional[str] = None) -> dict:
        query = {"site_id": site_id or self.site_id, "version": "v2"}
        return self.client.get(self._path("/items/{}/price_to_win", item_id, query=query))
