"""
Recurso de variações de anúncios
"""
from mercadolivre_sdk.resources.base import Resource


class VariationsResource(Resource):

    def list(self, item_id: str):
        return self.client.get(self._path("/items/{}/variations", item_id))

    def get(self, item_id: str, variation_id) -> dict:
        return self.client.get(self._path("/items/{}/variations/{}", item_id, variation_id))

    def create(self, item_id: str, data: dict) -> dict:
        return self.client.post(self._path("/items/{}/variations", item_id), data)

    def update(self, item_id: str, variation_id, data: dict) -> dict:
        return self.client.put(self._path("/items/{}/variations/{}", item_id, variation_id), data)

    def update_price(self, item_id: str, variation_id, price: float) -> dict:
        return self.update(item_id, variation_id, {"price": price})

    def update_stock(self, item_id: str, variation_id, available_quantity: int) -> dict:
        return self.update(item_id, variation_id, {"available_quantity": available_quantity})

    def delete(self, item_id: str, variation_id):
        return self.client.delete(self._path("/items/{}/variations/{}", item_id, variation_id))
