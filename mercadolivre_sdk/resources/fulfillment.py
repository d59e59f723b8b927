"""
Recurso Mercado Envios Full (fulfillment)
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class FulfillmentResource(Resource):

    def get_stock(self, inventory_id: str, include_attributes: Optional[str] = None) -> dict:
        return self.client.get(
            self._path("/inventories/{}/stock/fulfillment", inventory_id, query={"include_attributes": include_attributes})
        )

    def search_operations(
        self,
        seller_id,
        inventory_id: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        operation_type: Optional[str] = None,
        scroll: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> dict:
        query = {
            "seller_id": seller_id,
            "inventory_id": inventory_id,
            "date_from": date_from,
            "date_to": date_to,
            "type": operation_type,
            "scroll": scroll,
            "limit": limit,
        }
        return self.client.get(self._path("/stock/fulfillment/operations/search", query=query))

    def get_operation(self, operation_id) -> dict:
        return self.client.get(self._path("/stock/fulfillment/operations/{}", operation_id))

    def get_capacity(self, user_id, logistic_type: str = "fulfillment") -> dict:
        return self.client.get(self._path("/users/{}/capacity_middleend/{}", user_id, logistic_type))

    def get_node_capacity(self, user_id, node_id) -> dict:
        return self.client.get(self._path("/users/{}/nodes/{}/capacity", user_id, node_id))
