"""
Recurso de preços e sugestões de preço
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class PricingResource(Resource):

    def get_suggestions(self, user_id, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        query = {"offset": offset, "limit": limit}
        return self.client.get(self._path("/suggestions/user/{}/items", user_id, query=query))

    def get_item_suggestion(self, item_id: str) -> dict:
        return self.client.get(self._path("/suggestions/items/{}/details", item_id))

    def get_standard_prices(self, item_id: str, quantity: Optional[int] = None) -> dict:
        return self.client.get(self._path("/items/{}/prices/standard", item_id, query={"quantity": quantity}))

    def get_price_to_win(self, item_id: str, site_id: Optional[str] = None) -> dict:
        query = {"site_id": site_id or self.site_id, "version": "v2"}
        return self.client.get(self._path("/items/{}/price_to_win", item_id, query=query))

    def update_price(self, item_id: str, price: float) -> dict:
        return self.client.put(self._path("/items/{}", item_id), {"price": price})

    def get_automation_rules(self, item_id: str) -> dict:
        return self.client.get(self._path("/pricing-automation/items/{}/rules", item_id))

    def set_automation(self, item_id: str, rule_id: str, min_price: float, max_price: float) -> dict:
        data = {"rule_id": rule_id, "min_price": min_price, "max_price": max_price}
        return self.client.post(self._path("/pricing-automation/items/{}/automation", item_id), data)
