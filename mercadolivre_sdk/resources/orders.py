"""
Recurso de pedidos
"""
from datetime import datetime, timedelta
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class OrdersResource(Resource):

    def get(self, order_id) -> dict:
        return self.client.get(self._path("/orders/{}", order_id))

    def search(
        self,
        seller=None,
        buyer=None,
        status: Optional[str] = None,
        q: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        last_updated_from: Optional[str] = None,
        sort: Optional[str] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> dict:
        """Busca pedidos do vendedor ou do comprador (datas em ISO 8601)"""
        query = {
            "seller": seller,
            "buyer": buyer,
            "order.status": status,
            "q": q,
            "order.date_created.from": date_from,
            "order.date_created.to": date_to,
            "order.date_last_updated.from": last_updated_from,
            "sort": sort,
            "offset": offset,
            "limit": limit,
        }
        return self.client.get(self._path("/orders/search", query=query))

    def get_by_seller(self, seller_id, status: Optional[str] = None, offset: Optional[int] = None,
                      limit: Optional[int] = None) -> dict:
        return self.search(seller=seller_id, status=status, sort="date_desc", offset=offset, limit=limit)

    def get_by_buyer(self, buyer_id, status: Optional[str] = None, offset: Optional[int] = None,
                     limit: Optional[int] = None) -> dict:
        return self.search(buyer=buyer_id, status=status, offset=offset, limit=limit)

    def get_recent(self, seller_id, days: int = 7, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        date_from = (datetime.utcnow() - timedelta(days=days)).strftime("%Y-%m-%dT00:00:00.000-00:00")
        return self.search(seller=seller_id, date_from=date_from, sort="date_desc", offset=offset, limit=limit)

    def get_discounts(self, order_id) -> dict:
        return self.client.get(self._path("/orders/{}/discounts", order_id))

    def get_feedback(self, order_id) -> dict:
        return self.client.get(self._path("/orders/{}/feedback", order_id))

    def create_feedback(self, order_id, fulfilled: bool, rating: str, message: Optional[str] = None) -> dict:
        data = {"fulfilled": fulfilled, "rating": rating}
        if message:
            data["message"] = message
        return self.client.post(self._path("/orders/{}/feedback", order_id), data)

    def get_notes(self, order_id) -> list:
        return self.client.get(self._path("/orders/{}/notes", order_id))

    def create_note(self, order_id, note: str) -> dict:
        return self.client.post(self._path("/orders/{}/notes", order_id), {"note": note})

    def update_note(self, order_id, note_id, note: str) -> dict:
        return self.client.put(self._path("/orders/{}/notes/{}", order_id, note_id), {"note": note})

    def delete_note(self, order_id, note_id):
        return self.client.delete(self._path("/orders/{}/notes/{}", order_id, note_id))

    def get_shipments(self, order_id) -> dict:
        return self.client.get(self._path("/orders/{}/shipments", order_id))

    def get_billing_info(self, order_id) -> dict:
        return self.client.get(self._path("/orders/{}/billing_info", order_id))

    def get_product(self, order_id) -> dict:
        return self.client.get(self._path("/orders/{}/product", order_id))
