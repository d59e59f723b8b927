"""
Recurso de qualificações (feedback) e opiniões
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class FeedbackResource(Resource):

    def get(self, feedback_id) -> dict:
        return self.client.get(self._path("/feedback/{}", feedback_id))

    def get_from_order(self, order_id) -> dict:
        return self.client.get(self._path("/orders/{}/feedback", order_id))

    def reply(self, feedback_id, text: str) -> dict:
        return self.client.post(self._path("/feedback/{}/reply", feedback_id), {"reply": text})

    def get_reply(self, feedback_id) -> dict:
        return self.client.get(self._path("/feedback/{}/reply", feedback_id))

    def update_reply(self, feedback_id, text: str) -> dict:
        return self.client.put(self._path("/feedback/{}/reply", feedback_id), {"reply": text})

    def delete_reply(self, feedback_id):
        return self.client.delete(self._path("/feedback/{}/reply", feedback_id))

    def get_item_reviews(self, item_id: str, offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        return self.client.get(self._path("/reviews/item/{}", item_id, query={"offset": offset, "limit": limit}))
