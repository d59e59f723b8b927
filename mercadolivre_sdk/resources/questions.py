"""
Recurso de perguntas e respostas
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class QuestionsResource(Resource):

    def get(self, question_id) -> dict:
        return self.client.get(self._path("/questions/{}", question_id, query={"api_version": 4}))

    def search(
        self,
        item: Optional[str] = None,
        seller_id=None,
        from_user=None,
        status: Optional[str] = None,
        sort_fields: Optional[str] = None,
        sort_types: Optional[str] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> dict:
        query = {
            "item": item,
            "seller_id": seller_id,
            "from": from_user,
            "status": status,
            "sort_fields": sort_fields,
            "sort_types": sort_types,
            "api_version": 4,
            "offset": offset,
            "limit": limit,
        }
        return self.client.get(self._path("/questions/search", query=query))

    def get_by_item(self, item_id: str, status: Optional[str] = None, offset: Optional[int] = None,
                    limit: Optional[int] = None) -> dict:
        return self.search(item=item_id, status=status, offset=offset, limit=limit)

    def get_by_seller(self, seller_id, status: Optional[str] = None, offset: Optional[int] = None,
                      limit: Optional[int] = None) -> dict:
        return self.search(seller_id=seller_id, status=status, sort_fields="date_created",
                           sort_types="DESC", offset=offset, limit=limit)

    def get_my_received(self, status: Optional[str] = None, offset: Optional[int] = None,
                        limit: Optional[int] = None) -> dict:
        query = {"status": status, "api_version": 4, "offset": offset, "limit": limit}
        return self.client.get(self._path("/my/received_questions/search", query=query))

    def create(self, item_id: str, text: str) -> dict:
        return self.client.post("/questions", {"item_id": item_id, "text": text})

    def answer(self, question_id, text: str) -> dict:
        return self.client.post("/answers", {"question_id": int(question_id), "text": text})

    def delete(self, question_id):
        return self.client.delete(self._path("/questions/{}", question_id))

    def get_blocked_users(self, seller_id) -> dict:
        return self.client.get(self._path("/users/{}/questions_blacklist", seller_id))

    def block_user(self, seller_id, user_id) -> dict:
        return self.client.post(self._path("/users/{}/questions_blacklist", seller_id), {"user_id": int(user_id)})

    def unblock_user(self, seller_id, user_id):
        return self.client.delete(self._path("/users/{}/questions_blacklist/{}", seller_id, user_id))
