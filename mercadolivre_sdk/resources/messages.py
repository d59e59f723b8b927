"""
Recurso de mensagens pós-venda
"""
from typing import List, Optional

from mercadolivre_sdk.resources.base import Resource

POST_SALE = "post_sale"


class MessagesResource(Resource):

    def get(self, message_id) -> dict:
        return self.client.get(self._path("/messages/{}", message_id, query={"tag": POST_SALE}))

    def get_pack(self, pack_id, seller_id, mark_as_read: Optional[bool] = None,
                 offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        """Conversa de um pack (pedido) com o comprador"""
        query = {"tag": POST_SALE, "mark_as_read": mark_as_read, "offset": offset, "limit": limit}
        return self.client.get(self._path("/messages/packs/{}/sellers/{}", pack_id, seller_id, query=query))

    def send(self, pack_id, seller_id, buyer_id, text: str, attachments: Optional[List[str]] = None) -> dict:
        data = {
            "from": {"user_id": str(seller_id)},
            "to": {"user_id": str(buyer_id)},
            "text": text,
        }
        if attachments:
            data["attachments"] = attachments
        return self.client.post(
            self._path("/messages/packs/{}/sellers/{}", pack_id, seller_id, query={"tag": POST_SALE}),
            data,
        )

    def get_unread(self, role: str = "seller") -> dict:
        return self.client.get(self._path("/messages/unread", query={"role": role, "tag": POST_SALE}))

    def mark_as_read(self, message_ids: List[str]) -> dict:
        return self.client.put(self._path("/messages/mark_as_read/{}", ",".join(message_ids), query={"tag": POST_SALE}))

    def get_attachment(self, attachment_id):
        return self.client.get(self._path("/messages/attachments/{}", attachment_id, query={"tag": POST_SALE}))

    def upload_attachment(self, filename: str, content: bytes, content_type: str = "application/octet-stream") -> dict:
        files = {"file": (filename, content, content_type)}
        return self.client.post(self._path("/messages/attachments", query={"tag": POST_SALE}), files=files)

    def get_action_guide(self, pack_id) -> dict:
        return self.client.get(self._path("/messages/action_guide/packs/{}", pack_id, query={"tag": POST_SALE}))
