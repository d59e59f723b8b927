"""
Recurso de notificações
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class NotificationsResource(Resource):

    def list_missed(self, app_id, topic: Optional[str] = None, offset: Optional[int] = None,
                    limit: Optional[int] = None) -> dict:
        """Notificações que não foram entregues ao callback da aplicação"""
        query = {"app_id": app_id, "topic": topic, "offset": offset, "limit": limit}
        return self.client.get(self._path("/missed_feeds", query=query))

    def get(self, notification_id) -> dict:
        return self.client.get(self._path("/notifications/{}", notification_id))

    def mark_as_read(self, notification_id) -> dict:
        return self.client.put(self._path("/notifications/{}", notification_id), {"read": True})

    def delete(self, notification_id):
        return self.client.delete(self._path("/notifications/{}", notification_id))
