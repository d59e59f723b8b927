"""
Recurso de visitas
"""
from typing import List, Optional

from mercadolivre_sdk.resources.base import Resource


class VisitsResource(Resource):

    def get_item_visits(self, item_id: str, date_from: Optional[str] = None, date_to: Optional[str] = None) -> dict:
        return self.get_items_visits([item_id], date_from=date_from, date_to=date_to)

    def get_items_visits(self, item_ids: List[str], date_from: Optional[str] = None,
                         date_to: Optional[str] = None):
        query = {"ids": list(item_ids), "date_from": date_from, "date_to": date_to}
        return self.client.get(self._path("/items/visits", query=query))

    def get_user_visits(self, user_id, date_from: str, date_to: str) -> dict:
        query = {"date_from": date_from, "date_to": date_to}
        return self.client.get(self._path("/users/{}/items_visits", user_id, query=query))

    def get_item_visits_time_window(self, item_id: str, last: int, unit: str = "day",
                                    ending: Optional[str] = None) -> dict:
        query = {"last": last, "unit": unit, "ending": ending}
        return self.client.get(self._path("/items/{}/visits/time_window", item_id, query=query))

    def get_user_visits_time_window(self, user_id, last: int, unit: str = "day",
                                    ending: Optional[str] = None) -> dict:
        """Visitas agregadas dos anúncios do vendedor nas últimas `last` unidades (day/hour)"""
        query = {"last": last, "unit": unit, "ending": ending}
        return self.client.get(self._path("/users/{}/items_visits/time_window", user_id, query=query))
