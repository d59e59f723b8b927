"""
Recurso Mercado Envios Flex
"""
from typing import List, Optional

from mercadolivre_sdk.resources.base import Resource


class FlexResource(Resource):

    def _flex_path(self, user_id, suffix: str = "", site_id: Optional[str] = None, query: Optional[dict] = None) -> str:
        return self._path("/flex/sites/{}/users/{}" + suffix, site_id or self.site_id, user_id, query=query)

    def get_subscriptions(self, user_id, site_id: Optional[str] = None) -> list:
        return self.client.get(self._flex_path(user_id, "/subscriptions/v1", site_id))

    def get_configuration(self, user_id, site_id: Optional[str] = None) -> dict:
        return self.client.get(self._flex_path(user_id, "/configuration/v1", site_id))

    def update_configuration(self, user_id, data: dict, site_id: Optional[str] = None) -> dict:
        return self.client.put(self._flex_path(user_id, "/configuration/v1", site_id), data)

    def get_coverage_zones(self, user_id, site_id: Optional[str] = None) -> dict:
        """Zonas de cobertura, incluindo as disponíveis para ativação"""
        return self.client.get(
            self._flex_path(user_id, "/configuration/coverage/zones/v1", site_id, query={"show_availables": True})
        )

    def get_holidays(self, user_id, site_id: Optional[str] = None) -> dict:
        return self.client.get(self._flex_path(user_id, "/configuration/holidays/v1", site_id))

    def set_holidays(self, user_id, dates: List[str], site_id: Optional[str] = None) -> dict:
        return self.client.put(self._flex_path(user_id, "/configuration/holidays/v1", site_id), {"holidays": dates})
