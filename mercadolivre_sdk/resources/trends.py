"""
Recurso de tendências de busca
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class TrendsResource(Resource):

    def get_by_site(self, site_id: Optional[str] = None) -> list:
        return self.client.get(self._path("/trends/{}", site_id or self.site_id))

    def get_by_category(self, category_id: str, site_id: Optional[str] = None) -> list:
        return self.client.get(self._path("/trends/{}/{}", site_id or self.site_id, category_id))
