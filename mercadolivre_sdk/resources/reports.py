"""
Recurso de relatórios
"""
from typing import List, Optional

from mercadolivre_sdk.resources.base import Resource


class ReportsResource(Resource):

    def list(self, report_type: Optional[str] = None, offset: Optional[int] = None,
             limit: Optional[int] = None) -> dict:
        return self.client.get(self._path("/reports", query={"type": report_type, "offset": offset, "limit": limit}))

    def get(self, report_id) -> dict:
        return self.client.get(self._path("/reports/{}", report_id))

    def create(self, report_type: str, data: Optional[dict] = None) -> dict:
        return self.client.post(self._path("/reports/{}", report_type), data or {})

    def delete(self, report_id):
        return self.client.delete(self._path("/reports/{}", report_id))

    def download(self, report_id):
        """Conteúdo bruto do relatório (CSV como texto, demais formatos como bytes)"""
        return self.client.get(self._path("/reports/{}/download", report_id))

    def get_order_details(self, order_ids: List, group: str = "ML") -> dict:
        query = {"order_ids": [str(order_id) for order_id in order_ids]}
        return self.client.get(self._path("/billing/integration/group/{}/order/details", group, query=query))
