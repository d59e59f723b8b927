"""
Recurso de pagamentos
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class PaymentsResource(Resource):

    def get(self, payment_id) -> dict:
        return self.client.get(self._path("/payments/{}", payment_id))

    def create(self, data: dict) -> dict:
        return self.client.post("/payments", data)

    def update(self, payment_id, data: dict) -> dict:
        return self.client.put(self._path("/payments/{}", payment_id), data)

    def cancel(self, payment_id) -> dict:
        return self.update(payment_id, {"status": "cancelled"})

    def refund(self, payment_id, amount: Optional[float] = None) -> dict:
        """Estorno total ou parcial (quando amount é informado)"""
        data = {"amount": amount} if amount is not None else {}
        return self.client.post(self._path("/payments/{}/refunds", payment_id), data)

    def get_refunds(self, payment_id) -> list:
        return self.client.get(self._path("/payments/{}/refunds", payment_id))

    def get_collection(self, collection_id) -> dict:
        return self.client.get(self._path("/collections/{}", collection_id))

    def list_methods(self, site_id: Optional[str] = None) -> list:
        return self.client.get(self._path("/sites/{}/payment_methods", site_id or self.site_id))

    def get_method(self, method_id: str, site_id: Optional[str] = None) -> dict:
        return self.client.get(self._path("/sites/{}/payment_methods/{}", site_id or self.site_id, method_id))
