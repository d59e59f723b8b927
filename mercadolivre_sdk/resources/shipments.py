"""
Recurso de envios
"""
from typing import List, Optional, Union

from mercadolivre_sdk.resources.base import Resource


class ShipmentsResource(Resource):

    def get(self, shipment_id) -> dict:
        return self.client.get(self._path("/shipments/{}", shipment_id))

    def get_items(self, shipment_id) -> list:
        return self.client.get(self._path("/shipments/{}/items", shipment_id))

    def get_payments(self, shipment_id) -> list:
        return self.client.get(self._path("/shipments/{}/payments", shipment_id))

    def get_sla(self, shipment_id) -> dict:
        return self.client.get(self._path("/shipments/{}/sla", shipment_id))

    def get_delays(self, shipment_id) -> dict:
        return self.client.get(self._path("/shipments/{}/delays", shipment_id))

    def get_lead_time(self, shipment_id) -> dict:
        return self.client.get(self._path("/shipments/{}/lead_time", shipment_id))

    def get_history(self, shipment_id) -> list:
        return self.client.get(self._path("/shipments/{}/history", shipment_id))

    def get_carrier(self, shipment_id) -> dict:
        return self.client.get(self._path("/shipments/{}/carrier", shipment_id))

    def get_label(self, shipment_ids: Union[List, str, int], response_type: str = "pdf"):
        """Etiquetas em PDF (bytes) ou ZPL2"""
        if not isinstance(shipment_ids, (list, tuple)):
            shipment_ids = [shipment_ids]
        query = {"shipment_ids": list(shipment_ids), "response_type": response_type}
        return self.client.get(self._path("/shipment_labels", query=query))

    def ready_to_ship(self, shipment_id) -> dict:
        return self.client.post(self._path("/shipments/{}/process/ready_to_ship", shipment_id))

    def set_invoice_data(self, shipment_id, data: dict, site_id: Optional[str] = None) -> dict:
        query = {"siteId": site_id or self.site_id}
        return self.client.post(self._path("/shipments/{}/invoice_data", shipment_id, query=query), data)

    def get_statuses(self) -> list:
        return self.client.get("/shipment_statuses")
