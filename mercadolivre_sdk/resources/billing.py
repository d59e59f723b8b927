"""
Recurso de faturamento (billing integration)
"""
from typing import List, Optional

from mercadolivre_sdk.resources.base import Resource

BILLING_PATH = "/billing/integration"


class BillingResource(Resource):

    def get_periods(self, group: str = "ML", document_type: str = "BILL",
                    offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        query = {"group": group, "document_type": document_type, "offset": offset, "limit": limit}
        return self.client.get(self._path(BILLING_PATH + "/monthly/periods", query=query))

    def get_documents(self, period_key: str, group: str = "ML", document_type: str = "BILL",
                      offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        query = {"group": group, "document_type": document_type, "offset": offset, "limit": limit}
        return self.client.get(self._path(BILLING_PATH + "/periods/key/{}/documents", period_key, query=query))

    def get_summary(self, period_key: str, group: str = "ML", document_type: str = "BILL") -> dict:
        query = {"group": group, "document_type": document_type}
        return self.client.get(self._path(BILLING_PATH + "/periods/key/{}/summary/details", period_key, query=query))

    def get_details(self, period_key: str, group: str = "ML", document_type: str = "BILL",
                    offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        query = {"group": group, "document_type": document_type, "offset": offset, "limit": limit}
        return self.client.get(self._path(BILLING_PATH + "/periods/key/{}/group/{}/details", period_key, group, query=query))

    def get_order_details(self, order_ids: List, group: str = "ML") -> dict:
        return self.client.get(
            self._path(BILLING_PATH + "/group/{}/order/details", group, query={"order_ids": list(order_ids)})
        )

    def get_invoice(self, invoice_id) -> dict:
        return self.client.get(self._path("/users/me/invoices/{}", invoice_id))

    def get_fiscal_data(self, user_id) -> dict:
        return self.client.get(self._path("/users/{}/invoices/fiscal_data", user_id))
