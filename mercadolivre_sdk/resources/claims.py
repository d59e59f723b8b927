"""
Recurso de reclamações e devoluções
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource

CLAIMS_PATH = "/post-purchase/v1/claims"


class ClaimsResource(Resource):

    def get(self, claim_id) -> dict:
        return self.client.get(self._path(CLAIMS_PATH + "/{}", claim_id))

    def search(
        self,
        status: Optional[str] = None,
        stage: Optional[str] = None,
        resource: Optional[str] = None,
        resource_id=None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> dict:
        query = {
            "status": status,
            "stage": stage,
            "resource": resource,
            "resource_id": resource_id,
            "offset": offset,
            "limit": limit,
        }
        return self.client.get(self._path(CLAIMS_PATH + "/search", query=query))

    def get_messages(self, claim_id) -> list:
        return self.client.get(self._path(CLAIMS_PATH + "/{}/messages", claim_id))

    def send_message(self, claim_id, message: str, receiver_role: str = "complainant") -> dict:
        data = {"receiver_role": receiver_role, "message": message}
        return self.client.post(self._path(CLAIMS_PATH + "/{}/actions/send-message", claim_id), data)

    def get_evidences(self, claim_id) -> list:
        return self.client.get(self._path(CLAIMS_PATH + "/{}/evidences", claim_id))

    def get_affects_reputation(self, claim_id) -> dict:
        return self.client.get(self._path(CLAIMS_PATH + "/{}/affects-reputation", claim_id))

    def get_returns(self, claim_id) -> dict:
        return self.client.get(self._path("/post-purchase/v2/claims/{}/returns", claim_id))

    def get_reason(self, reason_id) -> dict:
        return self.client.get(self._path(CLAIMS_PATH + "/reasons/{}", reason_id))
