"""
Recurso de publicidade (Product Ads)
"""
from typing import List, Optional

from mercadolivre_sdk.resources.base import Resource

PRODUCT_ADS_PATH = "/advertising/product_ads"


class AdvertisingResource(Resource):

    def get_advertisers(self, product_id: str = "PADS") -> dict:
        return self.client.get(self._path("/advertising/advertisers", query={"product_id": product_id}))

    def search_campaigns(
        self,
        advertiser_id,
        campaign_ids: Optional[List] = None,
        status: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        metrics: Optional[List[str]] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> dict:
        query = {
            "filters[campaign_ids]": campaign_ids,
            "filters[status]": status,
            "date_from": date_from,
            "date_to": date_to,
            "metrics": metrics,
            "offset": offset,
            "limit": limit,
        }
        return self.client.get(
            self._path(PRODUCT_ADS_PATH + "/advertisers/{}/campaigns/search", advertiser_id, query=query)
        )

    def get_campaign(self, campaign_id) -> dict:
        return self.client.get(self._path(PRODUCT_ADS_PATH + "/campaigns/{}", campaign_id))

    def create_campaign(self, advertiser_id, data: dict) -> dict:
        return self.client.post(self._path(PRODUCT_ADS_PATH + "/advertisers/{}/campaigns", advertiser_id), data)

    def update_campaign(self, campaign_id, data: dict) -> dict:
        return self.client.put(self._path(PRODUCT_ADS_PATH + "/campaigns/{}", campaign_id), data)

    def get_campaign_metrics(self, campaign_id, date_from: str, date_to: str,
                             metrics: Optional[List[str]] = None) -> dict:
        query = {"date_from": date_from, "date_to": date_to, "metrics": metrics}
        return self.client.get(self._path(PRODUCT_ADS_PATH + "/campaigns/{}/metrics", campaign_id, query=query))

    def get_ad(self, item_id: str) -> dict:
        return self.client.get(self._path(PRODUCT_ADS_PATH + "/ads/{}", item_id))

    def update_ad(self, item_id: str, data: dict) -> dict:
        """Altera status (active/paused) ou campanha de um anúncio"""
        return self.client.put(self._path(PRODUCT_ADS_PATH + "/ads/{}", item_id), data)

    def search_ads(self, advertiser_id, status: Optional[str] = None, campaign_id=None,
                   offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
        query = {
            "filters[status]": status,
            "filters[campaign_id]": campaign_id,
            "offset": offset,
            "limit": limit,
        }
        return self.client.get(self._path(PRODUCT_ADS_PATH + "/advertisers/{}/ads/search", advertiser_id, query=query))
