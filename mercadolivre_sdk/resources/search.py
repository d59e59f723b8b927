"""
Recurso de busca de anúncios no site
"""
from typing import Optional

from mercadolivre_sdk.resources.base import Resource


class SearchResource(Resource):

    def search(
        self,
        q: Optional[str] = None,
        category: Optional[str] = None,
        seller_id=None,
        nickname: Optional[str] = None,
        condition: Optional[str] = None,
        buying_mode: Optional[str] = None,
        price_min: Optional[float] = None,
        price_max: Optional[float] = None,
        sort: Optional[str] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        site_id: Optional[str] = None,
    ) -> dict:
        price = None
        if price_min is not None or price_max is not None:
            price = f"{'' if price_min is None else price_min}-{'' if price_max is None else price_max}"
        query = {
            "q": q,
            "category": category,
            "seller_id": seller_id,
            "nickname": nickname,
            "condition": condition,
            "buying_mode": buying_mode,
            "price": price,
            "sort": sort,
            "offset": offset,
            "limit": limit,
        }
        return self.client.get(self._path("/sites/{}/search", site_id or self.site_id, query=query))

    def by_query(self, q: str, **kwargs) -> dict:
        return self.search(q=q, **kwargs)

    def by_category(self, category_id: str, **kwargs) -> dict:
        return self.search(category=category_id, **kwargs)

    def by_seller(self, seller_id, **kwargs) -> dict:
        return self.search(seller_id=seller_id, **kwargs)

    def by_price_range(self, price_min: float, price_max: float, **kwargs) -> dict:
        return self.search(price_min=price_min, price_max=price_max, **kwargs)

    def get_suggestions(self, q: str, limit: Optional[int] = None, site_id: Optional[str] = None) -> dict:
        query = {"q": q, "limit": limit}
        return self.client.get(self._path("/resources/sites/{}/autosuggest", site_id or self.site_id, query=query))
