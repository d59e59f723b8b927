"""
Modelos de resposta da API do Mercado Livre
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class MLModel(BaseModel):
    """Base dos modelos: campos desconhecidos da API são preservados"""

    model_config = ConfigDict(extra="allow")


class TokenResponse(MLModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = 21600
    scope: Optional[str] = None
    user_id: Optional[int] = None
    refresh_token: Optional[str] = None


class Paging(MLModel):
    total: int = 0
    offset: int = 0
    limit: int = 0
    primary_results: Optional[int] = None


class MLUser(MLModel):
    id: int
    nickname: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    country_id: Optional[str] = None
    site_id: Optional[str] = None
    permalink: Optional[str] = None
    user_type: Optional[str] = None
    registration_date: Optional[datetime] = None
    seller_reputation: Optional[Dict[str, Any]] = None


class MLItem(MLModel):
    id: str
    title: str
    site_id: Optional[str] = None
    seller_id: Optional[int] = None
    category_id: Optional[str] = None
    price: Optional[float] = None
    base_price: Optional[float] = None
    currency_id: Optional[str] = None
    available_quantity: Optional[int] = None
    sold_quantity: Optional[int] = None
    condition: Optional[str] = None
    listing_type_id: Optional[str] = None
    status: Optional[str] = None
    permalink: Optional[str] = None
    thumbnail: Optional[str] = None
    pictures: List[Dict[str, Any]] = []
    attributes: List[Dict[str, Any]] = []
    variations: List[Dict[str, Any]] = []
    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None


class MLOrderBuyer(MLModel):
    id: int
    nickname: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class MLOrderItem(MLModel):
    item: Dict[str, Any]
    quantity: int = 1
    unit_price: Optional[float] = None
    full_unit_price: Optional[float] = None
    currency_id: Optional[str] = None
    sale_fee: Optional[float] = None


class MLOrder(MLModel):
    id: int
    status: str
    status_detail: Optional[Any] = None
    date_created: Optional[datetime] = None
    date_closed: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    total_amount: Optional[float] = None
    paid_amount: Optional[float] = None
    currency_id: Optional[str] = None
    buyer: Optional[MLOrderBuyer] = None
    seller: Optional[Dict[str, Any]] = None
    order_items: List[MLOrderItem] = []
    payments: List[Dict[str, Any]] = []
    shipping: Optional[Dict[str, Any]] = None
    pack_id: Optional[int] = None
    tags: List[str] = []


class MLAnswer(MLModel):
    text: str
    status: Optional[str] = None
    date_created: Optional[datetime] = None


class MLQuestion(MLModel):
    id: int
    item_id: str
    seller_id: Optional[int] = None
    text: str
    status: str
    date_created: Optional[datetime] = None
    answer: Optional[MLAnswer] = None
    from_: Optional[Dict[str, Any]] = None

    @classmethod
    def from_api(cls, data: dict) -> "MLQuestion":
        payload = dict(data)
        payload["from_"] = payload.pop("from", None)
        return cls(**payload)
