"""
Utilitários do SDK: paginação, query strings, validações e formatação
"""
import re
from decimal import Decimal
from typing import Any, Callable, Dict, Iterator, List, Optional
from urllib.parse import parse_qsl, quote, urlencode

SITE_IDS = {
    "MLA": "Argentina",
    "MLB": "Brasil",
    "MCO": "Colombia",
    "MCR": "Costa Rica",
    "MEC": "Ecuador",
    "MLC": "Chile",
    "MLM": "Mexico",
    "MLU": "Uruguay",
    "MLV": "Venezuela",
    "MPA": "Panamá",
    "MPE": "Perú",
    "MPT": "Portugal",
    "MRD": "República Dominicana",
}

CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "ARS": "$",
    "MXN": "$",
    "COP": "$",
    "CLP": "$",
    "UYU": "$U",
    "PEN": "S/",
    "USD": "US$",
    "EUR": "€",
}

MAX_LIMIT = 1000
DEFAULT_LIMIT = 50

ITEM_ID_PATTERN = re.compile(r"^[A-Z]{3}\d{6,12}$")
CATEGORY_ID_PATTERN = re.compile(r"^[A-Z]{3}\d+$")
USER_ID_PATTERN = re.compile(r"^\d+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ZIP_CODE_PATTERN = re.compile(r"^\d{5}-?\d{3}$")


# Paginação

def build_pagination_params(offset: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, int]:
    """Normaliza offset/limit dentro dos limites aceitos pela API"""
    params = {}
    if offset is not None:
        params["offset"] = max(0, int(offset))
    if limit is not None:
        params["limit"] = min(MAX_LIMIT, max(1, int(limit)))
    return params


def has_next_page(paging: Optional[dict]) -> bool:
    if not paging:
        return False
    offset = paging.get("offset", 0) or 0
    limit = paging.get("limit", 0) or 0
    total = paging.get("total", 0) or 0
    return limit > 0 and offset + limit < total


def has_previous_page(paging: Optional[dict]) -> bool:
    return bool(paging) and (paging.get("offset", 0) or 0) > 0


def get_next_page(paging: Optional[dict]) -> Optional[Dict[str, int]]:
    if not has_next_page(paging):
        return None
    return {"offset": (paging.get("offset") or 0) + paging["limit"], "limit": paging["limit"]}


def get_previous_page(paging: Optional[dict]) -> Optional[Dict[str, int]]:
    if not has_previous_page(paging):
        return None
    limit = paging.get("limit") or DEFAULT_LIMIT
    return {"offset": max(0, paging["offset"] - limit), "limit": limit}


def paginate(fetch: Callable[..., dict], limit: int = DEFAULT_LIMIT, max_items: Optional[int] = None,
             results_key: str = "results") -> Iterator[Any]:
    """
    Percorre um endpoint paginado por offset/limit.

    `fetch` recebe offset e limit e devolve o corpo com `paging` e `results`.
    """
    offset = 0
    yielded = 0
    while True:
        page = fetch(offset=offset, limit=limit) or {}
        results = page.get(results_key) or []
        for result in results:
            yield result
            yielded += 1
            if max_items is not None and yielded >= max_items:
                return
        # Perguntas trazem total/limit na raiz em vez de paging
        paging = page.get("paging") or {"offset": offset, "limit": limit, "total": page.get("total", 0)}
        next_page = get_next_page(paging)
        if not results or next_page is None:
            return
        offset = next_page["offset"]


# Query strings

def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return ",".join(_format_value(v) for v in value)
    return str(value)


def clean_params(params: Optional[dict]) -> Dict[str, str]:
    """Remove parâmetros None e converte valores para string"""
    if not params:
        return {}
    return {key: _format_value(value) for key, value in params.items() if value is not None}


def build_query_string(params: Optional[dict]) -> str:
    cleaned = clean_params(params)
    if not cleaned:
        return ""
    return urlencode(cleaned, safe=",")


def parse_query_string(query: str) -> Dict[str, str]:
    return dict(parse_qsl(query.lstrip("?"), keep_blank_values=True))


def replace_url_params(template: str, params: Dict[str, Any]) -> str:
    """Substitui {nome} e :nome no template pelos valores codificados"""
    url = template
    for key, value in params.items():
        encoded = quote(str(value), safe="")
        url = url.replace("{" + key + "}", encoded)
        url = re.sub(r":" + re.escape(key) + r"(?=/|$|\?)", encoded, url)
    return url


# Validações

def is_valid_item_id(item_id: str) -> bool:
    return bool(item_id) and bool(ITEM_ID_PATTERN.match(item_id))


def is_valid_category_id(category_id: str) -> bool:
    return bool(category_id) and bool(CATEGORY_ID_PATTERN.match(category_id))


def is_valid_user_id(user_id) -> bool:
    return user_id is not None and bool(USER_ID_PATTERN.match(str(user_id)))


def is_valid_site_id(site_id: str) -> bool:
    return site_id in SITE_IDS


def is_valid_email(email: str) -> bool:
    return bool(email) and bool(EMAIL_PATTERN.match(email))


def is_valid_zip_code(zip_code: str) -> bool:
    return bool(zip_code) and bool(ZIP_CODE_PATTERN.match(zip_code))


def get_site_id_from_item_id(item_id: str) -> Optional[str]:
    prefix = (item_id or "")[:3]
    return prefix if prefix in SITE_IDS else None


# Formatação

def format_price(amount, currency_id: str = "BRL") -> str:
    """Formata valores no padrão brasileiro (1.234,56)"""
    value = Decimal(str(amount or 0)).quantize(Decimal("0.01"))
    formatted = f"{value:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    symbol = CURRENCY_SYMBOLS.get(currency_id, currency_id)
    return f"{symbol} {formatted}"


def chunk_list(items: List[Any], size: int) -> List[List[Any]]:
    if size <= 0:
        raise ValueError("size deve ser maior que zero")
    return [items[i:i + size] for i in range(0, len(items), size)]
