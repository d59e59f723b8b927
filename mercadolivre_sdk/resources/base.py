"""
Base dos recursos do SDK
"""
from typing import Any, Optional
from urllib.parse import quote

from mercadolivre_sdk.utils import build_query_string


class Resource:
    """Agrupa as chamadas HTTP de uma área da API"""

    def __init__(self, client):
        self.client = client

    @property
    def site_id(self) -> str:
        return self.client.get_site_id()

    @staticmethod
    def _segment(value: Any) -> str:
        return quote(str(value), safe="")

    def _path(self, template: str, *args, query: Optional[dict] = None) -> str:
        """Monta o caminho substituindo {} pelos argumentos e anexando a query"""
        path = template.format(*(self._segment(arg) for arg in args))
        query_string = build_query_string(query)
        if not query_string:
            return path
        separator = "&" if "?" in path else "?"
        return f"{path}{separator}{query_string}"
