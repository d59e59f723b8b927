"""
Recurso de moedas e conversões
"""
from mercadolivre_sdk.resources.base import Resource


class CurrenciesResource(Resource):

    def list(self) -> list:
        return self.client.get("/currencies")

    def get(self, currency_id: str) -> dict:
        return self.client.get(self._path("/currencies/{}", currency_id))

    def convert(self, from_currency: str, to_currency: str) -> dict:
        query = {"from": from_currency, "to": to_currency}
        return self.client.get(self._path("/currency_conversions/search", query=query))

    def get_usd_rate(self, to_currency: str = "BRL") -> float:
        result = self.convert("USD", to_currency)
        return (result or {}).get("ratio")
