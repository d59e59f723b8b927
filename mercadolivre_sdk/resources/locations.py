"""
Recurso de localidades e CEPs
"""
from mercadolivre_sdk.resources.base import Resource


class LocationsResource(Resource):

    def list_countries(self) -> list:
        return self.client.get("/classified_locations/countries")

    def get_country(self, country_id: str) -> dict:
        return self.client.get(self._path("/classified_locations/countries/{}", country_id))

    def get_state(self, state_id: str) -> dict:
        return self.client.get(self._path("/classified_locations/states/{}", state_id))

    def get_city(self, city_id: str) -> dict:
        return self.client.get(self._path("/classified_locations/cities/{}", city_id))

    def get_zip_code(self, zip_code: str, country_id: str = "BR") -> dict:
        return self.client.get(self._path("/countries/{}/zip_codes/{}", country_id, zip_code.replace("-", "")))

    def search_zip_code_range(self, zip_code_from: str, zip_code_to: str, country_id: str = "BR") -> dict:
        query = {"zip_code_from": zip_code_from, "zip_code_to": zip_code_to}
        return self.client.get(self._path("/country/{}/zip_codes/search_between", country_id, query=query))
