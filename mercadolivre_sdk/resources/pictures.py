"""
Recurso de imagens
"""
from mercadolivre_sdk.resources.base import Resource


class PicturesResource(Resource):

    def get(self, picture_id: str) -> dict:
        return self.client.get(self._path("/pictures/{}", picture_id))

    def upload(self, filename: str, content: bytes, content_type: str = "image/jpeg") -> dict:
        """Envia a imagem via multipart e devolve o id gerado"""
        files = {"file": (filename, content, content_type)}
        return self.client.post("/pictures/items/upload", files=files)

    def upload_from_url(self, source: str) -> dict:
        return self.client.post("/pictures", {"source": source})

    def add_to_item(self, item_id: str, picture_id: str) -> dict:
        return self.client.post(self._path("/items/{}/pictures", item_id), {"id": picture_id})

    def get_from_item(self, item_id: str) -> list:
        item = self.client.get(self._path("/items/{}", item_id, query={"attributes": "pictures"}))
        return (item or {}).get("pictures", [])

    def remove_from_item(self, item_id: str, picture_id: str) -> dict:
        """A API não remove imagens individualmente: reenvia a lista sem a imagem"""
        pictures = [picture for picture in self.get_from_item(item_id) if picture.get("id") != picture_id]
        return self.client.put(
            self._path("/items/{}", item_id),
            {"pictures": [{"id": picture["id"]} for picture in pictures]},
        )
