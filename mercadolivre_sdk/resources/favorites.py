"""
Recurso de favoritos (bookmarks) do usuário autenticado
"""
from mercadolivre_sdk.resources.base import Resource


class FavoritesResource(Resource):

    def list(self) -> list:
        return self.client.get("/users/me/bookmarks")

    def add(self, item_id: str) -> dict:
        return self.client.post("/users/me/bookmarks", {"item_id": item_id})

    def remove(self, item_id: str):
        return self.client.delete(self._path("/users/me/bookmarks/{}", item_id))

    def is_favorite(self, item_id: str) -> bool:
        bookmarks = self.list() or []
        return any(bookmark.get("item_id") == item_id for bookmark in bookmarks)
