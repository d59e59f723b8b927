"""
Dublês HTTP para exercitar o SDK sem rede
"""
import json
from urllib.parse import parse_qsl, urlsplit

import requests
from requests.structures import CaseInsensitiveDict

from mercadolivre_sdk import MercadoLivre, MercadoLivreConfig


class FakeResponse:

    def __init__(self, status_code=200, body=None, headers=None, content_type="application/json"):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        if body is None:
            self.content = b""
        elif isinstance(body, bytes):
            self.content = body
        elif isinstance(body, str):
            self.content = body.encode("utf-8")
        else:
            self.content = json.dumps(body).encode("utf-8")
        if self.content and "Content-Type" not in self.headers:
            self.headers["Content-Type"] = content_type

    @property
    def text(self):
        return self.content.decode("utf-8")

    def json(self):
        return json.loads(self.content)


class FakeSession:
    """
    Sessão que responde por (método, caminho) e grava as chamadas.

    Cada rota aceita uma resposta fixa, uma lista (consumida em ordem) ou
    uma função que recebe (query, kwargs).
    """

    def __init__(self, default_body=None):
        self.routes = {}
        self.calls = []
        # Sem rota cadastrada: 200 com default_body, ou 404 quando None
        self.default_body = default_body

    def add(self, method, path, body=None, status_code=200, headers=None):
        self.routes[(method.upper(), path)] = FakeResponse(status_code, body, headers)
        return self

    def add_sequence(self, method, path, responses):
        self.routes[(method.upper(), path)] = list(responses)
        return self

    def add_handler(self, method, path, handler):
        self.routes[(method.upper(), path)] = handler
        return self

    def fail(self, method, path, exc=None):
        self.routes[(method.upper(), path)] = exc or requests.ConnectionError("connection refused")
        return self

    def request(self, method, url, **kwargs):
        parts = urlsplit(url)
        query = dict(parse_qsl(parts.query, keep_blank_values=True))
        self.calls.append({"method": method, "url": url, "path": parts.path, "query": query, **kwargs})

        route = self.routes.get((method.upper(), parts.path))
        if route is None and self.default_body is not None:
            return FakeResponse(200, self.default_body)
        if route is None:
            return FakeResponse(404, {"message": f"not found: {parts.path}", "error": "not_found"})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, list):
            return route.pop(0) if len(route) > 1 else route[0]
        if callable(route):
            return route(query, kwargs)
        return route

    def last_call(self):
        return self.calls[-1]

    def calls_to(self, path, method=None):
        return [
            call for call in self.calls
            if call["path"] == path and (method is None or call["method"] == method.upper())
        ]


def make_client(session=None, **overrides) -> MercadoLivre:
    config = MercadoLivreConfig(
        client_id="123456",
        client_secret="secret",
        redirect_uri="https://app.example.com/api/callback",
    )
    return MercadoLivre(config, session=session or FakeSession(), **overrides)


def token_payload(access_token="APP_USR-new", refresh_token="TG-new", user_id=111, expires_in=21600):
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": expires_in,
        "scope": "offline_access read write",
        "user_id": user_id,
        "refresh_token": refresh_token,
    }
