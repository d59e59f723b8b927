from datetime import datetime, timedelta

from mlhub.models.saas_models import Organization, User
from tests.conftest import auth_headers, create_user


def register(client, **overrides):
    payload = {"email": "Vendedor@Loja.com", "password": "senha123", "name": "Ana"}
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_creates_organization_and_admin(client, db):
    response = register(client, organization_name="Loja da Ana")

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "vendedor@loja.com"
    assert data["user"]["role"] == "admin"
    assert data["user"]["organization"]["slug"] == "loja-da-ana"
    assert data["user"]["organization"]["plan"] == "free"
    assert data["access_token"] and data["refresh_token"]

    user = db.query(User).filter(User.email == "vendedor@loja.com").one()
    assert user.password_hash != "senha123"


def test_register_default_organization_name(client, db):
    register(client)
    organization = db.query(Organization).one()
    assert organization.name == "Ana's Organization"
    assert organization.slug == "ana-s-organization"


def test_register_duplicate_email(client):
    register(client)
    response = register(client)
    assert response.status_code == 409


def test_register_generates_unique_slugs(client):
    first = register(client, email="a@loja.com", organization_name="Loja Ação")
    second = register(client, email="b@loja.com", organization_name="Loja Ação")

    assert first.json()["user"]["organization"]["slug"] == "loja-acao"
    assert second.json()["user"]["organization"]["slug"] == "loja-acao-1"


def test_register_validates_payload(client):
    assert register(client, password="123").status_code == 422
    assert register(client, email="sem-arroba").status_code == 422


def test_login_and_me(client):
    register(client)
    response = client.post("/api/auth/login", json={"email": "vendedor@loja.com", "password": "senha123"})

    assert response.status_code == 200
    token = response.json()["access_token"]
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "vendedor@loja.com"
    assert me.json()["last_login"] is not None


def test_login_wrong_password(client):
    register(client)
    response = client.post("/api/auth/login", json={"email": "vendedor@loja.com", "password": "errada"})
    assert response.status_code == 401


def test_login_inactive_user(client, db, organization):
    create_user(db, organization, email="inativo@loja.com", is_active=False)
    response = client.post("/api/auth/login", json={"email": "inativo@loja.com", "password": "senha123"})
    assert response.status_code == 403


def test_login_expired_access_deactivates_user(client, db, organization):
    user = create_user(db, organization, email="temp@loja.com", active_until=datetime.utcnow() - timedelta(days=1))

    response = client.post("/api/auth/login", json={"email": "temp@loja.com", "password": "senha123"})

    assert response.status_code == 403
    db.expire_all()
    assert db.get(User, user.id).is_active is False


def test_refresh_returns_new_pair(client):
    tokens = register(client).json()
    response = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert response.status_code == 200
    assert response.json()["access_token"]


def test_refresh_rejects_access_token(client):
    tokens = register(client).json()
    response = client.post("/api/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert response.status_code == 401


def test_me_requires_token(client, admin_user):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer invalido"}).status_code == 401
    assert client.get("/api/auth/me", headers=auth_headers(admin_user)).status_code == 200


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
