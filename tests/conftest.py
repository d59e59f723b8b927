import os
import tempfile
from datetime import datetime, timedelta

# Ambiente de teste definido antes de importar a aplicação
os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENABLE_SCHEDULER"] = "false"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="mlhub-logs-")
os.environ["ML_APP_ID"] = "123456"
os.environ["ML_CLIENT_SECRET"] = "secret"
os.environ["BASE_URL"] = "http://testserver"
os.environ["FRONTEND_URL"] = "http://frontend.test"

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from mlhub.config.database import Base, SessionLocal, engine, get_db
from mlhub.controllers.auth_controller import AuthController
from mlhub.main import app
from mlhub.models.saas_models import (
    MLAccount,
    MLAccountStatus,
    Organization,
    OrganizationPlan,
    Token,
    User,
    UserRole,
)
from mlhub.routes.ml_routes import get_ml_service, get_sync_service
from mlhub.services.mercadolivre_service import MercadoLivreService
from mlhub.services.sync_service import SyncService
from tests.fakes import FakeSession, make_client

auth_controller = AuthController()


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api():
    """API do Mercado Livre simulada"""
    return FakeSession()


@pytest.fixture
def sdk_factory(api):
    def factory(access_token=None, refresh_token=None, site_id=None):
        return make_client(api, access_token=access_token, refresh_token=refresh_token, site_id=site_id)
    return factory


@pytest.fixture
def client(sdk_factory):
    def override_ml_service(db=Depends(get_db)):
        return MercadoLivreService(db, sdk_factory)

    def override_sync_service(db=Depends(get_db)):
        return SyncService(db, sdk_factory)

    app.dependency_overrides[get_ml_service] = override_ml_service
    app.dependency_overrides[get_sync_service] = override_sync_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# Fábricas de dados

def create_organization(db, name="Loja Teste", slug=None, plan=OrganizationPlan.FREE):
    organization = Organization(name=name, slug=slug or auth_controller.generate_organization_slug(name, db),
                                plan=plan, ml_connected=False)
    db.add(organization)
    db.commit()
    db.refresh(organization)
    return organization


def create_user(db, organization=None, email="admin@loja.com", role=UserRole.ADMIN, password="senha123",
                is_active=True, active_until=None, name="Admin"):
    user = User(
        organization_id=organization.id if organization else None,
        email=email,
        name=name,
        password_hash=auth_controller.hash_password(password),
        role=role,
        is_active=is_active,
        active_until=active_until,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_account(db, organization, ml_user_id="111", nickname="LOJA_TESTE", is_primary=True,
                   status=MLAccountStatus.ACTIVE, expires_in=timedelta(hours=6),
                   access_token="APP_USR-current", refresh_token="TG-current"):
    account = MLAccount(
        organization_id=organization.id,
        ml_user_id=ml_user_id,
        nickname=nickname,
        site_id="MLB",
        is_primary=is_primary,
        status=status,
    )
    db.add(account)
    db.flush()
    db.add(Token(
        ml_account_id=account.id,
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_in=21600,
        is_active=True,
        expires_at=datetime.utcnow() + expires_in,
    ))
    organization.ml_connected = True
    db.commit()
    db.refresh(account)
    return account


def auth_headers(user):
    return {"Authorization": f"Bearer {auth_controller.create_access_token(user)}"}


@pytest.fixture
def organization(db):
    return create_organization(db)


@pytest.fixture
def admin_user(db, organization):
    return create_user(db, organization)


@pytest.fixture
def headers(admin_user):
    return auth_headers(admin_user)
