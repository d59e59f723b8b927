"""
Rotas de autenticação da API
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mlhub.config.database import get_db
from mlhub.controllers.auth_controller import AuthController, serialize_user
from mlhub.middleware.tenant_middleware import get_current_user
from mlhub.models.saas_models import User
from mlhub.models.schemas import LoginRequest, RefreshRequest, RegisterRequest

# Router para autenticação
auth_router = APIRouter()

auth_controller = AuthController()


@auth_router.post("/register", status_code=201)
async def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Cadastro de usuário com organização própria"""
    return auth_controller.register(data, db)


@auth_router.post("/login")
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    return auth_controller.login(data, db)


@auth_router.post("/refresh")
async def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    """Gera novo par de tokens a partir do refresh token"""
    return auth_controller.refresh(data.refresh_token, db)


@auth_router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return serialize_user(user)
