"""
Controller de autenticação para sistema SaaS
"""
import logging
import re
import unicodedata
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from mlhub.config.settings import settings
from mlhub.models.saas_models import Organization, OrganizationPlan, User, UserRole
from mlhub.models.schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

# Configuração de hash de senha
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"
OAUTH_STATE = "oauth_state"


def serialize_user(user: User) -> dict:
    organization = user.organization
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value if user.role else None,
        "is_active": user.is_active,
        "active_until": user.active_until.isoformat() if user.active_until else None,
        "last_login": user.last_login.isoformat() if user.last_login else None,
        "organization": {
            "id": organization.id,
            "name": organization.name,
            "slug": organization.slug,
            "plan": organization.plan.value if organization.plan else None,
            "ml_connected": organization.ml_connected,
        } if organization else None,
    }


class AuthController:
    """Controller para autenticação e autorização"""

    def __init__(self):
        self.pwd_context = pwd_context

    # Senhas e tokens

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        return self.pwd_context.verify(password, password_hash)

    def _encode(self, payload: dict, secret: str, expires_delta: timedelta) -> str:
        data = dict(payload)
        data["exp"] = datetime.utcnow() + expires_delta
        return jwt.encode(data, secret, algorithm=settings.jwt_algorithm)

    def create_access_token(self, user: User) -> str:
        payload = {
            "sub": str(user.id),
            "org": user.organization_id,
            "role": user.role.value,
            "type": ACCESS_TOKEN,
        }
        return self._encode(payload, settings.jwt_secret_key, timedelta(minutes=settings.access_token_expire_minutes))

    def create_refresh_token(self, user: User) -> str:
        payload = {"sub": str(user.id), "type": REFRESH_TOKEN}
        return self._encode(payload, settings.jwt_refresh_secret_key, timedelta(days=settings.refresh_token_expire_days))

    def create_tokens(self, user: User) -> dict:
        return {
            "access_token": self.create_access_token(user),
            "refresh_token": self.create_refresh_token(user),
            "token_type": "bearer",
            "expires_in": settings.access_token_expire_minutes * 60,
        }

    def decode_token(self, token: str, token_type: str = ACCESS_TOKEN) -> Optional[dict]:
        """Valida o JWT e devolve o payload, ou None se inválido/expirado"""
        secret = settings.jwt_refresh_secret_key if token_type == REFRESH_TOKEN else settings.jwt_secret_key
        try:
            payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
        except JWTError as e:
            logger.debug(f"JWT inválido ({token_type}): {e}")
            return None
        if payload.get("type") != token_type:
            return None
        return payload

    def create_state_token(self, user: User) -> str:
        """State assinado do fluxo OAuth: identifica quem iniciou a conexão"""
        payload = {"sub": str(user.id), "org": user.organization_id, "type": OAUTH_STATE}
        return self._encode(payload, settings.jwt_secret_key, timedelta(minutes=settings.oauth_state_expire_minutes))

    # Fluxos

    def check_user_access(self, user: User, db: Session):
        """Bloqueia usuários inativos ou com acesso temporário vencido"""
        if user.is_active and user.active_until and user.active_until < datetime.utcnow():
            logger.info(f"⏰ Acesso expirado para user_id: {user.id}, desativando")
            user.is_active = False
            db.commit()
            raise HTTPException(status_code=403, detail="Seu acesso expirou. Entre em contato com o suporte.")

        if not user.is_active:
            raise HTTPException(status_code=403, detail="Sua conta ainda não foi ativada ou está desativada.")

    def register(self, data: RegisterRequest, db: Session) -> dict:
        """Cria o usuário e sua organização padrão"""
        if db.query(User).filter(User.email == data.email).first():
            raise HTTPException(status_code=409, detail="Email já cadastrado")

        organization_name = (data.organization_name or "").strip() or f"{data.name}'s Organization"
        organization = Organization(
            name=organization_name,
            slug=self.generate_organization_slug(organization_name, db),
            plan=OrganizationPlan.FREE,
            ml_connected=False,
        )
        db.add(organization)
        db.flush()

        user = User(
            organization_id=organization.id,
            email=data.email,
            name=data.name.strip(),
            password_hash=self.hash_password(data.password),
            role=UserRole.ADMIN,
            is_active=not settings.require_admin_activation,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info(f"✅ Usuário registrado: {user.email} (organização {organization.slug})")

        result = {"user": serialize_user(user)}
        if user.is_active:
            result.update(self.create_tokens(user))
        else:
            result["message"] = "Cadastro realizado. Aguarde a liberação do acesso."
        return result

    def login(self, data: LoginRequest, db: Session) -> dict:
        user = db.query(User).filter(User.email == data.email).first()
        if not user or not self.verify_password(data.password, user.password_hash):
            raise HTTPException(status_code=401, detail="Email ou senha incorretos")

        self.check_user_access(user, db)

        user.last_login = datetime.utcnow()
        db.commit()
        db.refresh(user)

        logger.info(f"🔐 Login realizado: {user.email}")
        return {"user": serialize_user(user), **self.create_tokens(user)}

    def refresh(self, refresh_token: str, db: Session) -> dict:
        payload = self.decode_token(refresh_token, REFRESH_TOKEN)
        if not payload:
            raise HTTPException(status_code=401, detail="Refresh token inválido ou expirado")

        user = db.query(User).filter(User.id == int(payload["sub"])).first()
        if not user:
            raise HTTPException(status_code=401, detail="Usuário não encontrado")

        self.check_user_access(user, db)
        return {"user": serialize_user(user), **self.create_tokens(user)}

    def generate_organization_slug(self, name: str, db: Session) -> str:
        """Gera slug único a partir do nome da organização"""
        normalized = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
        base_slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-") or "org"
        base_slug = base_slug[:90]

        slug = base_slug
        counter = 1
        while db.query(Organization).filter(Organization.slug == slug).first():
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug
