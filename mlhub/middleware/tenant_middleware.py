"""
Middleware para isolamento de tenants (organizações)
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from mlhub.config.database import get_db
from mlhub.controllers.auth_controller import AuthController
from mlhub.models.saas_models import Organization, User, UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)
auth_controller = AuthController()


class TenantContext:
    """Contexto do tenant atual"""
    def __init__(self, organization: Organization, user: User = None):
        self.organization = organization
        self.user = user
        self.organization_id = organization.id
        self.user_id = user.id if user else None

    @property
    def is_admin(self) -> bool:
        return bool(self.user) and self.user.role in (UserRole.ADMIN, UserRole.SUPER_ADMIN)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Obtém o usuário atual a partir do Bearer token"""
    if not credentials:
        raise HTTPException(status_code=401, detail="Token de acesso não informado")

    payload = auth_controller.decode_token(credentials.credentials)
    if not payload:
        raise HTTPException(status_code=401, detail="Token inválido ou expirado")

    user = db.query(User).filter(User.id == int(payload["sub"])).first()
    if not user:
        raise HTTPException(status_code=401, detail="Usuário não encontrado")

    auth_controller.check_user_access(user, db)
    return user


async def get_current_tenant(
    user: User = Depends(get_current_user),
) -> TenantContext:
    """Obtém o contexto da organização do usuário autenticado"""
    if not user.organization:
        raise HTTPException(status_code=403, detail="Usuário não pertence a nenhuma organização")
    return TenantContext(organization=user.organization, user=user)


def require_roles(*roles: UserRole):
    """Dependency que restringe a rota aos papéis informados"""
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(f"Acesso negado para user_id {user.id} com role {user.role.value}")
            raise HTTPException(status_code=403, detail="Permissão insuficiente")
        return user
    return dependency


async def require_org_admin(tenant: TenantContext = Depends(get_current_tenant)) -> TenantContext:
    if not tenant.is_admin:
        raise HTTPException(status_code=403, detail="Apenas administradores da organização")
    return tenant
