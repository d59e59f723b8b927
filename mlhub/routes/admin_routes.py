"""
Rotas de administração da plataforma - acesso exclusivo do super admin
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from mlhub.config.database import get_db
from mlhub.middleware.tenant_middleware import require_roles
from mlhub.models.saas_models import User, UserRole
from mlhub.models.schemas import ActivateUserRequest, ExtendAccessRequest, PlanUpdate, RoleUpdate
from mlhub.services.admin_service import AdminService

admin_router = APIRouter()

require_super_admin = require_roles(UserRole.SUPER_ADMIN)


@admin_router.get("/stats")
async def stats(admin: User = Depends(require_super_admin), db: Session = Depends(get_db)):
    return AdminService(db).get_stats()


@admin_router.get("/users")
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    admin: User = Depends(require_super_admin),
    db: Session = Depends(get_db)
):
    return AdminService(db).list_users(page, limit, search)


@admin_router.get("/organizations")
async def list_organizations(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    admin: User = Depends(require_super_admin),
    db: Session = Depends(get_db)
):
    return AdminService(db).list_organizations(page, limit, search)


@admin_router.put("/users/{user_id}/role")
async def update_user_role(
    user_id: int,
    data: RoleUpdate,
    admin: User = Depends(require_super_admin),
    db: Session = Depends(get_db)
):
    return AdminService(db).update_user_role(user_id, data.role, admin)


@admin_router.post("/users/{user_id}/activate")
async def activate_user(
    user_id: int,
    data: Optional[ActivateUserRequest] = None,
    admin: User = Depends(require_super_admin),
    db: Session = Depends(get_db)
):
    """Ativa o usuário, opcionalmente por tempo limitado"""
    return AdminService(db).activate_user(user_id, data.duration_days if data else None)


@admin_router.post("/users/{user_id}/deactivate")
async def deactivate_user(
    user_id: int,
    admin: User = Depends(require_super_admin),
    db: Session = Depends(get_db)
):
    return AdminService(db).deactivate_user(user_id, admin)


@admin_router.post("/users/{user_id}/extend")
async def extend_access(
    user_id: int,
    data: ExtendAccessRequest,
    admin: User = Depends(require_super_admin),
    db: Session = Depends(get_db)
):
    return AdminService(db).extend_access(user_id, data.days)


@admin_router.put("/organizations/{organization_id}/plan")
async def update_organization_plan(
    organization_id: int,
    data: PlanUpdate,
    admin: User = Depends(require_super_admin),
    db: Session = Depends(get_db)
):
    return AdminService(db).update_organization_plan(organization_id, data.plan)
