"""
Rotas da organização do usuário autenticado
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mlhub.config.database import get_db
from mlhub.middleware.tenant_middleware import TenantContext, get_current_tenant, require_org_admin
from mlhub.models.schemas import OrganizationUpdate, RoleUpdate
from mlhub.services.organization_service import OrganizationService

organization_router = APIRouter()


@organization_router.get("/me")
async def get_organization(tenant: TenantContext = Depends(get_current_tenant), db: Session = Depends(get_db)):
    return OrganizationService(db).get(tenant.organization_id)


@organization_router.put("/me")
async def update_organization(
    data: OrganizationUpdate,
    tenant: TenantContext = Depends(require_org_admin),
    db: Session = Depends(get_db)
):
    return OrganizationService(db).update(tenant.organization_id, data)


@organization_router.get("/members")
async def list_members(tenant: TenantContext = Depends(get_current_tenant), db: Session = Depends(get_db)):
    members = OrganizationService(db).get_members(tenant.organization_id)
    return {"members": members, "total": len(members)}


@organization_router.delete("/members/{user_id}")
async def remove_member(
    user_id: int,
    tenant: TenantContext = Depends(require_org_admin),
    db: Session = Depends(get_db)
):
    return OrganizationService(db).remove_member(tenant.organization_id, user_id, tenant.user)


@organization_router.put("/members/{user_id}/role")
async def update_member_role(
    user_id: int,
    data: RoleUpdate,
    tenant: TenantContext = Depends(require_org_admin),
    db: Session = Depends(get_db)
):
    return OrganizationService(db).update_member_role(tenant.organization_id, user_id, data.role)
