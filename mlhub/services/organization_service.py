"""
Serviço de organizações e membros
"""
import logging
from datetime import datetime
from typing import List

from fastapi import HTTPException
from sqlalchemy.orm import Session

from mlhub.controllers.auth_controller import AuthController, serialize_user
from mlhub.models.saas_models import MLAccountStatus, Organization, OrganizationPlan, User, UserRole
from mlhub.models.schemas import OrganizationUpdate

logger = logging.getLogger(__name__)

MEMBER_ROLES = {UserRole.USER.value: UserRole.USER, UserRole.ADMIN.value: UserRole.ADMIN}


def parse_plan(value: str) -> OrganizationPlan:
    try:
        return OrganizationPlan(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Plano inválido: {value}")


def serialize_organization(organization: Organization) -> dict:
    accounts = [account for account in organization.ml_accounts if account.status == MLAccountStatus.ACTIVE]
    return {
        "id": organization.id,
        "name": organization.name,
        "slug": organization.slug,
        "plan": organization.plan.value if organization.plan else None,
        "ml_connected": organization.ml_connected,
        "members_count": len(organization.users),
        "ml_accounts_count": len(accounts),
        "created_at": organization.created_at.isoformat() if organization.created_at else None,
    }


class OrganizationService:

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, organization_id: int) -> Organization:
        organization = self.db.query(Organization).filter(Organization.id == organization_id).first()
        if not organization:
            raise HTTPException(status_code=404, detail="Organização não encontrada")
        return organization

    def get(self, organization_id: int) -> dict:
        return serialize_organization(self.find_by_id(organization_id))

    def update(self, organization_id: int, data: OrganizationUpdate) -> dict:
        organization = self.find_by_id(organization_id)

        if data.name and data.name.strip() != organization.name:
            organization.name = data.name.strip()
            # Libera o slug atual antes de gerar o novo
            organization.slug = f"tmp-{organization.id}"
            self.db.flush()
            organization.slug = AuthController().generate_organization_slug(organization.name, self.db)

        if data.plan:
            organization.plan = parse_plan(data.plan)

        organization.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(organization)
        logger.info(f"🏢 Organização {organization.id} atualizada")
        return serialize_organization(organization)

    def get_members(self, organization_id: int) -> List[dict]:
        users = (
            self.db.query(User)
            .filter(User.organization_id == organization_id)
            .order_by(User.created_at.asc(), User.id.asc())
            .all()
        )
        return [serialize_user(user) for user in users]

    def _get_member(self, organization_id: int, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id, User.organization_id == organization_id).first()
        if not user:
            raise HTTPException(status_code=404, detail="Membro não encontrado")
        return user

    def _admins_count(self, organization_id: int) -> int:
        return (
            self.db.query(User)
            .filter(User.organization_id == organization_id, User.role == UserRole.ADMIN)
            .count()
        )

    def remove_member(self, organization_id: int, user_id: int, current_user: User) -> dict:
        if user_id == current_user.id:
            raise HTTPException(status_code=400, detail="Você não pode remover a si mesmo")

        member = self._get_member(organization_id, user_id)
        if member.role == UserRole.ADMIN and self._admins_count(organization_id) <= 1:
            raise HTTPException(status_code=400, detail="Não é possível remover o último administrador")

        member.organization_id = None
        if member.role == UserRole.ADMIN:
            member.role = UserRole.USER
        self.db.commit()
        logger.info(f"👤 Usuário {user_id} removido da organização {organization_id}")
        return {"success": True, "message": "Membro removido"}

    def update_member_role(self, organization_id: int, user_id: int, role: str) -> dict:
        new_role = MEMBER_ROLES.get(role)
        if not new_role:
            raise HTTPException(status_code=400, detail=f"Papel inválido: {role}")

        member = self._get_member(organization_id, user_id)
        if member.role == UserRole.SUPER_ADMIN:
            raise HTTPException(status_code=403, detail="Papel de super admin não pode ser alterado aqui")
        if (member.role == UserRole.ADMIN and new_role != UserRole.ADMIN
                and self._admins_count(organization_id) <= 1):
            raise HTTPException(status_code=400, detail="A organização precisa de pelo menos um administrador")

        member.role = new_role
        self.db.commit()
        self.db.refresh(member)
        return serialize_user(member)
