"""
Serviço de administração da plataforma (super admin)
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from mlhub.controllers.auth_controller import serialize_user
from mlhub.models.saas_models import MLAccount, MLAccountStatus, MLOrder, Organization, User, UserRole
from mlhub.services.organization_service import parse_plan, serialize_organization

logger = logging.getLogger(__name__)


def _pagination(page: int, limit: int, total: int) -> dict:
    return {"page": page, "limit": limit, "total": total, "pages": (total + limit - 1) // limit}


class AdminService:

    def __init__(self, db: Session):
        self.db = db

    def get_stats(self) -> dict:
        total_orders, total_sales = self.db.query(
            func.count(MLOrder.id), func.coalesce(func.sum(MLOrder.total_amount), 0)
        ).one()
        return {
            "total_users": self.db.query(User).count(),
            "active_users": self.db.query(User).filter(User.is_active.is_(True)).count(),
            "total_organizations": self.db.query(Organization).count(),
            "connected_organizations": self.db.query(Organization).filter(Organization.ml_connected.is_(True)).count(),
            "active_ml_accounts": self.db.query(MLAccount).filter(MLAccount.status == MLAccountStatus.ACTIVE).count(),
            "total_orders": int(total_orders or 0),
            "total_sales": round(float(total_sales or 0), 2),
        }

    def list_users(self, page: int = 1, limit: int = 20, search: Optional[str] = None) -> dict:
        query = self.db.query(User)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(or_(func.lower(User.email).like(pattern), func.lower(User.name).like(pattern)))
        total = query.count()
        users = query.order_by(User.created_at.desc(), User.id.desc()).offset((page - 1) * limit).limit(limit).all()
        return {"results": [serialize_user(user) for user in users], "pagination": _pagination(page, limit, total)}

    def list_organizations(self, page: int = 1, limit: int = 20, search: Optional[str] = None) -> dict:
        query = self.db.query(Organization)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(or_(func.lower(Organization.name).like(pattern), Organization.slug.like(pattern)))
        total = query.count()
        organizations = (
            query.order_by(Organization.created_at.desc(), Organization.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return {
            "results": [serialize_organization(organization) for organization in organizations],
            "pagination": _pagination(page, limit, total),
        }

    def _get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise HTTPException(status_code=404, detail="Usuário não encontrado")
        return user

    def update_user_role(self, user_id: int, role: str, current_user: User) -> dict:
        try:
            new_role = UserRole(role)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Papel inválido: {role}")
        if user_id == current_user.id and new_role != UserRole.SUPER_ADMIN:
            raise HTTPException(status_code=400, detail="Você não pode remover seu próprio acesso de super admin")

        user = self._get_user(user_id)
        user.role = new_role
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"🛡️ Papel do usuário {user_id} alterado para {new_role.value}")
        return serialize_user(user)

    def activate_user(self, user_id: int, duration_days: Optional[int] = None) -> dict:
        """Ativa o usuário; com duration_days o acesso expira após o período"""
        user = self._get_user(user_id)
        user.is_active = True
        user.active_until = datetime.utcnow() + timedelta(days=duration_days) if duration_days else None
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"✅ Usuário {user_id} ativado (até {user.active_until or 'sem prazo'})")
        return serialize_user(user)

    def deactivate_user(self, user_id: int, current_user: User) -> dict:
        if user_id == current_user.id:
            raise HTTPException(status_code=400, detail="Você não pode desativar a si mesmo")
        user = self._get_user(user_id)
        user.is_active = False
        self.db.commit()
        self.db.refresh(user)
        return serialize_user(user)

    def extend_access(self, user_id: int, days: int) -> dict:
        """Estende a partir do prazo atual, ou de agora se já venceu"""
        user = self._get_user(user_id)
        now = datetime.utcnow()
        base = user.active_until if user.active_until and user.active_until > now else now
        user.active_until = base + timedelta(days=days)
        user.is_active = True
        self.db.commit()
        self.db.refresh(user)
        return serialize_user(user)

    def update_organization_plan(self, organization_id: int, plan: str) -> dict:
        organization = self.db.query(Organization).filter(Organization.id == organization_id).first()
        if not organization:
            raise HTTPException(status_code=404, detail="Organização não encontrada")
        organization.plan = parse_plan(plan)
        self.db.commit()
        self.db.refresh(organization)
        return serialize_organization(organization)
