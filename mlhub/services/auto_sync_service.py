"""
Serviço de sincronização automática em background
- Job 1: sincroniza pedidos, anúncios e perguntas de todas as organizações
- Job 2: renova tokens que estão perto de expirar
"""
import logging
from typing import Callable

from mlhub.config.database import SessionLocal
from mlhub.config.settings import settings
from mlhub.services.ml_client import create_ml_client
from mlhub.services.sync_service import SyncService
from mlhub.services.token_manager import TokenManager

logger = logging.getLogger(__name__)


class AutoSyncService:
    """Jobs do scheduler; cada execução abre e fecha a própria sessão"""

    def __init__(self, session_factory: Callable = SessionLocal, sdk_factory: Callable = create_ml_client):
        self.session_factory = session_factory
        self.sdk_factory = sdk_factory
        self.sync_interval_minutes = settings.sync_interval_minutes

    def sync_all_organizations(self) -> dict:
        """Roda SEM precisar de usuário logado"""
        db = self.session_factory()
        try:
            logger.info("🔄 [AUTO-SYNC] Iniciando sincronização das organizações...")
            sync_service = SyncService(db, self.sdk_factory)
            organization_ids = sync_service.organizations_with_accounts()

            if not organization_ids:
                logger.info("Nenhuma organização com contas ativas para sincronizar")
                return {"success": True, "message": "Nenhuma organização com contas ativas"}

            failed_accounts = 0
            for organization_id in organization_ids:
                result = sync_service.sync_organization(organization_id)
                failed_accounts += sum(1 for account in result["accounts"] if not account["success"])

            message = f"{len(organization_ids)} organizações sincronizadas, {failed_accounts} contas com erro"
            logger.info(f"✅ [AUTO-SYNC] {message}")
            return {"success": True, "message": message, "failed_accounts": failed_accounts}
        finally:
            db.close()

    def refresh_tokens(self) -> dict:
        db = self.session_factory()
        try:
            result = TokenManager(db, self.sdk_factory).refresh_expiring_tokens()
            return {"success": True, **result}
        finally:
            db.close()
