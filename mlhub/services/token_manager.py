"""
Token Manager - Classe centralizada para gerenciamento de tokens do Mercado Livre
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

from mercadolivre_sdk import MercadoLivreError, TokenExpiredError, TokenResponse
from mlhub.models.saas_models import MLAccount, MLAccountStatus, Token
from mlhub.services.ml_client import create_ml_client
from mlhub.utils.activity_logger import activity_logger

logger = logging.getLogger(__name__)

# Renova com antecedência para não usar um token prestes a expirar
EXPIRY_MARGIN = timedelta(minutes=5)


class TokenManager:
    """Gerenciador centralizado de tokens do Mercado Livre"""

    def __init__(self, db: Session, sdk_factory: Callable = create_ml_client):
        self.db = db
        self.sdk_factory = sdk_factory

    def get_active_token(self, account: MLAccount) -> Optional[Token]:
        return (
            self.db.query(Token)
            .filter(Token.ml_account_id == account.id, Token.is_active.is_(True))
            .order_by(Token.expires_at.desc())
            .first()
        )

    @staticmethod
    def is_expiring(token: Token, margin: timedelta = EXPIRY_MARGIN) -> bool:
        return token.expires_at <= datetime.utcnow() + margin

    def get_valid_access_token(self, account: MLAccount) -> str:
        """
        Obtém um access token válido para a conta, renovando se necessário.

        Levanta TokenExpiredError quando não há token ou a renovação falha.
        """
        token = self.get_active_token(account)
        if not token:
            logger.error(f"Nenhum token ativo para ml_account_id: {account.id}")
            raise TokenExpiredError("Conta sem token ativo, reconecte a conta")

        if self.is_expiring(token):
            logger.info(f"Token expirando para ml_account_id: {account.id}, renovando")
            token = self.refresh_account_token(account, token)

        token.last_used = datetime.utcnow()
        self.db.commit()
        return token.access_token

    def refresh_account_token(self, account: MLAccount, token: Optional[Token] = None) -> Token:
        token = token or self.get_active_token(account)
        if not token or not token.refresh_token:
            self._mark_account_error(account, "refresh token ausente")
            raise TokenExpiredError("Token expirado, reconecte a conta")

        sdk = self.sdk_factory()
        try:
            new_token = sdk.auth.refresh_access_token(token.refresh_token)
        except MercadoLivreError as e:
            logger.error(f"❌ Falha ao renovar token da conta {account.id}: {e.message}")
            self._mark_account_error(account, e.message)
            raise TokenExpiredError("Token expirado, reconecte a conta", response=e.response) from e

        activity_logger.log("token_refreshed", account.organization_id, account.id)
        return self.save_tokens(account, new_token, previous_refresh_token=token.refresh_token)

    def save_tokens(self, account: MLAccount, token_response: TokenResponse,
                    previous_refresh_token: Optional[str] = None) -> Token:
        """Desativa os tokens anteriores e grava o novo"""
        (
            self.db.query(Token)
            .filter(Token.ml_account_id == account.id, Token.is_active.is_(True))
            .update({Token.is_active: False}, synchronize_session=False)
        )

        token = Token(
            ml_account_id=account.id,
            access_token=token_response.access_token,
            refresh_token=token_response.refresh_token or previous_refresh_token,
            token_type=token_response.token_type,
            expires_in=token_response.expires_in,
            scope=token_response.scope,
            is_active=True,
            expires_at=datetime.utcnow() + timedelta(seconds=token_response.expires_in),
        )
        self.db.add(token)

        if account.status == MLAccountStatus.ERROR:
            account.status = MLAccountStatus.ACTIVE

        self.db.commit()
        self.db.refresh(token)
        logger.info(f"💾 Token salvo para ml_account_id: {account.id}, expira em {token.expires_at}")
        return token

    def deactivate_tokens(self, account: MLAccount):
        (
            self.db.query(Token)
            .filter(Token.ml_account_id == account.id, Token.is_active.is_(True))
            .update({Token.is_active: False}, synchronize_session=False)
        )
        self.db.commit()

    def refresh_expiring_tokens(self, margin: timedelta = timedelta(hours=1)) -> dict:
        """Renova os tokens que expiram dentro da margem (job do scheduler)"""
        accounts = self.db.query(MLAccount).filter(MLAccount.status == MLAccountStatus.ACTIVE).all()
        result = {"checked": 0, "refreshed": 0, "failed": 0}

        for account in accounts:
            token = self.get_active_token(account)
            if not token:
                continue
            result["checked"] += 1
            if not self.is_expiring(token, margin):
                continue
            try:
                self.refresh_account_token(account, token)
                result["refreshed"] += 1
            except TokenExpiredError:
                result["failed"] += 1

        logger.info(f"🔄 Renovação de tokens: {result}")
        return result

    def _mark_account_error(self, account: MLAccount, reason: str):
        account.status = MLAccountStatus.ERROR
        self.db.commit()
        activity_logger.log("token_refresh_failed", account.organization_id, account.id, level="error", reason=reason)
