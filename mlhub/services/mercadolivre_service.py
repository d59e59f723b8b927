"""
Serviço de contas do Mercado Livre: OAuth, seleção de conta e chamadas ao SDK
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.orm import Session

from mercadolivre_sdk import MercadoLivre, MercadoLivreError, MLUser
from mercadolivre_sdk.utils import chunk_list
from mlhub.controllers.auth_controller import OAUTH_STATE, AuthController
from mlhub.models.saas_models import MLAccount, MLAccountStatus, Organization, User
from mlhub.services.ml_client import create_ml_client
from mlhub.services.token_manager import TokenManager
from mlhub.utils.activity_logger import activity_logger

logger = logging.getLogger(__name__)

# Multiget de anúncios aceita no máximo 20 ids
ITEMS_MULTIGET_LIMIT = 20


def serialize_account(account: MLAccount) -> dict:
    return {
        "id": account.id,
        "ml_user_id": account.ml_user_id,
        "nickname": account.nickname,
        "email": account.email,
        "first_name": account.first_name,
        "last_name": account.last_name,
        "site_id": account.site_id,
        "country_id": account.country_id,
        "permalink": account.permalink,
        "reputation_level": account.reputation_level,
        "power_seller_status": account.power_seller_status,
        "is_primary": account.is_primary,
        "status": account.status.value if account.status else None,
        "last_sync_at": account.last_sync_at.isoformat() if account.last_sync_at else None,
        "created_at": account.created_at.isoformat() if account.created_at else None,
    }


class MercadoLivreService:
    """Contas conectadas de uma organização e acesso à API em nome delas"""

    def __init__(self, db: Session, sdk_factory: Callable = create_ml_client):
        self.db = db
        self.sdk_factory = sdk_factory
        self.token_manager = TokenManager(db, sdk_factory)
        self.auth_controller = AuthController()

    # OAuth

    def get_authorization_url(self, user: User) -> dict:
        state = self.auth_controller.create_state_token(user)
        sdk = self.sdk_factory()
        return {"auth_url": sdk.auth.get_authorization_url(state=state), "state": state}

    def get_user_from_state(self, state: str) -> User:
        payload = self.auth_controller.decode_token(state, OAUTH_STATE)
        if not payload:
            raise HTTPException(status_code=400, detail="State inválido ou expirado")
        user = self.db.query(User).filter(User.id == int(payload["sub"])).first()
        if not user or not user.organization_id:
            raise HTTPException(status_code=400, detail="Usuário do state não encontrado")
        return user

    def handle_callback(self, code: str, user: User, state: Optional[str] = None) -> dict:
        """Troca o código pelo token, identifica a conta e grava os tokens"""
        if state:
            state_user = self.get_user_from_state(state)
            if state_user.id != user.id:
                raise HTTPException(status_code=400, detail="State não pertence ao usuário autenticado")

        sdk = self.sdk_factory()
        token = sdk.auth.exchange_code_for_token(code)
        profile = MLUser(**sdk.users.get_me())

        account = (
            self.db.query(MLAccount)
            .filter(
                MLAccount.organization_id == user.organization_id,
                MLAccount.ml_user_id == str(profile.id),
            )
            .first()
        )
        has_primary = (
            self.db.query(MLAccount)
            .filter(
                MLAccount.organization_id == user.organization_id,
                MLAccount.status == MLAccountStatus.ACTIVE,
                MLAccount.is_primary.is_(True),
                MLAccount.ml_user_id != str(profile.id),
            )
            .count() > 0
        )

        if not account:
            account = MLAccount(
                organization_id=user.organization_id,
                ml_user_id=str(profile.id),
            )
            self.db.add(account)

        account.connected_by_user_id = user.id
        account.nickname = profile.nickname
        account.email = profile.email
        account.first_name = profile.first_name
        account.last_name = profile.last_name
        account.site_id = profile.site_id or sdk.get_site_id()
        account.country_id = profile.country_id
        account.permalink = profile.permalink
        self.apply_reputation(account, profile.seller_reputation)
        account.status = MLAccountStatus.ACTIVE
        account.is_primary = account.is_primary or not has_primary
        self.db.flush()

        if account.is_primary:
            # Contas em erro podem ter ficado marcadas como principal
            self._demote_other_accounts(user.organization_id, account.id)

        self.token_manager.save_tokens(account, token)
        self._update_connection_flag(user.organization_id)

        activity_logger.log("ml_account_connected", user.organization_id, account.id, nickname=account.nickname)
        logger.info(f"✅ Conta ML {account.nickname} conectada à organização {user.organization_id}")
        return serialize_account(account)

    # Contas

    def list_accounts(self, organization_id: int) -> List[MLAccount]:
        return (
            self.db.query(MLAccount)
            .filter(
                MLAccount.organization_id == organization_id,
                MLAccount.status == MLAccountStatus.ACTIVE,
            )
            .order_by(MLAccount.is_primary.desc(), MLAccount.created_at.asc(), MLAccount.id.asc())
            .all()
        )

    def get_account(self, organization_id: int, account_id: int) -> MLAccount:
        account = (
            self.db.query(MLAccount)
            .filter(MLAccount.id == account_id, MLAccount.organization_id == organization_id)
            .first()
        )
        if not account:
            raise HTTPException(status_code=404, detail="Conta do Mercado Livre não encontrada")
        return account

    def get_primary_account(self, organization_id: int) -> Optional[MLAccount]:
        """Conta principal ou, na falta dela, a conta ativa mais antiga"""
        accounts = self.list_accounts(organization_id)
        return accounts[0] if accounts else None

    def resolve_account(self, organization_id: int, account_id: Optional[int] = None) -> MLAccount:
        if account_id is not None:
            account = self.get_account(organization_id, account_id)
            if account.status != MLAccountStatus.ACTIVE:
                raise HTTPException(status_code=400, detail="Conta do Mercado Livre inativa, reconecte a conta")
            return account

        account = self.get_primary_account(organization_id)
        if not account:
            raise HTTPException(status_code=404, detail="Nenhuma conta do Mercado Livre conectada")
        return account

    def set_primary(self, organization_id: int, account_id: int) -> dict:
        account = self.resolve_account(organization_id, account_id)
        self._demote_other_accounts(organization_id, account.id)
        account.is_primary = True
        self.db.commit()
        self.db.refresh(account)
        return serialize_account(account)

    def disconnect(self, organization_id: int, account_id: int) -> dict:
        """Desconecta a conta (soft delete) e revoga o token quando possível"""
        account = self.get_account(organization_id, account_id)
        token = self.token_manager.get_active_token(account)
        if token:
            sdk = self.sdk_factory(access_token=token.access_token)
            try:
                sdk.auth.revoke_token(token.access_token)
            except MercadoLivreError as e:
                logger.warning(f"⚠️ Não foi possível revogar o token da conta {account.id}: {e.message}")

        was_primary = account.is_primary
        account.status = MLAccountStatus.INACTIVE
        account.is_primary = False
        self.token_manager.deactivate_tokens(account)

        if was_primary:
            remaining = self.list_accounts(organization_id)
            if remaining:
                remaining[0].is_primary = True

        self.db.commit()
        self._update_connection_flag(organization_id)

        activity_logger.log("ml_account_disconnected", organization_id, account.id, nickname=account.nickname)
        return {"success": True, "message": f"Conta {account.nickname} desconectada"}

    # SDK

    def get_sdk_for_account(self, account: MLAccount) -> MercadoLivre:
        access_token = self.token_manager.get_valid_access_token(account)
        return self.sdk_factory(access_token=access_token, site_id=account.site_id)

    def get_sdk(self, organization_id: int, account_id: Optional[int] = None) -> Tuple[MercadoLivre, MLAccount]:
        account = self.resolve_account(organization_id, account_id)
        return self.get_sdk_for_account(account), account

    def get_profile(self, organization_id: int, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.users.get_me()

    def list_items(self, organization_id: int, account_id: Optional[int] = None, status: Optional[str] = None,
                   offset: int = 0, limit: int = 50) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        search = sdk.users.search_items(account.ml_user_id, status=status, offset=offset, limit=limit)
        item_ids = search.get("results", [])
        return {
            "results": self._fetch_items(sdk, item_ids),
            "paging": search.get("paging", {}),
        }

    def get_item(self, organization_id: int, item_id: str, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.items.get(item_id)

    def update_item(self, organization_id: int, item_id: str, data: dict, account_id: Optional[int] = None) -> dict:
        if not data:
            raise HTTPException(status_code=400, detail="Nenhum campo para atualizar")
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.items.update(item_id, data)
        activity_logger.log("item_updated", organization_id, account.id, item_id=item_id, fields=sorted(data))
        return result

    def change_item_status(self, organization_id: int, item_id: str, action: str,
                           account_id: Optional[int] = None) -> dict:
        actions = {"pause", "activate", "close"}
        if action not in actions:
            raise HTTPException(status_code=400, detail=f"Ação inválida: {action}")
        sdk, _ = self.get_sdk(organization_id, account_id)
        return getattr(sdk.items, action)(item_id)

    def list_orders(self, organization_id: int, account_id: Optional[int] = None, status: Optional[str] = None,
                    offset: int = 0, limit: int = 50) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        return sdk.orders.search(seller=account.ml_user_id, status=status, sort="date_desc",
                                 offset=offset, limit=limit)

    def get_order(self, organization_id: int, order_id: int, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.orders.get(order_id)

    def list_questions(self, organization_id: int, account_id: Optional[int] = None,
                       status: Optional[str] = "UNANSWERED", offset: int = 0, limit: int = 50) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        return sdk.questions.get_by_seller(account.ml_user_id, status=status, offset=offset, limit=limit)

    def answer_question(self, organization_id: int, question_id: int, text: str,
                        account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.questions.answer(question_id, text)
        activity_logger.log("question_answered", organization_id, account.id, question_id=question_id)
        return result

    def get_listing_prices(self, organization_id: int, price: float, category_id: Optional[str] = None,
                           listing_type_id: Optional[str] = None, account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        return sdk.sites.get_listing_prices(account.site_id or sdk.get_site_id(), price=price,
                                            category_id=category_id, listing_type_id=listing_type_id)

    def get_category(self, organization_id: int, category_id: str, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.categories.get(category_id)

    # Publicação de anúncios

    def create_item(self, organization_id: int, data: dict, account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.items.create(data)
        activity_logger.log("item_created", organization_id, account.id, item_id=(result or {}).get("id"))
        logger.info(f"✅ Anúncio {(result or {}).get('id')} publicado na conta {account.nickname}")
        return result

    def delete_item(self, organization_id: int, item_id: str, account_id: Optional[int] = None) -> dict:
        """Fecha e marca o anúncio como excluído"""
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.items.delete(item_id)
        activity_logger.log("item_deleted", organization_id, account.id, item_id=item_id)
        return result

    def relist_item(self, organization_id: int, item_id: str, data: dict, account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.items.relist(item_id, data)
        activity_logger.log("item_relisted", organization_id, account.id, item_id=item_id,
                            new_item_id=(result or {}).get("id"))
        return result

    def get_item_description(self, organization_id: int, item_id: str, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.items.get_description(item_id)

    def update_item_description(self, organization_id: int, item_id: str, plain_text: str,
                                account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.items.update_description(item_id, plain_text)
        activity_logger.log("item_description_updated", organization_id, account.id, item_id=item_id)
        return result

    def get_item_visits(self, organization_id: int, item_id: str, date_from: Optional[str] = None,
                        date_to: Optional[str] = None, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.visits.get_item_visits(item_id, date_from=date_from, date_to=date_to)

    # Pós-venda

    def get_order_notes(self, organization_id: int, order_id: int, account_id: Optional[int] = None):
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.orders.get_notes(order_id)

    def create_order_note(self, organization_id: int, order_id: int, note: str,
                          account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.orders.create_note(order_id, note)
        activity_logger.log("order_note_created", organization_id, account.id, order_id=order_id)
        return result

    def delete_order_note(self, organization_id: int, order_id: int, note_id: str,
                          account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        sdk.orders.delete_note(order_id, note_id)
        return {"success": True}

    def get_shipment(self, organization_id: int, shipment_id: int, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.shipments.get(shipment_id)

    def get_shipment_history(self, organization_id: int, shipment_id: int, account_id: Optional[int] = None):
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.shipments.get_history(shipment_id)

    def get_shipment_label(self, organization_id: int, shipment_id: int, response_type: str = "pdf",
                           account_id: Optional[int] = None) -> bytes:
        sdk, _ = self.get_sdk(organization_id, account_id)
        label = sdk.shipments.get_label(shipment_id, response_type=response_type)
        if isinstance(label, str):
            return label.encode("utf-8")
        return label or b""

    def mark_ready_to_ship(self, organization_id: int, shipment_id: int, account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.shipments.ready_to_ship(shipment_id)
        activity_logger.log("shipment_ready_to_ship", organization_id, account.id, shipment_id=shipment_id)
        return result

    def get_unread_messages(self, organization_id: int, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.messages.get_unread(role="seller")

    def get_pack_messages(self, organization_id: int, pack_id: int, mark_as_read: Optional[bool] = None,
                          offset: int = 0, limit: int = 10, account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        return sdk.messages.get_pack(pack_id, account.ml_user_id, mark_as_read=mark_as_read,
                                     offset=offset, limit=limit)

    def send_message(self, organization_id: int, pack_id: int, buyer_id: int, text: str,
                     account_id: Optional[int] = None) -> dict:
        """Mensagem pós-venda do vendedor para o comprador do pack"""
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.messages.send(pack_id, account.ml_user_id, buyer_id, text)
        activity_logger.log("message_sent", organization_id, account.id, pack_id=pack_id)
        return result

    def search_claims(self, organization_id: int, status: Optional[str] = None, stage: Optional[str] = None,
                      offset: int = 0, limit: int = 30, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.claims.search(status=status, stage=stage, offset=offset, limit=limit)

    def get_claim(self, organization_id: int, claim_id: int, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.claims.get(claim_id)

    def get_claim_messages(self, organization_id: int, claim_id: int, account_id: Optional[int] = None):
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.claims.get_messages(claim_id)

    def send_claim_message(self, organization_id: int, claim_id: int, message: str,
                           receiver_role: str = "complainant", account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.claims.send_message(claim_id, message, receiver_role=receiver_role)
        activity_logger.log("claim_message_sent", organization_id, account.id, claim_id=claim_id)
        return result

    def get_order_feedback(self, organization_id: int, order_id: int, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.feedback.get_from_order(order_id)

    def reply_feedback(self, organization_id: int, feedback_id: int, text: str,
                       account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        result = sdk.feedback.reply(feedback_id, text)
        activity_logger.log("feedback_replied", organization_id, account.id, feedback_id=feedback_id)
        return result

    # Promoções e reputação

    def list_promotions(self, organization_id: int, account_id: Optional[int] = None) -> dict:
        sdk, account = self.get_sdk(organization_id, account_id)
        return sdk.promotions.list(account.ml_user_id)

    def get_item_promotions(self, organization_id: int, item_id: str, account_id: Optional[int] = None):
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.promotions.get_item_promotions(item_id)

    def get_reputation(self, organization_id: int, account_id: Optional[int] = None) -> dict:
        """Reputação atual do vendedor; atualiza o nível gravado na conta"""
        sdk, account = self.get_sdk(organization_id, account_id)
        reputation = sdk.reputation.get_seller_reputation(account.ml_user_id) or {}
        self.apply_reputation(account, reputation)
        self.db.commit()
        return {"account_id": account.id, "nickname": account.nickname, "seller_reputation": reputation}

    def get_item_reviews(self, organization_id: int, item_id: str, offset: int = 0, limit: int = 20,
                         account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.reputation.get_item_reviews(item_id, offset=offset, limit=limit)

    def get_item_performance(self, organization_id: int, item_id: str, account_id: Optional[int] = None) -> dict:
        sdk, _ = self.get_sdk(organization_id, account_id)
        return sdk.reputation.get_item_performance(item_id)

    # Agregação entre contas

    def get_all_accounts_orders(self, organization_id: int, status: Optional[str] = None, limit: int = 50) -> dict:
        def fetch(sdk: MercadoLivre, account: MLAccount):
            data = sdk.orders.search(seller=account.ml_user_id, status=status, sort="date_desc", limit=limit)
            return data.get("results", [])

        result = self._aggregate(organization_id, fetch)
        result["results"].sort(key=lambda order: order.get("date_created") or "", reverse=True)
        return result

    def get_all_accounts_items(self, organization_id: int, status: Optional[str] = "active", limit: int = 50) -> dict:
        def fetch(sdk: MercadoLivre, account: MLAccount):
            search = sdk.users.search_items(account.ml_user_id, status=status, limit=limit)
            return self._fetch_items(sdk, search.get("results", []))

        return self._aggregate(organization_id, fetch)

    def get_all_accounts_questions(self, organization_id: int, status: Optional[str] = "UNANSWERED",
                                   limit: int = 50) -> dict:
        def fetch(sdk: MercadoLivre, account: MLAccount):
            data = sdk.questions.get_by_seller(account.ml_user_id, status=status, limit=limit)
            return data.get("questions", [])

        result = self._aggregate(organization_id, fetch)
        result["results"].sort(key=lambda question: question.get("date_created") or "", reverse=True)
        return result

    def _aggregate(self, organization_id: int, fetch: Callable) -> dict:
        """Executa fetch em cada conta ativa; falha de uma conta não interrompe as demais"""
        results, errors = [], []
        accounts = self.list_accounts(organization_id)

        for account in accounts:
            try:
                sdk = self.get_sdk_for_account(account)
                entries = fetch(sdk, account)
            except MercadoLivreError as e:
                logger.warning(f"⚠️ Falha ao consultar conta {account.nickname}: {e.message}")
                errors.append({
                    "account_id": account.id,
                    "nickname": account.nickname,
                    "error": e.message,
                    "error_code": e.error_code,
                })
                continue

            for entry in entries:
                if isinstance(entry, dict):
                    entry["_account"] = {"id": account.id, "nickname": account.nickname}
                    results.append(entry)

        return {"results": results, "errors": errors, "accounts": len(accounts)}

    @staticmethod
    def _fetch_items(sdk: MercadoLivre, item_ids: List[str]) -> List[dict]:
        items = []
        for chunk in chunk_list(list(item_ids), ITEMS_MULTIGET_LIMIT):
            for entry in sdk.items.get_by_ids(chunk) or []:
                if entry.get("code") == 200 and entry.get("body"):
                    items.append(entry["body"])
        return items

    # Internos

    @staticmethod
    def apply_reputation(account: MLAccount, reputation: Optional[dict]):
        if not reputation:
            return
        account.reputation_level = reputation.get("level_id")
        account.power_seller_status = reputation.get("power_seller_status")

    def _demote_other_accounts(self, organization_id: int, account_id: int):
        (
            self.db.query(MLAccount)
            .filter(MLAccount.organization_id == organization_id, MLAccount.id != account_id)
            .update({MLAccount.is_primary: False}, synchronize_session="fetch")
        )

    def _update_connection_flag(self, organization_id: int):
        organization = self.db.query(Organization).filter(Organization.id == organization_id).first()
        if not organization:
            return
        organization.ml_connected = bool(self.list_accounts(organization_id))
        organization.updated_at = datetime.utcnow()
        self.db.commit()
