"""
Sincronização de pedidos, anúncios e perguntas do Mercado Livre para o banco
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mercadolivre_sdk import MercadoLivre, MercadoLivreError
from mercadolivre_sdk import types as ml_types
from mercadolivre_sdk.utils import chunk_list, paginate
from mlhub.config.settings import settings
from mlhub.models.saas_models import MLAccount, MLAccountStatus, MLItem, MLOrder, MLQuestion
from mlhub.services.mercadolivre_service import ITEMS_MULTIGET_LIMIT, MercadoLivreService
from mlhub.services.ml_client import create_ml_client
from mlhub.utils.activity_logger import activity_logger

logger = logging.getLogger(__name__)

PAGE_SIZE = 50


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


class SyncService:
    """Copia dados das contas conectadas para as tabelas locais"""

    def __init__(self, db: Session, sdk_factory: Callable = create_ml_client):
        self.db = db
        self.ml_service = MercadoLivreService(db, sdk_factory)

    # Pedidos

    def sync_account_orders(self, account: MLAccount, days_back: Optional[int] = None,
                            sdk: Optional[MercadoLivre] = None) -> dict:
        sdk = sdk or self.ml_service.get_sdk_for_account(account)
        days_back = days_back or settings.sync_days_back
        date_from = (datetime.utcnow() - timedelta(days=days_back)).strftime("%Y-%m-%dT00:00:00.000-00:00")

        def fetch(offset, limit):
            return sdk.orders.search(seller=account.ml_user_id, date_from=date_from, sort="date_desc",
                                     offset=offset, limit=limit)

        counters = {"created": 0, "updated": 0}
        for data in paginate(fetch, limit=PAGE_SIZE):
            created = self._upsert_order(account, ml_types.MLOrder(**data))
            counters["created" if created else "updated"] += 1

        self.db.commit()
        logger.info(f"📦 Pedidos sincronizados para conta {account.nickname}: {counters}")
        return counters

    def _upsert_order(self, account: MLAccount, order: ml_types.MLOrder) -> bool:
        record = (
            self.db.query(MLOrder)
            .filter(MLOrder.organization_id == account.organization_id, MLOrder.ml_order_id == order.id)
            .first()
        )
        created = record is None
        if created:
            record = MLOrder(organization_id=account.organization_id, ml_order_id=order.id)
            self.db.add(record)

        status_detail = order.status_detail
        if status_detail is not None and not isinstance(status_detail, str):
            status_detail = json.dumps(status_detail, default=str)

        record.ml_account_id = account.id
        record.pack_id = order.pack_id
        record.status = order.status
        record.status_detail = status_detail
        record.date_created = to_naive_utc(order.date_created)
        record.date_closed = to_naive_utc(order.date_closed)
        record.last_updated = to_naive_utc(order.last_updated)
        record.total_amount = to_decimal(order.total_amount)
        record.paid_amount = to_decimal(order.paid_amount)
        record.currency_id = order.currency_id or "BRL"
        record.buyer_id = order.buyer.id if order.buyer else None
        record.buyer_nickname = order.buyer.nickname if order.buyer else None
        record.shipping_id = (order.shipping or {}).get("id")
        record.order_items = [
            {
                "item_id": order_item.item.get("id"),
                "title": order_item.item.get("title"),
                "quantity": order_item.quantity,
                "unit_price": order_item.unit_price,
            }
            for order_item in order.order_items
        ]
        return created

    # Anúncios

    def sync_account_items(self, account: MLAccount, sdk: Optional[MercadoLivre] = None) -> dict:
        sdk = sdk or self.ml_service.get_sdk_for_account(account)

        def fetch(offset, limit):
            return sdk.users.search_items(account.ml_user_id, offset=offset, limit=limit)

        item_ids = list(paginate(fetch, limit=PAGE_SIZE))
        counters = {"created": 0, "updated": 0}

        for chunk in chunk_list(item_ids, ITEMS_MULTIGET_LIMIT):
            for entry in sdk.items.get_by_ids(chunk) or []:
                if entry.get("code") != 200 or not entry.get("body"):
                    logger.warning(f"Anúncio ignorado na sincronização: {entry.get('body')}")
                    continue
                created = self._upsert_item(account, ml_types.MLItem(**entry["body"]))
                counters["created" if created else "updated"] += 1

        self.db.commit()
        logger.info(f"🏷️ Anúncios sincronizados para conta {account.nickname}: {counters}")
        return counters

    def _upsert_item(self, account: MLAccount, item: ml_types.MLItem) -> bool:
        record = (
            self.db.query(MLItem)
            .filter(MLItem.organization_id == account.organization_id, MLItem.ml_item_id == item.id)
            .first()
        )
        created = record is None
        if created:
            record = MLItem(organization_id=account.organization_id, ml_item_id=item.id)
            self.db.add(record)

        record.ml_account_id = account.id
        record.title = item.title
        record.category_id = item.category_id
        record.price = to_decimal(item.price)
        record.currency_id = item.currency_id or "BRL"
        record.available_quantity = item.available_quantity or 0
        record.sold_quantity = item.sold_quantity or 0
        record.status = item.status
        record.listing_type_id = item.listing_type_id
        record.permalink = item.permalink
        record.thumbnail = item.thumbnail
        record.last_sync_at = datetime.utcnow()
        return created

    # Perguntas

    def sync_account_questions(self, account: MLAccount, sdk: Optional[MercadoLivre] = None) -> dict:
        sdk = sdk or self.ml_service.get_sdk_for_account(account)

        def fetch(offset, limit):
            return sdk.questions.get_by_seller(account.ml_user_id, offset=offset, limit=limit)

        counters = {"created": 0, "updated": 0}
        for data in paginate(fetch, limit=PAGE_SIZE, results_key="questions"):
            created = self._upsert_question(account, ml_types.MLQuestion.from_api(data))
            counters["created" if created else "updated"] += 1

        self.db.commit()
        return counters

    def _upsert_question(self, account: MLAccount, question: ml_types.MLQuestion) -> bool:
        record = (
            self.db.query(MLQuestion)
            .filter(MLQuestion.organization_id == account.organization_id, MLQuestion.ml_question_id == question.id)
            .first()
        )
        created = record is None
        if created:
            record = MLQuestion(organization_id=account.organization_id, ml_question_id=question.id)
            self.db.add(record)

        record.ml_account_id = account.id
        record.ml_item_id = question.item_id
        record.text = question.text
        record.status = question.status
        record.date_created = to_naive_utc(question.date_created)
        record.answer_text = question.answer.text if question.answer else None
        record.answered_at = to_naive_utc(question.answer.date_created) if question.answer else None
        return created

    # Perfil

    def sync_account_profile(self, account: MLAccount, sdk: Optional[MercadoLivre] = None) -> dict:
        sdk = sdk or self.ml_service.get_sdk_for_account(account)
        profile = ml_types.MLUser(**sdk.users.get_me())
        account.nickname = profile.nickname
        account.email = profile.email or account.email
        account.permalink = profile.permalink or account.permalink
        self.ml_service.apply_reputation(account, profile.seller_reputation)
        self.db.commit()
        return {"nickname": account.nickname, "reputation_level": account.reputation_level}

    # Organização

    def sync_account(self, account: MLAccount, days_back: Optional[int] = None) -> dict:
        sdk = self.ml_service.get_sdk_for_account(account)
        result = {
            "profile": self.sync_account_profile(account, sdk),
            "orders": self.sync_account_orders(account, days_back, sdk),
            "items": self.sync_account_items(account, sdk),
            "questions": self.sync_account_questions(account, sdk),
        }
        account.last_sync_at = datetime.utcnow()
        self.db.commit()
        return result

    def sync_organization(self, organization_id: int, days_back: Optional[int] = None) -> dict:
        """Sincroniza todas as contas ativas; erros de uma conta não param as outras"""
        accounts = self.ml_service.list_accounts(organization_id)
        results = []

        for account in accounts:
            account_id, nickname = account.id, account.nickname
            try:
                result = self.sync_account(account, days_back)
                results.append({"account_id": account_id, "nickname": account.nickname, "success": True, **result})
                activity_logger.log("sync_completed", organization_id, account_id,
                                    orders=result["orders"], items=result["items"])
            except (MercadoLivreError, ValidationError, SQLAlchemyError) as e:
                self.db.rollback()
                error = e.message if isinstance(e, MercadoLivreError) else f"{e.__class__.__name__}: {e}"
                logger.error(f"❌ Erro ao sincronizar conta {nickname}: {error}")
                results.append({
                    "account_id": account_id,
                    "nickname": nickname,
                    "success": False,
                    "error": error,
                })
                activity_logger.log("sync_failed", organization_id, account_id, level="error", error=error)

        return {
            "success": all(result["success"] for result in results),
            "accounts": results,
            "synced_at": datetime.utcnow().isoformat(),
        }

    def organizations_with_accounts(self):
        rows = (
            self.db.query(MLAccount.organization_id)
            .filter(MLAccount.status == MLAccountStatus.ACTIVE)
            .distinct()
            .all()
        )
        return [row[0] for row in rows]
