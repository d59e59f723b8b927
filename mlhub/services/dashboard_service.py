"""
Serviço do dashboard: indicadores calculados a partir dos dados sincronizados
"""
import io
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from sqlalchemy import func
from sqlalchemy.orm import Session

from mlhub.models.saas_models import MLAccount, MLAccountStatus, MLItem, MLOrder, MLQuestion

logger = logging.getLogger(__name__)

CANCELLED_STATUS = "cancelled"
PERIOD_DAYS = 30


def _money(value) -> float:
    return round(float(value or 0), 2)


def _growth(current: float, previous: float) -> float:
    if not previous:
        return 0.0
    return round((current - previous) / previous * 100, 1)


def serialize_order(order: MLOrder) -> dict:
    return {
        "id": order.id,
        "ml_order_id": order.ml_order_id,
        "status": order.status,
        "date_created": order.date_created.isoformat() if order.date_created else None,
        "total_amount": _money(order.total_amount),
        "paid_amount": _money(order.paid_amount),
        "currency_id": order.currency_id,
        "buyer_nickname": order.buyer_nickname,
        "items": order.order_items or [],
        "account": {
            "id": order.ml_account.id,
            "nickname": order.ml_account.nickname,
        } if order.ml_account else None,
    }


def serialize_item(item: MLItem) -> dict:
    return {
        "id": item.id,
        "ml_item_id": item.ml_item_id,
        "title": item.title,
        "price": _money(item.price),
        "currency_id": item.currency_id,
        "available_quantity": item.available_quantity,
        "sold_quantity": item.sold_quantity,
        "status": item.status,
        "permalink": item.permalink,
        "thumbnail": item.thumbnail,
        "last_sync_at": item.last_sync_at.isoformat() if item.last_sync_at else None,
    }


class DashboardService:
    """Indicadores de vendas por organização"""

    def __init__(self, db: Session):
        self.db = db

    def _orders_query(self, organization_id: int):
        return self.db.query(MLOrder).filter(
            MLOrder.organization_id == organization_id,
            MLOrder.status != CANCELLED_STATUS,
        )

    def _period_totals(self, organization_id: int, start: datetime, end: datetime) -> dict:
        total, count = (
            self._orders_query(organization_id)
            .filter(MLOrder.date_created >= start, MLOrder.date_created < end)
            .with_entities(func.coalesce(func.sum(MLOrder.total_amount), 0), func.count(MLOrder.id))
            .one()
        )
        return {"total": _money(total), "count": int(count or 0)}

    def get_stats(self, organization_id: int) -> dict:
        now = datetime.utcnow()
        current_start = now - timedelta(days=PERIOD_DAYS)
        previous_start = current_start - timedelta(days=PERIOD_DAYS)

        current = self._period_totals(organization_id, current_start, now)
        previous = self._period_totals(organization_id, previous_start, current_start)

        active_listings = (
            self.db.query(func.count(MLItem.id))
            .filter(MLItem.organization_id == organization_id, MLItem.status == "active")
            .scalar()
        )
        pending_questions = (
            self.db.query(func.count(MLQuestion.id))
            .filter(MLQuestion.organization_id == organization_id, MLQuestion.status == "UNANSWERED")
            .scalar()
        )
        accounts = (
            self.db.query(MLAccount)
            .filter(MLAccount.organization_id == organization_id, MLAccount.status == MLAccountStatus.ACTIVE)
            .order_by(MLAccount.is_primary.desc(), MLAccount.created_at.asc(), MLAccount.id.asc())
            .all()
        )

        return {
            "period_days": PERIOD_DAYS,
            "total_sales": current["total"],
            "total_orders": current["count"],
            "average_ticket": round(current["total"] / current["count"], 2) if current["count"] else 0.0,
            "sales_growth": _growth(current["total"], previous["total"]),
            "orders_growth": _growth(current["count"], previous["count"]),
            "active_listings": int(active_listings or 0),
            "pending_questions": int(pending_questions or 0),
            "active_accounts": len(accounts),
            "reputation": accounts[0].reputation_level if accounts else None,
        }

    def get_sales_chart(self, organization_id: int, days: int = PERIOD_DAYS) -> List[dict]:
        """Totais por dia (UTC), em ordem crescente, incluindo dias sem venda"""
        today = datetime.utcnow().date()
        start_date = today - timedelta(days=days - 1)
        start = datetime.combine(start_date, datetime.min.time())

        orders = self._orders_query(organization_id).filter(MLOrder.date_created >= start).all()

        buckets = {}
        for offset in range(days):
            day = start_date + timedelta(days=offset)
            buckets[day] = {"date": day.isoformat(), "total": 0.0, "orders": 0}

        for order in orders:
            bucket = buckets.get(order.date_created.date())
            if bucket is None:
                continue
            bucket["total"] = _money(bucket["total"] + float(order.total_amount or 0))
            bucket["orders"] += 1

        return [buckets[day] for day in sorted(buckets)]

    def get_recent_orders(self, organization_id: int, limit: int = 5) -> List[dict]:
        orders = (
            self.db.query(MLOrder)
            .filter(MLOrder.organization_id == organization_id)
            .order_by(MLOrder.date_created.desc())
            .limit(limit)
            .all()
        )
        return [serialize_order(order) for order in orders]

    def get_top_products(self, organization_id: int, limit: int = 5) -> List[dict]:
        items = (
            self.db.query(MLItem)
            .filter(MLItem.organization_id == organization_id)
            .order_by(MLItem.sold_quantity.desc(), MLItem.id.asc())
            .limit(limit)
            .all()
        )
        result = []
        for item in items:
            data = serialize_item(item)
            data["revenue"] = _money((item.sold_quantity or 0) * float(item.price or 0))
            result.append(data)
        return result

    # Listagens dos dados sincronizados

    def list_orders(self, organization_id: int, status: Optional[str] = None, page: int = 1,
                    limit: int = 20) -> dict:
        query = self.db.query(MLOrder).filter(MLOrder.organization_id == organization_id)
        if status:
            query = query.filter(MLOrder.status == status)
        total = query.count()
        orders = (
            query.order_by(MLOrder.date_created.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return {
            "results": [serialize_order(order) for order in orders],
            "pagination": {"page": page, "limit": limit, "total": total, "pages": (total + limit - 1) // limit},
        }

    def list_items(self, organization_id: int, status: Optional[str] = None, page: int = 1,
                   limit: int = 20) -> dict:
        query = self.db.query(MLItem).filter(MLItem.organization_id == organization_id)
        if status:
            query = query.filter(MLItem.status == status)
        total = query.count()
        items = query.order_by(MLItem.title.asc()).offset((page - 1) * limit).limit(limit).all()
        return {
            "results": [serialize_item(item) for item in items],
            "pagination": {"page": page, "limit": limit, "total": total, "pages": (total + limit - 1) // limit},
        }

    # Exportação

    def export_orders_xlsx(self, organization_id: int, days: int = PERIOD_DAYS) -> bytes:
        start = datetime.utcnow() - timedelta(days=days)
        orders = (
            self.db.query(MLOrder)
            .filter(MLOrder.organization_id == organization_id, MLOrder.date_created >= start)
            .order_by(MLOrder.date_created.desc())
            .all()
        )

        wb = Workbook()
        ws = wb.active
        ws.title = "Pedidos"

        headers = ["Pedido", "Data", "Status", "Conta", "Comprador", "Itens", "Total", "Pago", "Moeda"]
        ws.append(headers)
        header_fill = PatternFill(start_color="FFE600", end_color="FFE600", fill_type="solid")
        for cell in ws[1]:
            cell.font = Font(bold=True)
            cell.fill = header_fill

        for order in orders:
            items = ", ".join(
                f"{item.get('quantity', 1)}x {item.get('title') or item.get('item_id')}"
                for item in (order.order_items or [])
            )
            ws.append([
                str(order.ml_order_id),
                order.date_created.strftime("%d/%m/%Y %H:%M") if order.date_created else "",
                order.status,
                order.ml_account.nickname if order.ml_account else "",
                order.buyer_nickname or "",
                items,
                _money(order.total_amount),
                _money(order.paid_amount),
                order.currency_id,
            ])

        widths = [16, 18, 12, 20, 20, 50, 12, 12, 8]
        for index, width in enumerate(widths):
            ws.column_dimensions[get_column_letter(index + 1)].width = width

        buffer = io.BytesIO()
        wb.save(buffer)
        logger.info(f"📊 Exportação de {len(orders)} pedidos para organização {organization_id}")
        return buffer.getvalue()
