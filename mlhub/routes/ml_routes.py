"""
Rotas para integração com Mercado Livre
"""
import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.orm import Session

from mercadolivre_sdk import MercadoLivreError
from mlhub.config.database import get_db
from mlhub.config.settings import settings
from mlhub.middleware.tenant_middleware import TenantContext, get_current_tenant, get_current_user, require_org_admin
from mlhub.models.saas_models import User
from mlhub.models.schemas import (
    AnswerQuestionRequest,
    ClaimMessageRequest,
    FeedbackReplyRequest,
    ItemCreateRequest,
    ItemDescriptionRequest,
    ItemRelistRequest,
    ItemUpdateRequest,
    MessageRequest,
    OAuthCallbackRequest,
    OrderNoteRequest,
    SyncRequest,
)
from mlhub.services.dashboard_service import DashboardService
from mlhub.services.mercadolivre_service import MercadoLivreService, serialize_account
from mlhub.services.sync_service import SyncService

logger = logging.getLogger(__name__)

# Router para Mercado Livre (autenticado)
ml_router = APIRouter()
# Router público para o redirect do OAuth
public_ml_router = APIRouter()


def get_ml_service(db: Session = Depends(get_db)) -> MercadoLivreService:
    return MercadoLivreService(db)


def get_sync_service(db: Session = Depends(get_db)) -> SyncService:
    return SyncService(db)


# OAuth

@ml_router.get("/auth-url")
async def auth_url(
    user: User = Depends(get_current_user),
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    """URL de autorização com state assinado"""
    return service.get_authorization_url(user)


@ml_router.post("/callback")
async def oauth_callback(
    data: OAuthCallbackRequest,
    user: User = Depends(get_current_user),
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    account = service.handle_callback(data.code, user, data.state)
    return {"success": True, "account": account}


@public_ml_router.get("/api/callback")
async def oauth_browser_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    service: MercadoLivreService = Depends(get_ml_service)
):
    """Destino do redirect do Mercado Livre; devolve o navegador para o frontend"""
    target = f"{settings.frontend_url.rstrip('/')}/dashboard"

    if error or not code or not state:
        reason = error or "Código de autorização ausente"
        return RedirectResponse(url=f"{target}?{urlencode({'ml_error': reason})}", status_code=302)

    try:
        user = service.get_user_from_state(state)
        account = service.handle_callback(code, user, state)
    except HTTPException as e:
        logger.warning(f"⚠️ Callback OAuth recusado: {e.detail}")
        return RedirectResponse(url=f"{target}?{urlencode({'ml_error': e.detail})}", status_code=302)
    except MercadoLivreError as e:
        logger.error(f"❌ Erro no callback OAuth: {e.message}")
        return RedirectResponse(url=f"{target}?{urlencode({'ml_error': e.message})}", status_code=302)

    query = urlencode({"ml_connected": "true", "account": account["nickname"] or account["ml_user_id"]})
    return RedirectResponse(url=f"{target}?{query}", status_code=302)


# Contas

@ml_router.get("/accounts")
async def list_accounts(
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    accounts = service.list_accounts(tenant.organization_id)
    return {"accounts": [serialize_account(account) for account in accounts], "total": len(accounts)}


@ml_router.get("/accounts/primary")
async def primary_account(
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    account = service.get_primary_account(tenant.organization_id)
    if not account:
        raise HTTPException(status_code=404, detail="Nenhuma conta do Mercado Livre conectada")
    return serialize_account(account)


@ml_router.put("/accounts/{account_id}/primary")
async def set_primary_account(
    account_id: int,
    tenant: TenantContext = Depends(require_org_admin),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.set_primary(tenant.organization_id, account_id)


@ml_router.delete("/accounts/{account_id}")
async def disconnect_account(
    account_id: int,
    tenant: TenantContext = Depends(require_org_admin),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.disconnect(tenant.organization_id, account_id)


# Proxies para a conta selecionada

@ml_router.get("/profile")
async def profile(
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_profile(tenant.organization_id, account_id)


@ml_router.get("/items")
async def list_items(
    account_id: Optional[int] = None,
    status: Optional[str] = None,
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.list_items(tenant.organization_id, account_id, status, offset, limit)


@ml_router.get("/items/{item_id}")
async def get_item(
    item_id: str,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_item(tenant.organization_id, item_id, account_id)


@ml_router.put("/items/{item_id}")
async def update_item(
    item_id: str,
    data: ItemUpdateRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.update_item(tenant.organization_id, item_id, data.to_payload(), account_id)


@ml_router.post("/items")
async def create_item(
    data: ItemCreateRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.create_item(tenant.organization_id, data.to_payload(), account_id)


@ml_router.delete("/items/{item_id}")
async def delete_item(
    item_id: str,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.delete_item(tenant.organization_id, item_id, account_id)


@ml_router.get("/items/{item_id}/description")
async def get_item_description(
    item_id: str,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_item_description(tenant.organization_id, item_id, account_id)


@ml_router.put("/items/{item_id}/description")
async def update_item_description(
    item_id: str,
    data: ItemDescriptionRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.update_item_description(tenant.organization_id, item_id, data.plain_text, account_id)


@ml_router.get("/items/{item_id}/visits")
async def get_item_visits(
    item_id: str,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_item_visits(tenant.organization_id, item_id, date_from, date_to, account_id)


@ml_router.get("/items/{item_id}/promotions")
async def get_item_promotions(
    item_id: str,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_item_promotions(tenant.organization_id, item_id, account_id)


@ml_router.get("/items/{item_id}/reviews")
async def get_item_reviews(
    item_id: str,
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_item_reviews(tenant.organization_id, item_id, offset, limit, account_id)


@ml_router.get("/items/{item_id}/performance")
async def get_item_performance(
    item_id: str,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_item_performance(tenant.organization_id, item_id, account_id)


# Precisa vir antes da rota genérica de ações
@ml_router.post("/items/{item_id}/relist")
async def relist_item(
    item_id: str,
    data: ItemRelistRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    """Republica um anúncio finalizado"""
    return service.relist_item(tenant.organization_id, item_id, data.model_dump(), account_id)


@ml_router.post("/items/{item_id}/{action}")
async def change_item_status(
    item_id: str,
    action: str,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    """Ações: pause, activate, close"""
    return service.change_item_status(tenant.organization_id, item_id, action, account_id)


@ml_router.get("/orders")
async def list_orders(
    account_id: Optional[int] = None,
    status: Optional[str] = None,
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=50),
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.list_orders(tenant.organization_id, account_id, status, offset, limit)


@ml_router.get("/orders/{order_id}")
async def get_order(
    order_id: int,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_order(tenant.organization_id, order_id, account_id)


@ml_router.get("/orders/{order_id}/notes")
async def get_order_notes(
    order_id: int,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_order_notes(tenant.organization_id, order_id, account_id)


@ml_router.post("/orders/{order_id}/notes")
async def create_order_note(
    order_id: int,
    data: OrderNoteRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.create_order_note(tenant.organization_id, order_id, data.note, account_id)


@ml_router.delete("/orders/{order_id}/notes/{note_id}")
async def delete_order_note(
    order_id: int,
    note_id: str,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.delete_order_note(tenant.organization_id, order_id, note_id, account_id)


@ml_router.get("/orders/{order_id}/feedback")
async def get_order_feedback(
    order_id: int,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_order_feedback(tenant.organization_id, order_id, account_id)


@ml_router.post("/feedback/{feedback_id}/reply")
async def reply_feedback(
    feedback_id: int,
    data: FeedbackReplyRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.reply_feedback(tenant.organization_id, feedback_id, data.text, account_id)


# Envios

@ml_router.get("/shipments/{shipment_id}")
async def get_shipment(
    shipment_id: int,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_shipment(tenant.organization_id, shipment_id, account_id)


@ml_router.get("/shipments/{shipment_id}/history")
async def get_shipment_history(
    shipment_id: int,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_shipment_history(tenant.organization_id, shipment_id, account_id)


@ml_router.get("/shipments/{shipment_id}/label")
async def get_shipment_label(
    shipment_id: int,
    response_type: str = Query("pdf", pattern="^(pdf|zpl2)$"),
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    """Etiqueta de envio em PDF ou ZPL2"""
    label = service.get_shipment_label(tenant.organization_id, shipment_id, response_type, account_id)
    media_type = "application/pdf" if response_type == "pdf" else "text/plain"
    extension = "pdf" if response_type == "pdf" else "txt"
    return Response(
        content=label,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="etiqueta_{shipment_id}.{extension}"'},
    )


@ml_router.post("/shipments/{shipment_id}/ready-to-ship")
async def ready_to_ship(
    shipment_id: int,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.mark_ready_to_ship(tenant.organization_id, shipment_id, account_id)


# Mensagens pós-venda

@ml_router.get("/messages/unread")
async def unread_messages(
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_unread_messages(tenant.organization_id, account_id)


@ml_router.get("/messages/packs/{pack_id}")
async def pack_messages(
    pack_id: int,
    mark_as_read: Optional[bool] = None,
    offset: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_pack_messages(tenant.organization_id, pack_id, mark_as_read, offset, limit, account_id)


@ml_router.post("/messages/packs/{pack_id}")
async def send_message(
    pack_id: int,
    data: MessageRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.send_message(tenant.organization_id, pack_id, data.buyer_id, data.text, account_id)


# Reclamações

@ml_router.get("/claims")
async def search_claims(
    status: Optional[str] = None,
    stage: Optional[str] = None,
    offset: int = Query(0, ge=0),
    limit: int = Query(30, ge=1, le=100),
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.search_claims(tenant.organization_id, status, stage, offset, limit, account_id)


@ml_router.get("/claims/{claim_id}")
async def get_claim(
    claim_id: int,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_claim(tenant.organization_id, claim_id, account_id)


@ml_router.get("/claims/{claim_id}/messages")
async def get_claim_messages(
    claim_id: int,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_claim_messages(tenant.organization_id, claim_id, account_id)


@ml_router.post("/claims/{claim_id}/messages")
async def send_claim_message(
    claim_id: int,
    data: ClaimMessageRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.send_claim_message(tenant.organization_id, claim_id, data.message, data.receiver_role,
                                      account_id)


# Promoções e reputação

@ml_router.get("/promotions")
async def list_promotions(
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.list_promotions(tenant.organization_id, account_id)


@ml_router.get("/reputation")
async def reputation(
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_reputation(tenant.organization_id, account_id)


@ml_router.get("/questions")
async def list_questions(
    account_id: Optional[int] = None,
    status: Optional[str] = "UNANSWERED",
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.list_questions(tenant.organization_id, account_id, status, offset, limit)


@ml_router.post("/questions/{question_id}/answer")
async def answer_question(
    question_id: int,
    data: AnswerQuestionRequest,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.answer_question(tenant.organization_id, question_id, data.text, account_id)


@ml_router.get("/listing-prices")
async def listing_prices(
    price: float = Query(..., gt=0),
    category_id: Optional[str] = None,
    listing_type_id: Optional[str] = None,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    """Tarifas de venda para o preço informado"""
    return service.get_listing_prices(tenant.organization_id, price, category_id, listing_type_id, account_id)


@ml_router.get("/categories/{category_id}")
async def get_category(
    category_id: str,
    account_id: Optional[int] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_category(tenant.organization_id, category_id, account_id)


# Agregação entre todas as contas

@ml_router.get("/all/orders")
async def all_orders(
    status: Optional[str] = None,
    limit: int = Query(50, ge=1, le=50),
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_all_accounts_orders(tenant.organization_id, status, limit)


@ml_router.get("/all/items")
async def all_items(
    status: Optional[str] = "active",
    limit: int = Query(50, ge=1, le=100),
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_all_accounts_items(tenant.organization_id, status, limit)


@ml_router.get("/all/questions")
async def all_questions(
    status: Optional[str] = "UNANSWERED",
    limit: int = Query(50, ge=1, le=100),
    tenant: TenantContext = Depends(get_current_tenant),
    service: MercadoLivreService = Depends(get_ml_service)
):
    return service.get_all_accounts_questions(tenant.organization_id, status, limit)


# Sincronização

@ml_router.post("/sync")
async def sync_now(
    data: Optional[SyncRequest] = None,
    tenant: TenantContext = Depends(get_current_tenant),
    sync_service: SyncService = Depends(get_sync_service)
):
    """Sincroniza agora pedidos, anúncios e perguntas de todas as contas"""
    days_back = data.days_back if data else None
    return sync_service.sync_organization(tenant.organization_id, days_back)


@ml_router.get("/synced/orders")
async def synced_orders(
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    tenant: TenantContext = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    return DashboardService(db).list_orders(tenant.organization_id, status, page, limit)


@ml_router.get("/synced/items")
async def synced_items(
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    tenant: TenantContext = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    return DashboardService(db).list_items(tenant.organization_id, status, page, limit)
