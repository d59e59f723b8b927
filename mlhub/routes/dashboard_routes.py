"""
Rotas do dashboard
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from mlhub.config.database import get_db
from mlhub.middleware.tenant_middleware import TenantContext, get_current_tenant
from mlhub.services.dashboard_service import DashboardService

dashboard_router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dashboard_router.get("/stats")
async def stats(tenant: TenantContext = Depends(get_current_tenant), db: Session = Depends(get_db)):
    """Indicadores dos últimos 30 dias"""
    return DashboardService(db).get_stats(tenant.organization_id)


@dashboard_router.get("/sales-chart")
async def sales_chart(
    days: int = Query(30, ge=1, le=365),
    tenant: TenantContext = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    return DashboardService(db).get_sales_chart(tenant.organization_id, days)


@dashboard_router.get("/recent-orders")
async def recent_orders(
    limit: int = Query(5, ge=1, le=50),
    tenant: TenantContext = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    return DashboardService(db).get_recent_orders(tenant.organization_id, limit)


@dashboard_router.get("/top-products")
async def top_products(
    limit: int = Query(5, ge=1, le=50),
    tenant: TenantContext = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    return DashboardService(db).get_top_products(tenant.organization_id, limit)


@dashboard_router.get("/orders/export")
async def export_orders(
    days: int = Query(30, ge=1, le=365),
    tenant: TenantContext = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    """Planilha XLSX com os pedidos sincronizados"""
    content = DashboardService(db).export_orders_xlsx(tenant.organization_id, days)
    filename = f"pedidos_{datetime.utcnow().strftime('%Y%m%d')}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
