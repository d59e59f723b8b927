import atexit
import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mercadolivre_sdk import MercadoLivreError
from mlhub.config.database import Base, engine
from mlhub.config.settings import settings
from mlhub.routes.admin_routes import admin_router
from mlhub.routes.auth_routes import auth_router
from mlhub.routes.dashboard_routes import dashboard_router
from mlhub.routes.ml_routes import ml_router, public_ml_router
from mlhub.routes.organization_routes import organization_router
from mlhub.services.auto_sync_service import AutoSyncService

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Inicializar FastAPI
app = FastAPI(
    title="MLHub - Gestão de contas do Mercado Livre",
    description="Plataforma SaaS multi-organização integrada à API do Mercado Livre",
    version="1.0.0",
    docs_url="/docs"
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Inicializar scheduler
scheduler = BackgroundScheduler()
auto_sync_service = AutoSyncService()


def run_auto_sync():
    """JOB 1: Sincroniza pedidos, anúncios e perguntas de todas as organizações"""
    try:
        result = auto_sync_service.sync_all_organizations()
        logger.info(f"✅ Auto-sync: {result.get('message', 'Concluído')}")
    except Exception:
        logger.exception("❌ Erro na auto-sync")


def run_token_refresh():
    """JOB 2: Renova tokens do Mercado Livre perto de expirar"""
    try:
        result = auto_sync_service.refresh_tokens()
        logger.info(f"🔑 Tokens renovados: {result.get('refreshed', 0)}, falhas: {result.get('failed', 0)}")
    except Exception:
        logger.exception("❌ Erro na renovação de tokens")


scheduler.add_job(
    func=run_auto_sync,
    trigger=IntervalTrigger(minutes=settings.sync_interval_minutes),
    id="auto_sync_organizations",
    name=f"Sincronização automática ({settings.sync_interval_minutes}min)",
    replace_existing=True
)

scheduler.add_job(
    func=run_token_refresh,
    trigger=IntervalTrigger(minutes=settings.token_refresh_interval_minutes),
    id="refresh_ml_tokens",
    name=f"Renovação de tokens ({settings.token_refresh_interval_minutes}min)",
    replace_existing=True
)


@app.exception_handler(MercadoLivreError)
async def mercadolivre_error_handler(request: Request, exc: MercadoLivreError):
    """Erros do SDK: mantém 4xx da API, falhas do servidor/rede viram 502"""
    status_code = exc.status_code if exc.status_code and 400 <= exc.status_code < 500 else 502
    if status_code == 502:
        logger.error(f"❌ Falha na API do Mercado Livre em {request.url.path}: {exc.message}")
    else:
        logger.warning(f"⚠️ Mercado Livre respondeu {exc.status_code} em {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_code": exc.error_code, "status_code": exc.status_code},
    )


@app.on_event("startup")
async def startup_event():
    """Evento de inicialização da aplicação"""
    logger.info("🚀 [STARTUP] Iniciando aplicação...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("✅ Banco de dados inicializado")

    if settings.enable_scheduler and not scheduler.running:
        scheduler.start()
        logger.info(f"🔧 [STARTUP] Scheduler ativo com {len(scheduler.get_jobs())} jobs")
    else:
        logger.info("🔄 [STARTUP] Scheduler desabilitado")


@app.on_event("shutdown")
async def shutdown_event():
    """Evento de encerramento da aplicação"""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("🛑 Scheduler de sincronização automática parado")


# Garantir que o scheduler seja parado ao sair
atexit.register(lambda: scheduler.shutdown() if scheduler.running else None)

app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(ml_router, prefix="/api/v1/mercadolivre", tags=["mercadolivre"])
app.include_router(public_ml_router, tags=["mercadolivre"])  # Para /api/callback
app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])
app.include_router(organization_router, prefix="/api/v1/organizations", tags=["organizations"])
app.include_router(admin_router, prefix="/api/v1/admin", tags=["admin"])


@app.get("/health")
async def health():
    return {"status": "ok", "environment": settings.environment, "scheduler": scheduler.running}
