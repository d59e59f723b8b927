import os
from typing import List


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Configurações da aplicação"""

    def __init__(self):
        # Detecta ambiente (produção ou desenvolvimento)
        self.environment = os.getenv("ENVIRONMENT", "development").lower()
        self.is_production = self.environment == "production"

        # Define domínio base conforme ambiente
        if self.is_production:
            default_domain = os.getenv("DOMAIN", "mlhub.com.br")
            default_base_url = f"https://{default_domain}"
        else:
            default_base_url = os.getenv("LOCAL_BASE_URL", "http://localhost:8000")

        self.base_url = os.getenv("BASE_URL", default_base_url).rstrip("/")
        self.frontend_url = os.getenv("FRONTEND_URL", "http://localhost:3000").rstrip("/")
        self.cors_origins: List[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

        # Credenciais do aplicativo no Mercado Livre
        self.ml_app_id = os.getenv("ML_APP_ID", "")
        self.ml_client_secret = os.getenv("ML_CLIENT_SECRET", "")
        self.ml_redirect_uri = os.getenv("ML_REDIRECT_URI", f"{self.base_url}/api/callback")

        # Mercado Livre API URLs (Brasil)
        self.ml_auth_url = os.getenv("ML_AUTH_URL", "https://auth.mercadolivre.com.br/authorization")
        self.ml_api_base_url = os.getenv("ML_API_BASE_URL", "https://api.mercadolibre.com")
        self.ml_site_id = os.getenv("ML_SITE_ID", "MLB")
        self.ml_timeout = float(os.getenv("ML_TIMEOUT", "30"))

        # JWT
        self.jwt_secret_key = os.getenv("JWT_SECRET_KEY", "dev-secret-change-in-production")
        self.jwt_refresh_secret_key = os.getenv("JWT_REFRESH_SECRET_KEY", "dev-refresh-secret-change-in-production")
        self.jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        self.access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
        self.refresh_token_expire_days = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))
        self.oauth_state_expire_minutes = int(os.getenv("OAUTH_STATE_EXPIRE_MINUTES", "10"))

        # Novos usuários ficam inativos até um super admin liberar o acesso
        self.require_admin_activation = _as_bool(os.getenv("REQUIRE_ADMIN_ACTIVATION", "false"))

        if self.is_production:
            missing = [
                name for name, value in (
                    ("ML_APP_ID", self.ml_app_id),
                    ("ML_CLIENT_SECRET", self.ml_client_secret),
                    ("JWT_SECRET_KEY", os.getenv("JWT_SECRET_KEY")),
                    ("JWT_REFRESH_SECRET_KEY", os.getenv("JWT_REFRESH_SECRET_KEY")),
                ) if not value
            ]
            if missing:
                raise ValueError(
                    f"❌ ERRO CRÍTICO: variáveis obrigatórias em produção não definidas: {', '.join(missing)}"
                )

        # API Configuration
        self.api_host = os.getenv("API_HOST", "0.0.0.0")
        self.api_port = int(os.getenv("API_PORT", "8000"))
        self.debug = _as_bool(os.getenv("DEBUG", str(not self.is_production)))

        # Logs
        self.log_level = os.getenv("LOG_LEVEL", "DEBUG" if self.debug else "INFO").upper()
        self.log_dir = os.getenv("LOG_DIR", "logs")

        # Sincronização automática
        self.enable_scheduler = _as_bool(os.getenv("ENABLE_SCHEDULER", "true"))
        self.sync_interval_minutes = int(os.getenv("SYNC_INTERVAL_MINUTES", "30"))
        self.token_refresh_interval_minutes = int(os.getenv("TOKEN_REFRESH_INTERVAL_MINUTES", "60"))
        self.sync_days_back = int(os.getenv("SYNC_DAYS_BACK", "30"))


# Instância global das configurações
settings = Settings()
