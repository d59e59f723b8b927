"""
Configuração do banco de dados
"""
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Sem DATABASE_URL, desenvolvimento usa SQLite local
DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    environment = os.getenv("ENVIRONMENT", "development").lower()
    if environment == "production":
        raise ValueError("❌ ERRO CRÍTICO: DATABASE_URL deve ser definida em produção")
    DATABASE_URL = "sqlite:///./mlhub.db"

# Heroku e afins ainda entregam o esquema antigo
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # Banco em memória precisa de uma única conexão compartilhada
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 3600,  # Reciclar conexões a cada hora
        "connect_args": {
            "connect_timeout": 30,
            "application_name": "mlhub",
        },
    }


# Criar engine do SQLAlchemy
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False,  # Mude para True para ver queries SQL
    **_engine_options(DATABASE_URL),
)

# Criar sessão
SessionLocal = sessionmaker(autocommit=False, autoflush=True, bind=engine)

# Base para modelos
Base = declarative_base()


def get_db():
    """Dependency para obter sessão do banco"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
