#!/usr/bin/env python3
"""
Script para rodar a API localmente
"""
import uvicorn
from dotenv import load_dotenv

# Carregar .env antes de ler as configurações
load_dotenv()

from mlhub.config.settings import settings  # noqa: E402


def main():
    print("🚀 Iniciando MLHub localmente...")
    print("=" * 50)
    print(f"   • API: http://localhost:{settings.api_port}")
    print(f"   • Documentação: http://localhost:{settings.api_port}/docs")
    print(f"   • Callback OAuth: {settings.ml_redirect_uri}")
    print("=" * 50)

    uvicorn.run(
        "mlhub.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )


if __name__ == "__main__":
    main()
