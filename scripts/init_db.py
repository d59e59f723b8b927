#!/usr/bin/env python3
"""
Script para inicializar o banco de dados e criar o super admin
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from sqlalchemy import inspect

from mlhub.config.database import SessionLocal, engine, Base
from mlhub.controllers.auth_controller import AuthController
from mlhub.models.saas_models import User, UserRole

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_database():
    """Inicializa o banco de dados criando todas as tabelas"""
    logger.info("Criando tabelas do banco de dados...")
    Base.metadata.create_all(bind=engine)
    tables = inspect(engine).get_table_names()
    logger.info(f"📊 Tabelas criadas: {', '.join(tables)}")


def create_superadmin():
    """Cria o super admin a partir de SUPERADMIN_EMAIL / SUPERADMIN_PASSWORD"""
    email = os.getenv("SUPERADMIN_EMAIL")
    password = os.getenv("SUPERADMIN_PASSWORD")
    if not email or not password:
        logger.info("SUPERADMIN_EMAIL/SUPERADMIN_PASSWORD não definidos, super admin não criado")
        return

    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == email.lower()).first():
            logger.info(f"Super admin {email} já existe")
            return
        user = User(
            email=email.lower(),
            name=os.getenv("SUPERADMIN_NAME", "Super Admin"),
            password_hash=AuthController().hash_password(password),
            role=UserRole.SUPER_ADMIN,
            is_active=True,
        )
        db.add(user)
        db.commit()
        logger.info(f"✅ Super admin {email} criado")
    finally:
        db.close()


if __name__ == "__main__":
    init_database()
    create_superadmin()
