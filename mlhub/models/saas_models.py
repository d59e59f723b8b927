"""
Modelos SaaS Multi-tenant para API Mercado Livre
"""
from sqlalchemy import Column, Integer, BigInteger, String, Text, Boolean, DateTime, ForeignKey, Enum, JSON, Index, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from mlhub.config.database import Base
import enum


class UserRole(enum.Enum):
    """Roles de usuário"""
    SUPER_ADMIN = "super_admin"    # Acesso total ao sistema
    ADMIN = "admin"                # Admin da organização
    USER = "user"                  # Membro da organização


class MLAccountStatus(enum.Enum):
    """Status da conta do Mercado Livre"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"


class OrganizationPlan(enum.Enum):
    FREE = "free"
    STARTER = "starter"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class Organization(Base):
    """Modelo de Organização (Tenant)"""
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    plan = Column(Enum(OrganizationPlan), default=OrganizationPlan.FREE, nullable=False)
    ml_connected = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relacionamentos
    users = relationship("User", back_populates="organization")
    ml_accounts = relationship("MLAccount", back_populates="organization", cascade="all, delete-orphan")


class User(Base):
    """Modelo de Usuário"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=True, index=True)

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False, index=True)

    # Acesso
    is_active = Column(Boolean, default=True, nullable=False)
    active_until = Column(DateTime)  # Acesso temporário liberado pelo super admin
    last_login = Column(DateTime)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    organization = relationship("Organization", back_populates="users")


class MLAccount(Base):
    """Modelo de Conta do Mercado Livre"""
    __tablename__ = "ml_accounts"
    __table_args__ = (
        UniqueConstraint("organization_id", "ml_user_id", name="uq_ml_accounts_org_ml_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    connected_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Dados da conta ML
    ml_user_id = Column(String(50), nullable=False, index=True)
    nickname = Column(String(100), nullable=False)
    email = Column(String(255))
    first_name = Column(String(100))
    last_name = Column(String(100))
    site_id = Column(String(10), default="MLB")
    country_id = Column(String(10))
    permalink = Column(String(500))

    # Reputação (atualizada na sincronização)
    reputation_level = Column(String(50))
    power_seller_status = Column(String(50))

    is_primary = Column(Boolean, default=False, nullable=False)
    status = Column(Enum(MLAccountStatus), default=MLAccountStatus.ACTIVE, index=True)
    last_sync_at = Column(DateTime)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    organization = relationship("Organization", back_populates="ml_accounts")
    tokens = relationship("Token", back_populates="ml_account", cascade="all, delete-orphan")


class Token(Base):
    """Tokens OAuth de uma conta do Mercado Livre"""
    __tablename__ = "tokens"

    id = Column(Integer, primary_key=True, index=True)
    ml_account_id = Column(Integer, ForeignKey("ml_accounts.id"), nullable=False, index=True)

    access_token = Column(Text, nullable=False)
    refresh_token = Column(Text)
    token_type = Column(String(50), default="bearer")
    expires_in = Column(Integer)
    scope = Column(Text)

    is_active = Column(Boolean, default=True, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=func.now())
    last_used = Column(DateTime)

    ml_account = relationship("MLAccount", back_populates="tokens")


class MLOrder(Base):
    """Pedido sincronizado do Mercado Livre"""
    __tablename__ = "ml_orders"
    __table_args__ = (
        UniqueConstraint("organization_id", "ml_order_id", name="uq_ml_orders_org_order"),
        Index("ix_ml_orders_org_date", "organization_id", "date_created"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    ml_account_id = Column(Integer, ForeignKey("ml_accounts.id"), nullable=False, index=True)

    ml_order_id = Column(BigInteger, nullable=False)
    pack_id = Column(BigInteger)
    status = Column(String(50), nullable=False, index=True)
    status_detail = Column(Text)

    date_created = Column(DateTime, index=True)
    date_closed = Column(DateTime)
    last_updated = Column(DateTime)

    total_amount = Column(Numeric(12, 2), default=0)
    paid_amount = Column(Numeric(12, 2), default=0)
    currency_id = Column(String(10), default="BRL")

    buyer_id = Column(BigInteger)
    buyer_nickname = Column(String(100))
    shipping_id = Column(BigInteger)
    order_items = Column(JSON)  # [{item_id, title, quantity, unit_price}]

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    ml_account = relationship("MLAccount")


class MLItem(Base):
    """Anúncio sincronizado do Mercado Livre"""
    __tablename__ = "ml_items"
    __table_args__ = (
        UniqueConstraint("organization_id", "ml_item_id", name="uq_ml_items_org_item"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    ml_account_id = Column(Integer, ForeignKey("ml_accounts.id"), nullable=False, index=True)

    ml_item_id = Column(String(50), nullable=False)
    title = Column(String(500), nullable=False)
    category_id = Column(String(50))
    price = Column(Numeric(12, 2))
    currency_id = Column(String(10), default="BRL")
    available_quantity = Column(Integer, default=0)
    sold_quantity = Column(Integer, default=0)
    status = Column(String(50), index=True)
    listing_type_id = Column(String(50))
    permalink = Column(String(500))
    thumbnail = Column(String(500))

    last_sync_at = Column(DateTime)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    ml_account = relationship("MLAccount")


class MLQuestion(Base):
    """Pergunta sincronizada do Mercado Livre"""
    __tablename__ = "ml_questions"
    __table_args__ = (
        UniqueConstraint("organization_id", "ml_question_id", name="uq_ml_questions_org_question"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    ml_account_id = Column(Integer, ForeignKey("ml_accounts.id"), nullable=False, index=True)

    ml_question_id = Column(BigInteger, nullable=False)
    ml_item_id = Column(String(50), index=True)
    text = Column(Text, nullable=False)
    status = Column(String(50), index=True)  # UNANSWERED, ANSWERED, ...
    answer_text = Column(Text)
    date_created = Column(DateTime)
    answered_at = Column(DateTime)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
