"""Initial multi-tenant schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-11-03 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

organization_plan = sa.Enum('FREE', 'STARTER', 'PRO', 'ENTERPRISE', name='organizationplan')
user_role = sa.Enum('SUPER_ADMIN', 'ADMIN', 'USER', name='userrole')
ml_account_status = sa.Enum('ACTIVE', 'INACTIVE', 'ERROR', name='mlaccountstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    ]


def upgrade():
    op.create_table('organizations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('plan', organization_plan, nullable=False),
        sa.Column('ml_connected', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_organizations_id'), 'organizations', ['id'], unique=False)
    op.create_index(op.f('ix_organizations_slug'), 'organizations', ['slug'], unique=True)

    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.Integer(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('active_until', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_organization_id'), 'users', ['organization_id'], unique=False)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    op.create_table('ml_accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('connected_by_user_id', sa.Integer(), nullable=True),
        sa.Column('ml_user_id', sa.String(length=50), nullable=False),
        sa.Column('nickname', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('site_id', sa.String(length=10), nullable=True),
        sa.Column('country_id', sa.String(length=10), nullable=True),
        sa.Column('permalink', sa.String(length=500), nullable=True),
        sa.Column('reputation_level', sa.String(length=50), nullable=True),
        sa.Column('power_seller_status', sa.String(length=50), nullable=True),
        sa.Column('is_primary', sa.Boolean(), nullable=False),
        sa.Column('status', ml_account_status, nullable=True),
        sa.Column('last_sync_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
        sa.ForeignKeyConstraint(['connected_by_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organization_id', 'ml_user_id', name='uq_ml_accounts_org_ml_user')
    )
    op.create_index(op.f('ix_ml_accounts_id'), 'ml_accounts', ['id'], unique=False)
    op.create_index(op.f('ix_ml_accounts_organization_id'), 'ml_accounts', ['organization_id'], unique=False)
    op.create_index(op.f('ix_ml_accounts_ml_user_id'), 'ml_accounts', ['ml_user_id'], unique=False)
    op.create_index(op.f('ix_ml_accounts_status'), 'ml_accounts', ['status'], unique=False)

    op.create_table('tokens',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ml_account_id', sa.Integer(), nullable=False),
        sa.Column('access_token', sa.Text(), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('token_type', sa.String(length=50), nullable=True),
        sa.Column('expires_in', sa.Integer(), nullable=True),
        sa.Column('scope', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('last_used', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['ml_account_id'], ['ml_accounts.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tokens_id'), 'tokens', ['id'], unique=False)
    op.create_index(op.f('ix_tokens_ml_account_id'), 'tokens', ['ml_account_id'], unique=False)
    op.create_index(op.f('ix_tokens_is_active'), 'tokens', ['is_active'], unique=False)

    op.create_table('ml_orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('ml_account_id', sa.Integer(), nullable=False),
        sa.Column('ml_order_id', sa.BigInteger(), nullable=False),
        sa.Column('pack_id', sa.BigInteger(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('status_detail', sa.Text(), nullable=True),
        sa.Column('date_created', sa.DateTime(), nullable=True),
        sa.Column('date_closed', sa.DateTime(), nullable=True),
        sa.Column('last_updated', sa.DateTime(), nullable=True),
        sa.Column('total_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('paid_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('currency_id', sa.String(length=10), nullable=True),
        sa.Column('buyer_id', sa.BigInteger(), nullable=True),
        sa.Column('buyer_nickname', sa.String(length=100), nullable=True),
        sa.Column('shipping_id', sa.BigInteger(), nullable=True),
        sa.Column('order_items', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
        sa.ForeignKeyConstraint(['ml_account_id'], ['ml_accounts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organization_id', 'ml_order_id', name='uq_ml_orders_org_order')
    )
    op.create_index(op.f('ix_ml_orders_id'), 'ml_orders', ['id'], unique=False)
    op.create_index(op.f('ix_ml_orders_organization_id'), 'ml_orders', ['organization_id'], unique=False)
    op.create_index(op.f('ix_ml_orders_ml_account_id'), 'ml_orders', ['ml_account_id'], unique=False)
    op.create_index(op.f('ix_ml_orders_status'), 'ml_orders', ['status'], unique=False)
    op.create_index(op.f('ix_ml_orders_date_created'), 'ml_orders', ['date_created'], unique=False)
    op.create_index('ix_ml_orders_org_date', 'ml_orders', ['organization_id', 'date_created'], unique=False)

    op.create_table('ml_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('ml_account_id', sa.Integer(), nullable=False),
        sa.Column('ml_item_id', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('category_id', sa.String(length=50), nullable=True),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('currency_id', sa.String(length=10), nullable=True),
        sa.Column('available_quantity', sa.Integer(), nullable=True),
        sa.Column('sold_quantity', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('listing_type_id', sa.String(length=50), nullable=True),
        sa.Column('permalink', sa.String(length=500), nullable=True),
        sa.Column('thumbnail', sa.String(length=500), nullable=True),
        sa.Column('last_sync_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
        sa.ForeignKeyConstraint(['ml_account_id'], ['ml_accounts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organization_id', 'ml_item_id', name='uq_ml_items_org_item')
    )
    op.create_index(op.f('ix_ml_items_id'), 'ml_items', ['id'], unique=False)
    op.create_index(op.f('ix_ml_items_organization_id'), 'ml_items', ['organization_id'], unique=False)
    op.create_index(op.f('ix_ml_items_ml_account_id'), 'ml_items', ['ml_account_id'], unique=False)
    op.create_index(op.f('ix_ml_items_status'), 'ml_items', ['status'], unique=False)

    op.create_table('ml_questions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('ml_account_id', sa.Integer(), nullable=False),
        sa.Column('ml_question_id', sa.BigInteger(), nullable=False),
        sa.Column('ml_item_id', sa.String(length=50), nullable=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('answer_text', sa.Text(), nullable=True),
        sa.Column('date_created', sa.DateTime(), nullable=True),
        sa.Column('answered_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
        sa.ForeignKeyConstraint(['ml_account_id'], ['ml_accounts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organization_id', 'ml_question_id', name='uq_ml_questions_org_question')
    )
    op.create_index(op.f('ix_ml_questions_id'), 'ml_questions', ['id'], unique=False)
    op.create_index(op.f('ix_ml_questions_organization_id'), 'ml_questions', ['organization_id'], unique=False)
    op.create_index(op.f('ix_ml_questions_ml_account_id'), 'ml_questions', ['ml_account_id'], unique=False)
    op.create_index(op.f('ix_ml_questions_ml_item_id'), 'ml_questions', ['ml_item_id'], unique=False)
    op.create_index(op.f('ix_ml_questions_status'), 'ml_questions', ['status'], unique=False)


def downgrade():
    op.drop_table('ml_questions')
    op.drop_table('ml_items')
    op.drop_table('ml_orders')
    op.drop_table('tokens')
    op.drop_table('ml_accounts')
    op.drop_table('users')
    op.drop_table('organizations')
    ml_account_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
    organization_plan.drop(op.get_bind(), checkfirst=True)
