"""Create LifeVault tables: users, assets, nominees, trading accounts, vault requests, audit logs.

Revision ID: create_lifevault_tables
Revises:
Create Date: 2026-10-01
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'create_lifevault_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('pin_hash', sa.String(64), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('phone', name='uq_users_phone'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )

    op.create_table(
        'assets',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('institution', sa.String(200), nullable=False),
        sa.Column('account_number', sa.String(100), nullable=False),
        sa.Column('current_value', sa.Numeric(15, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('documents', sa.JSON(), nullable=False),
        sa.Column('maturity_date', sa.Date(), nullable=True),
        sa.Column('nominee', sa.String(100), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_asset_user', 'assets', ['user_id'])
    op.create_index('idx_asset_user_status', 'assets', ['user_id', 'status'])

    op.create_table(
        'nominees',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('relation', sa.String(20), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('allocation_percentage', sa.Numeric(5, 2), nullable=False),
        sa.Column('is_executor', sa.Boolean(), nullable=False),
        sa.Column('is_backup', sa.Boolean(), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('id_proof_type', sa.String(100), nullable=True),
        sa.Column('id_proof_number', sa.String(100), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_nominee_user', 'nominees', ['user_id'])

    op.create_table(
        'trading_accounts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('broker_name', sa.String(200), nullable=False),
        sa.Column('client_id', sa.String(100), nullable=False),
        sa.Column('demat_number', sa.String(100), nullable=False),
        sa.Column('nominee_id', sa.Integer(), sa.ForeignKey('nominees.id', ondelete='SET NULL'), nullable=True),
        sa.Column('current_value', sa.Numeric(15, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('documents', sa.JSON(), nullable=False),
        sa.Column('opened_date', sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_trading_account_user', 'trading_accounts', ['user_id'])

    op.create_table(
        'vault_requests',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('nominee_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('nominee_name', sa.String(100), nullable=False),
        sa.Column('relation_to_deceased', sa.String(50), nullable=False),
        sa.Column('phone_number', sa.String(20), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('death_certificate_url', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('reviewed_by', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('vault_opened_at', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_vault_request_nominee', 'vault_requests', ['nominee_id'])
    op.create_index('idx_vault_request_status', 'vault_requests', ['status'])

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('action', sa.String(30), nullable=False),
        sa.Column('resource', sa.String(30), nullable=False),
        sa.Column('resource_id', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('ip_address', sa.String(45), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_audit_user', 'audit_logs', ['user_id'])
    op.create_index('idx_audit_resource', 'audit_logs', ['resource', 'resource_id'])


def downgrade() -> None:
    op.drop_index('idx_audit_resource', table_name='audit_logs')
    op.drop_index('idx_audit_user', table_name='audit_logs')
    op.drop_table('audit_logs')

    op.drop_index('idx_vault_request_status', table_name='vault_requests')
    op.drop_index('idx_vault_request_nominee', table_name='vault_requests')
    op.drop_table('vault_requests')

    op.drop_index('idx_trading_account_user', table_name='trading_accounts')
    op.drop_table('trading_accounts')

    op.drop_index('idx_nominee_user', table_name='nominees')
    op.drop_table('nominees')

    op.drop_index('idx_asset_user_status', table_name='assets')
    op.drop_index('idx_asset_user', table_name='assets')
    op.drop_table('assets')

    op.drop_table('users')
