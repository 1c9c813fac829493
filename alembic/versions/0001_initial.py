"""accounts and project tasks

Revision ID: 0001_initial
Revises: 
Create Date: 2025-09-03
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def upgrade() -> None:
    op.create_table('accounts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=200), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('company', sa.String(length=200)),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_accounts_username', 'accounts', ['username'], unique=True)

    op.create_table('project_tasks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('accounts.id')),
        sa.Column('name', sa.String(length=300), nullable=False),
        sa.Column('start', sa.Date(), nullable=False),
        sa.Column('end', sa.Date(), nullable=False),
        sa.Column('progress', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('type', sa.String(length=50), nullable=False, server_default='task'),
        sa.Column('is_disabled', sa.Boolean(), nullable=False, server_default=sa.text('0')),
        sa.Column('company', sa.String(length=200), nullable=False),
        sa.Column('styles', sa.Text()),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_project_tasks_company', 'project_tasks', ['company'])

def downgrade() -> None:
    op.drop_index('ix_project_tasks_company', table_name='project_tasks')
    op.drop_table('project_tasks')
    op.drop_index('ix_accounts_username', table_name='accounts')
    op.drop_table('accounts')
