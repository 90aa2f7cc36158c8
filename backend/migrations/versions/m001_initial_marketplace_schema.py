"""initial marketplace schema

Revision ID: m001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the complete marketplace schema:
- users: username-keyed accounts
- products: listings with optional owner and stored image filename
- transactions: append-only sales ledger (items/location as JSON text)
- transaction_sequences: atomic sale-number counter
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'm001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('username'),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.String(length=64), nullable=True),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('image', sa.String(length=255), nullable=True),
        sa.Column('owner', sa.String(length=64), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_owner', 'products', ['owner'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('owner', sa.String(length=64), nullable=True),
        sa.Column('items', sa.Text(), nullable=False),
        sa.Column('total', sa.Float(), nullable=True),
        sa.Column('itemCount', sa.Integer(), nullable=True),
        sa.Column('paymentMethod', sa.String(length=32), nullable=True),
        sa.Column('proofUploaded', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('proofFilename', sa.String(length=255), nullable=True),
        sa.Column('location', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.String(length=64), nullable=True),
        sa.Column('date', sa.String(length=32), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_owner', 'transactions', ['owner'])

    op.create_table(
        'transaction_sequences',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=32), nullable=False),
        sa.Column('next_number', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_transaction_sequences_name'),
    )


def downgrade():
    op.drop_table('transaction_sequences')
    op.drop_index('ix_transactions_owner', table_name='transactions')
    op.drop_table('transactions')
    op.drop_index('ix_products_owner', table_name='products')
    op.drop_table('products')
    op.drop_table('users')
