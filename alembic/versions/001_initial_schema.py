"""initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    # Create perks table
    op.create_table(
        'perk',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('category', sa.Enum('FOOD', 'TECH', 'TRAVEL', 'FITNESS', 'OTHER', name='perkcategory'), nullable=False),
        sa.Column('discount_percent', sa.Integer(), nullable=False),
        sa.Column('merchant', sa.String(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['user.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('created_by', 'title', name='uq_perk_creator_title')
    )
    op.create_index(op.f('ix_perk_title'), 'perk', ['title'], unique=False)
    op.create_index(op.f('ix_perk_merchant'), 'perk', ['merchant'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_perk_merchant'), table_name='perk')
    op.drop_index(op.f('ix_perk_title'), table_name='perk')
    op.drop_table('perk')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('DROP TYPE IF EXISTS perkcategory')
