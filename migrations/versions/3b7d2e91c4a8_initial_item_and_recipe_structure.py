"""Initial item and recipe structure tables

Revision ID: 3b7d2e91c4a8
Revises:
Create Date: 2026-02-03 10:12:41.118204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7d2e91c4a8'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'item',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('item_type', sa.String(length=20), nullable=False, server_default='zukauf'),
        sa.Column('unit', sa.String(length=20), nullable=False, server_default='kg'),
        sa.Column('brand', sa.String(length=100), nullable=True),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('purchase_price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('target_portions', sa.Float(), nullable=True),
        sa.Column('target_sales_price', sa.Float(), nullable=True),
        sa.Column('portion_unit', sa.String(length=20), nullable=True),
        sa.Column('nutrition_per_unit', sa.JSON(), nullable=True),
        sa.Column('allergens', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('item', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_item_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_item_item_type'), ['item_type'], unique=False)

    op.create_table(
        'recipe_structure',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('parent_item_id', sa.String(length=36), nullable=False),
        sa.Column('component_item_id', sa.String(length=36), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False, server_default=''),
        sa.Column('deleted_item_name', sa.String(length=200), nullable=True),
        sa.ForeignKeyConstraint(['parent_item_id'], ['item.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['component_item_id'], ['item.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe_structure', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_structure_parent_item_id'), ['parent_item_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_structure_component_item_id'), ['component_item_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_structure_deleted_item_name'), ['deleted_item_name'], unique=False)


def downgrade():
    op.drop_table('recipe_structure')
    op.drop_table('item')
