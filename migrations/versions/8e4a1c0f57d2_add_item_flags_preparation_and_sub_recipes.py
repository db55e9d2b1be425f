"""Add item property flags, preparation steps and sub-recipe grouping

Revision ID: 8e4a1c0f57d2
Revises: 3b7d2e91c4a8
Create Date: 2026-02-10 16:40:03.552917

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '8e4a1c0f57d2'
down_revision = '3b7d2e91c4a8'
branch_labels = None
depends_on = None

ITEM_FLAG_COLUMNS = (
    'is_bio', 'is_deklarationsfrei', 'is_allergenfrei', 'is_cook_chill',
    'is_freeze_thaw_stable', 'is_palm_oil_free', 'is_yeast_free',
    'is_lactose_free', 'is_gluten_free', 'is_vegan', 'is_vegetarian',
    'is_powder', 'is_granulate', 'is_paste', 'is_liquid',
)


def upgrade():
    with op.batch_alter_table('item', schema=None) as batch_op:
        batch_op.add_column(sa.Column('preparation_steps', sa.Text(), nullable=True))
        for column in ITEM_FLAG_COLUMNS:
            batch_op.add_column(sa.Column(column, sa.Boolean(), nullable=False, server_default=sa.false()))

    with op.batch_alter_table('recipe_structure', schema=None) as batch_op:
        batch_op.add_column(sa.Column('sub_recipe_id', sa.String(length=36), nullable=True))
        batch_op.add_column(sa.Column('sub_recipe_name', sa.String(length=200), nullable=True))
        batch_op.create_foreign_key(
            'fk_recipe_structure_sub_recipe_id_item', 'item',
            ['sub_recipe_id'], ['id'], ondelete='SET NULL')


def downgrade():
    with op.batch_alter_table('recipe_structure', schema=None) as batch_op:
        batch_op.drop_constraint('fk_recipe_structure_sub_recipe_id_item', type_='foreignkey')
        batch_op.drop_column('sub_recipe_name')
        batch_op.drop_column('sub_recipe_id')

    with op.batch_alter_table('item', schema=None) as batch_op:
        for column in reversed(ITEM_FLAG_COLUMNS):
            batch_op.drop_column(column)
        batch_op.drop_column('preparation_steps')
