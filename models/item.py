"""
Item Models

Contains the Item model (purchased goods and self-produced recipes) and
the RecipeComponent model linking a recipe to the items it is made of.
"""

import uuid

from .base import db


def _new_id():
    return str(uuid.uuid4())


class Item(db.Model):
    """
    Inventory item.

    Item types:
    - zukauf: purchased good, purchase_price is the price per ONE unit
    - eigenproduktion: self-produced recipe, cost derives from components
    """
    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.String(200), nullable=False, index=True)
    item_type = db.Column(db.String(20), nullable=False, default='zukauf', index=True)

    # Opaque unit label (kg, L, Stück, ...); never converted
    unit = db.Column(db.String(20), nullable=False, default='kg')
    brand = db.Column(db.String(100), nullable=True)
    category = db.Column(db.String(50), nullable=True)

    # Price per one unit (meaningless for recipes)
    purchase_price = db.Column(db.Float, nullable=False, default=0.0)

    # Recipe targets for the economics projection
    target_portions = db.Column(db.Float, nullable=True)
    target_sales_price = db.Column(db.Float, nullable=True)
    portion_unit = db.Column(db.String(20), nullable=True)

    # {"energyKcal", "fat", "carbs", "protein", "salt", ...} per one unit
    nutrition_per_unit = db.Column(db.JSON, nullable=True)
    allergens = db.Column(db.JSON, nullable=True)

    # Free-text preparation steps; ingredient names autocomplete into them
    preparation_steps = db.Column(db.Text, nullable=True)

    # Product properties (certifications, diet, physical state)
    is_bio = db.Column(db.Boolean, nullable=False, default=False)
    is_deklarationsfrei = db.Column(db.Boolean, nullable=False, default=False)
    is_allergenfrei = db.Column(db.Boolean, nullable=False, default=False)
    is_cook_chill = db.Column(db.Boolean, nullable=False, default=False)
    is_freeze_thaw_stable = db.Column(db.Boolean, nullable=False, default=False)
    is_palm_oil_free = db.Column(db.Boolean, nullable=False, default=False)
    is_yeast_free = db.Column(db.Boolean, nullable=False, default=False)
    is_lactose_free = db.Column(db.Boolean, nullable=False, default=False)
    is_gluten_free = db.Column(db.Boolean, nullable=False, default=False)
    is_vegan = db.Column(db.Boolean, nullable=False, default=False)
    is_vegetarian = db.Column(db.Boolean, nullable=False, default=False)
    is_powder = db.Column(db.Boolean, nullable=False, default=False)
    is_granulate = db.Column(db.Boolean, nullable=False, default=False)
    is_paste = db.Column(db.Boolean, nullable=False, default=False)
    is_liquid = db.Column(db.Boolean, nullable=False, default=False)

    components = db.relationship(
        'RecipeComponent',
        foreign_keys='RecipeComponent.parent_item_id',
        backref='parent',
        order_by='RecipeComponent.position',
        cascade='all, delete-orphan',
        lazy=True,
    )


class RecipeComponent(db.Model):
    """
    One line of a recipe: quantity of a component item, in that item's unit.

    component_item_id is NULL for ghost components whose item was deleted;
    deleted_item_name then keeps the old name until a replacement is chosen.
    """
    __tablename__ = 'recipe_structure'

    id = db.Column(db.Integer, primary_key=True)
    parent_item_id = db.Column(db.String(36), db.ForeignKey('item.id', ondelete='CASCADE'), nullable=False, index=True)
    component_item_id = db.Column(db.String(36), db.ForeignKey('item.id', ondelete='SET NULL'), nullable=True, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    quantity = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(20), nullable=False, default='')
    deleted_item_name = db.Column(db.String(200), nullable=True, index=True)

    # Optional grouping of lines into a named section (e.g. "Teig", "Füllung")
    sub_recipe_id = db.Column(db.String(36), db.ForeignKey('item.id', ondelete='SET NULL'), nullable=True)
    sub_recipe_name = db.Column(db.String(200), nullable=True)

    component = db.relationship('Item', foreign_keys=[component_item_id])
