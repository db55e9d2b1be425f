"""
Catalog Snapshot Service

Immutable snapshot types the aggregation engine works on, and helpers
that build them from database rows or JSON payloads.

The engine never touches the ORM: routes load the models once, turn them
into a catalog (a dict mapping item id -> Item) and pass it explicitly.
"""

from collections import namedtuple

from constants import ITEM_TYPE_PURCHASED, ITEM_TYPE_RECIPE, NUTRITION_KEYS
from .parsing import parse_number


NutritionTotals = namedtuple('NutritionTotals', ['energy_kcal', 'fat', 'carbs', 'protein', 'salt'])

Component = namedtuple('Component', ['item_id', 'quantity', 'unit', 'deleted_item_name'],
                       defaults=('', None))

Item = namedtuple('Item', [
    'id', 'name', 'item_type', 'unit', 'purchase_price',
    'nutrition_per_unit', 'allergens', 'target_portions', 'target_sales_price', 'components',
], defaults=(ITEM_TYPE_PURCHASED, '', 0.0, None, (), None, None, ()))


def is_ghost(component):
    """A ghost component lost its item (deleted) and only keeps the old name."""
    return component.item_id is None


def is_composite(item, components=None):
    """
    Whether an item derives its values from components.

    Recipes are composite even while their component list is empty;
    a purchased item becomes composite only if it actually has components.
    """
    if components is None:
        components = item.components
    return item.item_type == ITEM_TYPE_RECIPE or bool(components)


def nutrition_from_json(data):
    """
    Build NutritionTotals from a stored nutrition dict.

    Accepts camelCase (energyKcal) as well as snake_case (energy_kcal) keys.
    Unknown keys are ignored; unparseable values become None.

    Returns:
        NutritionTotals, or None if data is not a dict
    """
    if not isinstance(data, dict):
        return None
    values = {}
    for field, key in NUTRITION_KEYS.items():
        raw = data.get(key, data.get(field))
        values[field] = parse_number(raw)
    return NutritionTotals(**values)


def nutrition_to_json(totals):
    """Inverse of nutrition_from_json, using the stored camelCase keys."""
    if totals is None:
        return None
    return {key: getattr(totals, field) for field, key in NUTRITION_KEYS.items()}


def snapshot_component(row):
    """Snapshot a RecipeComponent model row."""
    return Component(
        item_id=row.component_item_id,
        quantity=row.quantity,
        unit=row.unit or '',
        deleted_item_name=row.deleted_item_name,
    )


def snapshot_item(model):
    """Snapshot an Item model, including its ordered component rows."""
    return Item(
        id=model.id,
        name=model.name or '',
        item_type=model.item_type or ITEM_TYPE_PURCHASED,
        unit=model.unit or '',
        purchase_price=model.purchase_price,
        nutrition_per_unit=nutrition_from_json(model.nutrition_per_unit),
        allergens=tuple(model.allergens or ()),
        target_portions=model.target_portions,
        target_sales_price=model.target_sales_price,
        components=tuple(snapshot_component(row) for row in model.components),
    )


def build_catalog(items):
    """
    Build a catalog mapping item id -> Item.

    Args:
        items: Iterable of Item snapshots or Item models (models are snapshotted)

    Returns:
        dict of id -> Item
    """
    catalog = {}
    for item in items:
        if not isinstance(item, Item):
            item = snapshot_item(item)
        catalog[item.id] = item
    return catalog


def components_from_payload(rows):
    """
    Build Components from JSON rows ({"itemId", "quantity", "unit", "deletedItemName"}).

    Quantities are kept as sent; the engine validates them during traversal
    so a half-typed value taints the result instead of failing the request.
    Rows that are not objects at all become nameless ghosts.
    """
    components = []
    for row in rows or ():
        if not isinstance(row, dict):
            components.append(Component(None, None))
            continue
        item_id = row.get('itemId')
        components.append(Component(
            item_id=str(item_id) if item_id not in (None, '') else None,
            quantity=row.get('quantity'),
            unit=row.get('unit') or '',
            deleted_item_name=row.get('deletedItemName'),
        ))
    return tuple(components)
