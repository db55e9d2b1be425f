"""
Request Payload Validation Module

Turns JSON bodies of the item and recipe-structure endpoints into column
values for the models. Anything that cannot be stored raises PayloadError,
which the app maps to a 400 response.
"""

from constants import (
    ITEM_FLAGS, ITEM_TYPE_PURCHASED, MAX_ALLERGENS, MAX_LENGTHS, MAX_NUMBER, NUTRITION_KEYS, VALID_ITEM_TYPES,
)
from services.parsing import parse_number, parse_quantity
from .sanitizer import sanitize_item_name, sanitize_labels, sanitize_multiline, sanitize_text


class PayloadError(Exception):
    """Raised when a request body fails validation."""
    pass


def _require_dict(data, what='Request body'):
    if not isinstance(data, dict):
        raise PayloadError(f"{what} must be a JSON object")
    return data


def _price(value, field):
    """Prices may be 0 (recipes, free items) but never negative or absurd."""
    number = parse_number(value)
    if number is None or number < 0 or number > MAX_NUMBER:
        raise PayloadError(f"{field} must be a number between 0 and {MAX_NUMBER}")
    return number


def _optional_target(value):
    """Targets are stored only if finite and > 0, otherwise cleared."""
    number = parse_number(value)
    if number is None or number <= 0 or number > MAX_NUMBER:
        return None
    return number


def _nutrition(value):
    """Keep canonical nutrition keys plus any extra numeric keys; None clears."""
    if value is None:
        return None
    _require_dict(value, 'nutritionPerUnit')
    result = {}
    for key, raw in value.items():
        number = parse_number(raw)
        if number is not None:
            result[str(key)] = number
        elif key in NUTRITION_KEYS.values():
            result[str(key)] = None
    return result


def parse_item_payload(data, partial=False):
    """
    Validate an item body ({"name", "type", "unit", "purchasePrice", ...}).

    Args:
        data: Decoded JSON body
        partial: True for PATCH, where absent fields are left untouched

    Returns:
        dict of Item column name -> value

    Raises:
        PayloadError: If a field is invalid or a required field is missing
    """
    _require_dict(data)
    values = {}

    if 'name' in data or not partial:
        name = sanitize_item_name(data.get('name'), max_length=MAX_LENGTHS['item_name'])
        if not name:
            raise PayloadError("name is required")
        values['name'] = name

    if 'type' in data or not partial:
        item_type = data.get('type', ITEM_TYPE_PURCHASED)
        if item_type not in VALID_ITEM_TYPES:
            raise PayloadError(f"type must be one of {', '.join(sorted(VALID_ITEM_TYPES))}")
        values['item_type'] = item_type

    if 'unit' in data or not partial:
        unit = sanitize_text(data.get('unit'), max_length=MAX_LENGTHS['unit'])
        if not unit:
            raise PayloadError("unit is required")
        values['unit'] = unit

    if 'purchasePrice' in data or not partial:
        values['purchase_price'] = _price(data.get('purchasePrice', 0), 'purchasePrice')

    for key, column in (('brand', 'brand'), ('category', 'category'), ('portionUnit', 'portion_unit')):
        if key in data:
            values[column] = sanitize_text(data[key], max_length=MAX_LENGTHS[column]) or None

    if 'targetPortions' in data:
        values['target_portions'] = _optional_target(data['targetPortions'])
    if 'targetSalesPrice' in data:
        values['target_sales_price'] = _optional_target(data['targetSalesPrice'])

    if 'allergens' in data:
        values['allergens'] = sanitize_labels(
            data['allergens'], max_length=MAX_LENGTHS['allergen'], max_count=MAX_ALLERGENS)

    if 'nutritionPerUnit' in data:
        values['nutrition_per_unit'] = _nutrition(data['nutritionPerUnit'])

    if 'preparationSteps' in data:
        steps = data['preparationSteps']
        if steps is not None and not isinstance(steps, str):
            raise PayloadError("preparationSteps must be a string")
        values['preparation_steps'] = sanitize_multiline(
            steps, max_length=MAX_LENGTHS['preparation_steps']) or None

    for column, key in ITEM_FLAGS.items():
        if key in data:
            if not isinstance(data[key], bool):
                raise PayloadError(f"{key} must be true or false")
            values[column] = data[key]

    return values


def parse_components_payload(rows):
    """
    Validate a component list for storage.

    Each row needs either an itemId or, for ghosts, a deletedItemName, and
    a quantity that is a finite number > 0 (decimal comma allowed).

    subRecipeId and subRecipeName optionally group the row into a section.

    Returns:
        List of dicts with component_item_id, quantity, unit, deleted_item_name,
        sub_recipe_id, sub_recipe_name

    Raises:
        PayloadError: On the first invalid row
    """
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise PayloadError("components must be a list")

    result = []
    for index, row in enumerate(rows):
        _require_dict(row, f"components[{index}]")
        item_id = row.get('itemId')
        item_id = str(item_id) if item_id not in (None, '') else None
        deleted_name = sanitize_item_name(row.get('deletedItemName'),
                                          max_length=MAX_LENGTHS['item_name']) or None
        if item_id is None and deleted_name is None:
            raise PayloadError(f"components[{index}] needs itemId or deletedItemName")

        quantity = parse_quantity(row.get('quantity'))
        if quantity is None or quantity > MAX_NUMBER:
            raise PayloadError(f"components[{index}].quantity must be a number greater than 0")

        sub_recipe_id = row.get('subRecipeId')
        result.append({
            'component_item_id': item_id,
            'quantity': quantity,
            'unit': sanitize_text(row.get('unit'), max_length=MAX_LENGTHS['unit']),
            'deleted_item_name': deleted_name if item_id is None else None,
            'sub_recipe_id': str(sub_recipe_id) if sub_recipe_id not in (None, '') else None,
            'sub_recipe_name': sanitize_text(row.get('subRecipeName'),
                                             max_length=MAX_LENGTHS['sub_recipe_name']) or None,
        })
    return result
