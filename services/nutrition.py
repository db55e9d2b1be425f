"""
Nutrition Calculation Service

Recursive rollup of the five canonical nutrition fields. All fields are
summed in the same pass; missing values contribute zero and taint the
result instead of discarding it.
"""

from collections import namedtuple

from constants import NUTRITION_FIELDS
from .catalog import NutritionTotals, is_composite
from .parsing import parse_number, positive_number
from .traversal import PATH_GUARD, resolve

NutritionResult = namedtuple('NutritionResult', ['per_recipe', 'per_portion', 'has_missing_data'])

ZERO_NUTRITION = NutritionTotals(*([0.0] * len(NUTRITION_FIELDS)))


def _field_value(value):
    """Nutrition values must be finite and non-negative; zero is legitimate."""
    result = parse_number(value)
    if result is None or result < 0:
        return None
    return result


def leaf_nutrition(item):
    """
    Per-unit nutrition of a single item without looking at its components.

    Returns:
        (NutritionTotals, missing). Unknown fields are reported as 0.0.
    """
    record = item.nutrition_per_unit
    if record is None:
        return ZERO_NUTRITION, True

    missing = False
    values = []
    for raw in record:
        value = _field_value(raw)
        if value is None:
            missing = True
            value = 0.0
        values.append(value)
    return NutritionTotals(*values), missing


class NutritionAggregation:

    def zero(self):
        return ZERO_NUTRITION

    def leaf(self, item):
        return leaf_nutrition(item)

    def add(self, total, value, quantity):
        return NutritionTotals(*(t + v * quantity for t, v in zip(total, value)))


def scale_nutrition(totals, divisor):
    """Divide every field by divisor (used for per-portion values)."""
    return NutritionTotals(*(value / divisor for value in totals))


def compute_nutrition(root, catalog, components=None, cycle_guard=PATH_GUARD):
    """
    Calculate nutrition totals for an item and, if it has a target portion
    count, per portion.

    Args:
        root: Item snapshot to evaluate
        catalog: Mapping of item id -> Item
        components: Optional live component list for the root
        cycle_guard: Visited-set policy, see services.traversal

    Returns:
        NutritionResult(per_recipe, per_portion, has_missing_data).
        per_recipe is None only when nothing can be computed at all: a recipe
        without components, or a purchased item without a nutrition record.
    """
    if components is None:
        components = root.components

    if is_composite(root, components):
        if not components:
            return NutritionResult(None, None, True)
        per_recipe, missing = resolve(root, catalog, NutritionAggregation(), components, cycle_guard)
    else:
        if root.nutrition_per_unit is None:
            return NutritionResult(None, None, True)
        per_recipe, missing = leaf_nutrition(root)

    portions = positive_number(root.target_portions)
    per_portion = scale_nutrition(per_recipe, portions) if portions is not None else None
    return NutritionResult(per_recipe, per_portion, missing)
