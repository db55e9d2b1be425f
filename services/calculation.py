"""
Item Calculation Service

Runs every aggregation for one item and shapes the results for the JSON
API (camelCase keys, as the inventory endpoints use).
"""

import logging

from .allergens import collect_allergens, collect_ingredient_tags
from .catalog import is_ghost, nutrition_to_json
from .cost import compute_cost_lines
from .economics import project_economics
from .logging_utils import get_service_logger, log_operation
from .nutrition import compute_nutrition
from .parsing import parse_quantity
from .traversal import PATH_GUARD

logger = get_service_logger(__name__)


def _line_json(component, catalog, line_cost):
    child = None if is_ghost(component) else catalog.get(component.item_id)
    cost, missing = line_cost
    return {
        'itemId': component.item_id,
        'name': child.name if child is not None else component.deleted_item_name,
        'quantity': parse_quantity(component.quantity),
        'unit': component.unit,
        'isGhost': is_ghost(component),
        'lineCost': cost,
        'hasMissingPrices': missing,
    }


def calculate_item(root, catalog, components=None, cycle_guard=PATH_GUARD):
    """
    Full calculation for one item.

    Args:
        root: Item snapshot
        catalog: Mapping of item id -> Item
        components: Optional live component list replacing the stored one
        cycle_guard: Visited-set policy, see services.traversal

    Returns:
        dict with cost, nutrition, allergens, ingredient tags, economics and
        per-line costs
    """
    if components is None:
        components = root.components
    cost, lines = compute_cost_lines(root, catalog, components, cycle_guard)
    nutrition = compute_nutrition(root, catalog, components, cycle_guard)
    economics = project_economics(cost.total_cost, root.target_portions, root.target_sales_price)

    if cost.has_missing_prices or nutrition.has_missing_data:
        log_operation(logger, 'calculate_item', 'incomplete', level=logging.DEBUG,
                      item_id=root.id,
                      has_missing_prices=cost.has_missing_prices,
                      has_missing_nutrition=nutrition.has_missing_data)

    return {
        'itemId': root.id,
        'totalCost': cost.total_cost,
        'hasMissingPrices': cost.has_missing_prices,
        'nutrition': {
            'perRecipe': nutrition_to_json(nutrition.per_recipe),
            'perPortion': nutrition_to_json(nutrition.per_portion),
            'hasMissingData': nutrition.has_missing_data,
        },
        'allergens': collect_allergens(root, catalog, components),
        'ingredientTags': collect_ingredient_tags(root, catalog, components),
        'economics': {
            'costPerPortion': economics.cost_per_portion,
            'marginPerPortion': economics.margin_per_portion,
            'goodsSharePercent': economics.goods_share_percent,
        },
        'components': [_line_json(component, catalog, line) for component, line in zip(components, lines)],
    }
