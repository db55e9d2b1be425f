"""
Services Package

Recipe aggregation engine: cost, nutrition, allergen and economics
calculations over an in-memory catalog snapshot.
"""

from .catalog import (
    Component,
    Item,
    NutritionTotals,
    build_catalog,
    components_from_payload,
    snapshot_item,
)

from .traversal import (
    PATH_GUARD,
    TREE_GUARD,
    resolve,
    resolve_lines,
    walk_components,
)

from .cost import (
    CostResult,
    compute_cost,
    compute_cost_lines,
)

from .nutrition import (
    NutritionResult,
    compute_nutrition,
)

from .allergens import (
    collect_allergens,
    collect_ingredient_tags,
)

from .economics import (
    Economics,
    project_economics,
)

from .calculation import calculate_item

__all__ = [
    # Catalog
    'Component',
    'Item',
    'NutritionTotals',
    'build_catalog',
    'components_from_payload',
    'snapshot_item',
    # Traversal
    'PATH_GUARD',
    'TREE_GUARD',
    'resolve',
    'resolve_lines',
    'walk_components',
    # Cost
    'CostResult',
    'compute_cost',
    'compute_cost_lines',
    # Nutrition
    'NutritionResult',
    'compute_nutrition',
    # Allergens
    'collect_allergens',
    'collect_ingredient_tags',
    # Economics
    'Economics',
    'project_economics',
    # Combined
    'calculate_item',
]
