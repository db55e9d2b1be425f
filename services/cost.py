"""
Cost Calculation Service

Recursive purchase-cost rollup for recipes. A recipe costs the sum of its
components' resolved costs, each weighted by the edge quantity. Quantities
are assumed to already be in the component item's own unit.
"""

from collections import namedtuple

from .parsing import positive_number
from .traversal import PATH_GUARD, resolve, resolve_lines

CostResult = namedtuple('CostResult', ['total_cost', 'has_missing_prices'])


class CostAggregation:
    """Purchase price per unit for leaves, weighted sums for recipes."""

    def zero(self):
        return 0.0

    def leaf(self, item):
        price = positive_number(item.purchase_price)
        if price is None:
            return 0.0, True
        return price, False

    def add(self, total, value, quantity):
        return total + value * quantity


def compute_cost(root, catalog, components=None, cycle_guard=PATH_GUARD):
    """
    Calculate the total purchase cost of an item.

    Args:
        root: Item snapshot to cost
        catalog: Mapping of item id -> Item
        components: Optional live component list (unsaved edits) for the root
        cycle_guard: Visited-set policy, see services.traversal

    Returns:
        CostResult(total_cost, has_missing_prices). A recipe without any
        components is always (0.0, True).
    """
    total, missing = resolve(root, catalog, CostAggregation(), components, cycle_guard)
    return CostResult(total, missing)


def compute_cost_lines(root, catalog, components=None, cycle_guard=PATH_GUARD):
    """
    Total cost plus the cost of each of the root's component lines.

    Both come from one traversal, so the line costs always add up to the
    total and share its cycle handling.

    Returns:
        (CostResult, lines) with one (line_cost, missing) tuple per root
        component; line_cost is None for lines that cannot be costed.
    """
    total, missing, lines = resolve_lines(root, catalog, CostAggregation(), components, cycle_guard)
    return CostResult(total, missing), lines
