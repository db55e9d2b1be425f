"""
Economics Service

Projects a recipe's total cost onto its portion targets.
"""

from collections import namedtuple

from .parsing import parse_number, positive_number

Economics = namedtuple('Economics', ['cost_per_portion', 'margin_per_portion', 'goods_share_percent'])


def project_economics(total_cost, target_portions=None, target_sales_price=None):
    """
    Per-portion cost, margin and goods-cost share.

    Values are not rounded; formatting is left to the caller.

    Args:
        total_cost: Total cost of the recipe
        target_portions: Number of portions the recipe yields
        target_sales_price: Planned sales price per portion

    Returns:
        Economics(cost_per_portion, margin_per_portion, goods_share_percent);
        each field is None when its inputs are missing or not positive.
    """
    cost = parse_number(total_cost)
    portions = positive_number(target_portions)
    if cost is None or portions is None:
        return Economics(None, None, None)

    cost_per_portion = cost / portions

    sales_price = positive_number(target_sales_price)
    if sales_price is None:
        return Economics(cost_per_portion, None, None)

    margin = sales_price - cost_per_portion
    share = cost_per_portion * 100 / sales_price
    return Economics(cost_per_portion, margin, share)
