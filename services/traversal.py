"""
Recipe Graph Traversal

Cycle-safe descent over the item/component graph shared by the cost and
nutrition aggregators.

An aggregation supplies three things:
    zero()                      neutral value
    leaf(item)                  (value, missing) for an item without components
    add(total, value, quantity) total + value * quantity

resolve() walks the graph with an explicit stack, so arbitrarily deep
recipe nesting never hits Python's recursion limit.
"""

import logging

from .catalog import is_composite, is_ghost
from .logging_utils import get_service_logger, log_operation
from .parsing import parse_quantity

logger = get_service_logger(__name__)

# Visited-set policies
PATH_GUARD = 'path'   # ids are released once their subtree is done
TREE_GUARD = 'tree'   # ids stay visited for the whole evaluation
CYCLE_GUARDS = {PATH_GUARD, TREE_GUARD}


class _Frame:
    """One composite item being summed on the traversal stack."""
    __slots__ = ('item', 'components', 'position', 'total', 'missing', 'quantity', 'line')

    def __init__(self, item, components, total, quantity=None, line=None):
        self.item = item
        self.components = components
        self.position = 0
        self.total = total
        self.missing = False
        # Edge quantity into this item, applied when the frame is folded into its parent
        self.quantity = quantity
        # Index of the root component line this subtree belongs to
        self.line = line


def resolve(root, catalog, aggregation, components=None, cycle_guard=PATH_GUARD):
    """
    Resolve the aggregated value of an item over its component tree.

    Args:
        root: Item snapshot to evaluate
        catalog: Mapping of item id -> Item (read-only)
        aggregation: Object with zero(), leaf(item) and add(total, value, quantity)
        components: Optional live component list replacing root.components
        cycle_guard: PATH_GUARD (branch-local visited set) or TREE_GUARD
            (first occurrence anywhere in the tree wins)

    Returns:
        (value, missing) where missing is True if any branch was incomplete:
        ghost or unknown component, invalid quantity, leaf without a value,
        empty recipe, or a revisited item id.
    """
    value, missing, _ = resolve_lines(root, catalog, aggregation, components, cycle_guard)
    return value, missing


def resolve_lines(root, catalog, aggregation, components=None, cycle_guard=PATH_GUARD):
    """
    Like resolve(), but also report what each of the root's component lines
    contributed to the total during the same walk.

    Returns:
        (value, missing, lines). lines has one entry per root component:
        (contribution, missing), where contribution is the line's value
        already weighted by its quantity, or None if the line could not be
        evaluated at all (ghost, unknown item, invalid quantity). Items
        without components and empty recipes have no lines.
    """
    if cycle_guard not in CYCLE_GUARDS:
        raise ValueError(f"Unknown cycle guard: {cycle_guard!r}")

    if components is None:
        components = root.components

    if not is_composite(root, components):
        value, missing = aggregation.leaf(root)
        return value, missing, []

    if not components:
        return aggregation.zero(), True, []

    release = cycle_guard == PATH_GUARD
    visited = {root.id}
    lines = [None] * len(components)
    stack = [_Frame(root, components, aggregation.zero())]

    while True:
        frame = stack[-1]

        if frame.position >= len(frame.components):
            stack.pop()
            if release:
                visited.discard(frame.item.id)
            if not stack:
                return frame.total, frame.missing, lines
            parent = stack[-1]
            parent.total = aggregation.add(parent.total, frame.total, frame.quantity)
            parent.missing = parent.missing or frame.missing
            if len(stack) == 1:
                lines[frame.line] = (
                    aggregation.add(aggregation.zero(), frame.total, frame.quantity), frame.missing)
            continue

        index = frame.position
        component = frame.components[index]
        frame.position += 1
        at_root = len(stack) == 1

        if is_ghost(component):
            frame.missing = True
            if at_root:
                lines[index] = (None, True)
            continue

        child = catalog.get(component.item_id)
        if child is None:
            log_operation(logger, 'resolve', 'missing_reference', level=logging.DEBUG,
                          parent_item_id=frame.item.id, component_item_id=component.item_id)
            frame.missing = True
            if at_root:
                lines[index] = (None, True)
            continue

        quantity = parse_quantity(component.quantity)
        if quantity is None:
            frame.missing = True
            if at_root:
                lines[index] = (None, True)
            continue

        if child.id in visited:
            log_operation(logger, 'resolve', 'cycle_detected', level=logging.DEBUG,
                          parent_item_id=frame.item.id, component_item_id=child.id)
            frame.missing = True
            if at_root:
                lines[index] = (aggregation.zero(), True)
            continue

        if child.components:
            visited.add(child.id)
            stack.append(_Frame(child, child.components, aggregation.zero(), quantity,
                                index if at_root else None))
            continue

        if not release:
            visited.add(child.id)

        if is_composite(child):
            # Recipe without components
            frame.missing = True
            if at_root:
                lines[index] = (aggregation.zero(), True)
            continue

        value, missing = aggregation.leaf(child)
        frame.total = aggregation.add(frame.total, value, quantity)
        frame.missing = frame.missing or missing
        if at_root:
            lines[index] = (aggregation.add(aggregation.zero(), value, quantity), missing)


def walk_components(root, catalog, components=None):
    """
    Yield every distinct item reachable through components, at any depth.

    Each item is yielded once. Ghosts, unknown ids and cycles are skipped
    silently; the root itself is not yielded. Quantities are irrelevant here.
    """
    if components is None:
        components = root.components

    seen = {root.id}
    stack = [iter(components)]

    while stack:
        component = next(stack[-1], None)
        if component is None:
            stack.pop()
            continue
        if is_ghost(component) or component.item_id in seen:
            continue
        child = catalog.get(component.item_id)
        if child is None:
            continue
        seen.add(child.id)
        yield child
        if child.components:
            stack.append(iter(child.components))
