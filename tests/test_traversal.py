"""
Tests for the shared graph traversal: visited-set policies, deep nesting
and the distinct-item walk used by the label collectors.
"""

import pytest

from services import (
    PATH_GUARD,
    TREE_GUARD,
    Component,
    build_catalog,
    compute_cost,
    resolve,
    resolve_lines,
    walk_components,
)
from services.cost import CostAggregation


@pytest.fixture
def diamond(make_leaf, make_recipe):
    """root -> a -> stock (x2), root -> b -> stock (x3); stock costs 1.0."""
    stock = make_leaf('stock', price=1.0)
    a = make_recipe('a', [('stock', 2)])
    b = make_recipe('b', [('stock', 3)])
    root = make_recipe('root', [('a', 1), ('b', 1)])
    return root, build_catalog([stock, a, b, root])


@pytest.fixture
def nested_diamond(make_leaf, make_recipe):
    """The shared node is itself a recipe."""
    salt = make_leaf('salt', price=0.5)
    base = make_recipe('base', [('salt', 2)])
    a = make_recipe('a', [('base', 1)])
    b = make_recipe('b', [('base', 1)])
    root = make_recipe('root', [('a', 1), ('b', 1)])
    return root, build_catalog([salt, base, a, b, root])


class TestCycleGuards:
    """Shared sub-ingredients in disjoint branches under both policies."""

    def test_path_guard_costs_shared_leaf_in_every_branch(self, diamond):
        root, catalog = diamond
        assert compute_cost(root, catalog, cycle_guard=PATH_GUARD) == (5.0, False)

    def test_tree_guard_counts_second_occurrence_as_cycle(self, diamond):
        root, catalog = diamond
        assert compute_cost(root, catalog, cycle_guard=TREE_GUARD) == (2.0, True)

    def test_path_guard_shared_recipe(self, nested_diamond):
        root, catalog = nested_diamond
        assert compute_cost(root, catalog, cycle_guard=PATH_GUARD) == (2.0, False)

    def test_tree_guard_shared_recipe(self, nested_diamond):
        root, catalog = nested_diamond
        assert compute_cost(root, catalog, cycle_guard=TREE_GUARD) == (1.0, True)

    @pytest.mark.parametrize('guard', [PATH_GUARD, TREE_GUARD])
    def test_real_cycle_is_flagged_under_both(self, make_leaf, make_recipe, guard):
        salt = make_leaf('salt', price=1.0)
        a = make_recipe('a', [('b', 1), ('salt', 1)])
        b = make_recipe('b', [('c', 1)])
        c = make_recipe('c', [('a', 2)])
        assert compute_cost(a, build_catalog([salt, a, b, c]), cycle_guard=guard) == (1.0, True)

    @pytest.mark.parametrize('guard', [PATH_GUARD, TREE_GUARD])
    def test_same_leaf_twice_in_one_recipe(self, make_leaf, make_recipe, guard):
        salt = make_leaf('salt', price=1.0)
        root = make_recipe('root', [('salt', 1), ('salt', 2)])
        result = compute_cost(root, build_catalog([salt, root]), cycle_guard=guard)
        if guard == PATH_GUARD:
            assert result == (3.0, False)
        else:
            assert result == (1.0, True)

    def test_unknown_guard_raises(self, diamond):
        root, catalog = diamond
        with pytest.raises(ValueError):
            resolve(root, catalog, CostAggregation(), cycle_guard='branch')


class TestResolveLines:
    """Contributions of the root's own component lines."""

    def test_lines_sum_to_total(self, diamond):
        root, catalog = diamond
        total, missing, lines = resolve_lines(root, catalog, CostAggregation())
        assert (total, missing) == (5.0, False)
        assert lines == [(2.0, False), (3.0, False)]

    def test_tree_guard_charges_the_first_line(self, diamond):
        root, catalog = diamond
        total, missing, lines = resolve_lines(root, catalog, CostAggregation(), cycle_guard=TREE_GUARD)
        assert (total, missing) == (2.0, True)
        assert lines == [(2.0, False), (0.0, True)]

    def test_unusable_lines(self, make_leaf, make_recipe):
        salt = make_leaf('salt', price=1.0)
        empty = make_recipe('empty')
        root = make_recipe('root', [
            Component(None, 1, 'kg', 'Pfeffer'),
            ('unknown', 1),
            ('salt', 'x'),
            ('root', 1),
            ('empty', 1),
            ('salt', 4),
        ])
        total, missing, lines = resolve_lines(root, build_catalog([salt, empty, root]), CostAggregation())
        assert (total, missing) == (4.0, True)
        assert lines == [(None, True), (None, True), (None, True), (0.0, True), (0.0, True), (4.0, False)]

    def test_leaf_root_has_no_lines(self, make_leaf):
        salt = make_leaf('salt', price=1.0)
        assert resolve_lines(salt, build_catalog([salt]), CostAggregation()) == (1.0, False, [])


class TestDeepNesting:

    def test_long_chain_does_not_hit_recursion_limit(self, make_leaf, make_recipe):
        depth = 5000
        items = [make_leaf('leaf', price=1.0)]
        items.append(make_recipe('level-0', [('leaf', 1)]))
        for level in range(1, depth):
            items.append(make_recipe(f'level-{level}', [(f'level-{level - 1}', 1)]))
        catalog = build_catalog(items)
        assert compute_cost(catalog[f'level-{depth - 1}'], catalog) == (1.0, False)


class TestWalkComponents:

    def test_yields_each_reachable_item_once(self, nested_diamond):
        root, catalog = nested_diamond
        ids = [item.id for item in walk_components(root, catalog)]
        assert sorted(ids) == ['a', 'b', 'base', 'salt']

    def test_skips_ghosts_unknown_ids_and_root(self, make_leaf, make_recipe):
        salt = make_leaf('salt')
        root = make_recipe('root', [
            ('salt', 1),
            ('missing', 1),
            ('root', 1),
            Component(None, 1, 'kg', 'Butter'),
        ])
        ids = [item.id for item in walk_components(root, build_catalog([salt, root]))]
        assert ids == ['salt']

    def test_terminates_on_cycles(self, make_recipe):
        a = make_recipe('a', [('b', 1)])
        b = make_recipe('b', [('a', 1)])
        assert [item.id for item in walk_components(a, build_catalog([a, b]))] == ['b']

    def test_ignores_quantities(self, make_leaf, make_recipe):
        salt = make_leaf('salt')
        root = make_recipe('root', [('salt', 0)])
        assert [item.id for item in walk_components(root, build_catalog([salt, root]))] == ['salt']
