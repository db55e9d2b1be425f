"""Pytest configuration and fixtures for engine and API tests."""

import os

import pytest

# Must be set before app.py is imported: it reads the config at import time
os.environ['FLASK_ENV'] = 'testing'

from app import app as flask_app  # noqa: E402
from models import db  # noqa: E402
from services import Component, Item, NutritionTotals  # noqa: E402


@pytest.fixture
def make_leaf():
    """Factory for purchased items (zukauf)."""
    def _make(item_id, price=1.0, nutrition=None, allergens=(), name=None, unit='kg'):
        if nutrition is not None and not isinstance(nutrition, NutritionTotals):
            nutrition = NutritionTotals(*nutrition)
        return Item(
            id=item_id,
            name=name or item_id,
            item_type='zukauf',
            unit=unit,
            purchase_price=price,
            nutrition_per_unit=nutrition,
            allergens=tuple(allergens),
        )
    return _make


@pytest.fixture
def make_recipe():
    """
    Factory for self-produced items (eigenproduktion).

    components is a list of (item_id, quantity) pairs or Component instances.
    """
    def _make(item_id, components=(), target_portions=None, target_sales_price=None,
              allergens=(), name=None, unit='kg'):
        edges = tuple(
            c if isinstance(c, Component) else Component(c[0], c[1], unit)
            for c in components
        )
        return Item(
            id=item_id,
            name=name or item_id,
            item_type='eigenproduktion',
            unit=unit,
            purchase_price=0.0,
            allergens=tuple(allergens),
            target_portions=target_portions,
            target_sales_price=target_sales_price,
            components=edges,
        )
    return _make


@pytest.fixture
def app():
    """Flask app with a fresh in-memory database per test."""
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
