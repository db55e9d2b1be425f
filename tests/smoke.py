"""
Smoke tests for the kitchen costing app.
Run with: python tests/smoke.py
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault('FLASK_ENV', 'testing')

def test_app_imports():
    """Verify app can be imported without errors."""
    from app import app, db
    assert app is not None
    assert db is not None
    print("OK: App imports successfully")

def test_models_import():
    """Verify models can be imported."""
    from models import Item, RecipeComponent
    assert Item.__tablename__ == 'item'
    assert RecipeComponent.__tablename__ == 'recipe_structure'
    print("OK: Models import successfully")

def test_engine_import():
    """Verify the aggregation engine can be imported."""
    from services import compute_cost, compute_nutrition, collect_allergens, project_economics
    assert callable(compute_cost)
    assert callable(compute_nutrition)
    assert callable(collect_allergens)
    assert callable(project_economics)
    print("OK: Engine imports successfully")

def test_constants_import():
    """Verify constants can be imported."""
    from constants import VALID_ITEM_TYPES, NUTRITION_FIELDS
    assert VALID_ITEM_TYPES == {'zukauf', 'eigenproduktion'}
    assert NUTRITION_FIELDS == ('energy_kcal', 'fat', 'carbs', 'protein', 'salt')
    print("OK: Constants import successfully")

def test_engine_sample():
    """Verify a small recipe costs what it should."""
    from services import Component, Item, build_catalog, compute_cost
    flour = Item('flour', 'Mehl', purchase_price=1.5)
    salt = Item('salt', 'Salz', purchase_price=2.0)
    bread = Item('bread', 'Brot', item_type='eigenproduktion',
                 components=(Component('flour', 2), Component('salt', 3)))
    result = compute_cost(bread, build_catalog([flour, salt, bread]))
    assert result == (9.0, False)
    print("OK: Engine computes sample recipe")

def test_app_runs():
    """Verify app can create test client and serve the inventory."""
    from app import app, db
    with app.app_context():
        db.create_all()
        with app.test_client() as client:
            response = client.get('/api/inventory')
            assert response.status_code == 200
        print("OK: App serves inventory")

if __name__ == '__main__':
    print("Running smoke tests...\n")

    tests = [
        test_app_imports,
        test_models_import,
        test_engine_import,
        test_constants_import,
        test_engine_sample,
        test_app_runs,
    ]

    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{'='*40}")
    if failed:
        print(f"FAILED: {failed}/{len(tests)} tests")
        sys.exit(1)
    else:
        print(f"PASSED: {len(tests)}/{len(tests)} tests")
        sys.exit(0)
