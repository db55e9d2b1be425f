"""
Nutrition Constants

Canonical nutrition fields used by the aggregation engine and the
camelCase keys they are stored under in item JSON.
"""

# Engine field name -> stored JSON key
NUTRITION_KEYS = {
    'energy_kcal': 'energyKcal',
    'fat': 'fat',
    'carbs': 'carbs',
    'protein': 'protein',
    'salt': 'salt',
}

NUTRITION_FIELDS = tuple(NUTRITION_KEYS)