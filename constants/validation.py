"""
Validation Constants

Contains whitelist values for validating item and component payloads
before they reach the database.
"""

# Purchased goods vs. self-produced recipes
ITEM_TYPE_PURCHASED = 'zukauf'
ITEM_TYPE_RECIPE = 'eigenproduktion'
VALID_ITEM_TYPES = {ITEM_TYPE_PURCHASED, ITEM_TYPE_RECIPE}

# Upper bound for prices, quantities and portion counts
MAX_NUMBER = 1_000_000

# Maximum field lengths
MAX_LENGTHS = {
    'item_name': 200,
    'unit': 20,
    'brand': 100,
    'category': 50,
    'portion_unit': 20,
    'allergen': 80,
    'preparation_steps': 50000,
    'sub_recipe_name': 200,
}

# Maximum number of allergen labels stored per item
MAX_ALLERGENS = 50

# Product property flags: column name -> JSON key
ITEM_FLAGS = {
    'is_bio': 'isBio',
    'is_deklarationsfrei': 'isDeklarationsfrei',
    'is_allergenfrei': 'isAllergenfrei',
    'is_cook_chill': 'isCookChill',
    'is_freeze_thaw_stable': 'isFreezeThawStable',
    'is_palm_oil_free': 'isPalmOilFree',
    'is_yeast_free': 'isYeastFree',
    'is_lactose_free': 'isLactoseFree',
    'is_gluten_free': 'isGlutenFree',
    'is_vegan': 'isVegan',
    'is_vegetarian': 'isVegetarian',
    'is_powder': 'isPowder',
    'is_granulate': 'isGranulate',
    'is_paste': 'isPaste',
    'is_liquid': 'isLiquid',
}
