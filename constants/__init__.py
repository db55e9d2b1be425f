"""
Constants Package

Whitelists and nutrition field definitions shared by models, services and routes.
"""

from .validation import (
    ITEM_TYPE_PURCHASED,
    ITEM_TYPE_RECIPE,
    VALID_ITEM_TYPES,
    MAX_NUMBER,
    MAX_LENGTHS,
    MAX_ALLERGENS,
    ITEM_FLAGS,
)

from .nutrition import (
    NUTRITION_KEYS,
    NUTRITION_FIELDS,
)

__all__ = [
    'ITEM_TYPE_PURCHASED',
    'ITEM_TYPE_RECIPE',
    'VALID_ITEM_TYPES',
    'MAX_NUMBER',
    'MAX_LENGTHS',
    'MAX_ALLERGENS',
    'ITEM_FLAGS',
    'NUTRITION_KEYS',
    'NUTRITION_FIELDS',
]
