"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .item import Item, RecipeComponent

__all__ = [
    'db',
    'Item',
    'RecipeComponent',
]
