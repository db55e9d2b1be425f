"""
Allergen and Ingredient Tag Service

Collects labels inherited from every item reachable through a recipe's
components. Absence of data is not an error here, so nothing is flagged.
"""

import unicodedata

from .traversal import walk_components


def collation_key(text):
    """
    Sort key approximating German alphabetical order.

    Diacritics and case are ignored first ("Ä" sorts with "A", "ß" as "ss"),
    then case-folded text, then the raw string so the order is total.
    """
    decomposed = unicodedata.normalize('NFKD', text)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text.casefold(), text


def sort_labels(labels):
    """Deduplicate, drop blanks and sort labels for display."""
    cleaned = {label.strip() for label in labels if isinstance(label, str)}
    cleaned.discard('')
    return sorted(cleaned, key=collation_key)


def collect_allergens(root, catalog, components=None):
    """
    Union of the allergen labels of all component items at any depth.

    Args:
        root: Item snapshot (its own allergens are not included)
        catalog: Mapping of item id -> Item
        components: Optional live component list for the root

    Returns:
        Sorted list of unique allergen labels
    """
    labels = []
    for item in walk_components(root, catalog, components):
        labels.extend(item.allergens or ())
    return sort_labels(labels)


def collect_ingredient_tags(root, catalog, components=None):
    """Names of all component items at any depth, for tag autocomplete in preparation steps."""
    return sort_labels(item.name for item in walk_components(root, catalog, components))
