"""
Input Sanitization Module

Cleans free-text fields (item names, units, allergen labels) before they
are stored. Values are kept as plain text: the API returns JSON, and
escaping for HTML is the job of whatever renders it.
"""

import re

# Tabs and line breaks are whitespace, not control characters: they collapse to a space
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0e-\x1f\x7f-\x84\x86-\x9f]')
_WHITESPACE = re.compile(r'\s+')
_LINE_BREAKS = re.compile(r'\r\n?')
_BLANK_LINES = re.compile(r'\n{3,}')


def sanitize_text(text, max_length=10000):
    """
    Sanitize a single-line text value.

    Removes control characters and null bytes, collapses runs of
    whitespace and truncates to max_length.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string ('' for None)
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = _CONTROL_CHARS.sub('', text)
    text = _WHITESPACE.sub(' ', text).strip()

    if len(text) > max_length:
        text = text[:max_length].rstrip()

    return text


def sanitize_multiline(text, max_length=50000):
    """
    Sanitize free text that keeps its line structure (preparation steps).

    Line breaks are normalized to \\n, other control characters removed and
    runs of more than one blank line shortened to one.

    Returns:
        Sanitized string ('' for None)
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = _LINE_BREAKS.sub('\n', text)
    lines = [_WHITESPACE.sub(' ', _CONTROL_CHARS.sub('', line)).strip() for line in text.split('\n')]
    text = _BLANK_LINES.sub('\n\n', '\n'.join(lines)).strip()

    if len(text) > max_length:
        text = text[:max_length].rstrip()

    return text


def sanitize_item_name(name, max_length=200):
    """
    Sanitize an item name for storage.

    Returns:
        Sanitized name, '' if nothing is left after cleaning
    """
    return sanitize_text(name, max_length=max_length)


def sanitize_labels(labels, max_length=80, max_count=50):
    """
    Sanitize a list of labels (allergens).

    Blank entries are dropped and duplicates removed, keeping the first
    occurrence's position.

    Args:
        labels: Iterable of label strings
        max_length: Maximum length per label
        max_count: Maximum number of labels kept

    Returns:
        List of cleaned labels
    """
    if not labels:
        return []

    if isinstance(labels, str):
        labels = labels.split(',')

    result = []
    seen = set()
    for label in labels:
        label = sanitize_text(label, max_length=max_length)
        if not label or label in seen:
            continue
        seen.add(label)
        result.append(label)
        if len(result) >= max_count:
            break
    return result
