"""
Parsing Service

Functions for turning stored or user-entered numbers into floats the
aggregation engine can trust.
"""

import math
import re

# Whitespace variants seen in pasted values (non-breaking and thin spaces)
_SPACES = re.compile(r'[\s\u00a0\u2000-\u200b]+')


def parse_number(value):
    """
    Parse a number that may arrive as int, float or string.

    Strings may use a decimal comma ("1,5") as entered in German forms.
    Booleans are rejected even though Python treats them as ints.

    Args:
        value: The raw value (number, string or None)

    Returns:
        The float value, or None if it cannot be parsed or is not finite
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = _SPACES.sub('', str(value)).replace(',', '.')
        if not text:
            return None
        try:
            result = float(text)
        except ValueError:
            return None

    if not math.isfinite(result):
        return None
    return result


def positive_number(value):
    """Return value as a float if it is a finite number greater than zero, else None."""
    result = parse_number(value)
    if result is None or result <= 0:
        return None
    return result


def parse_quantity(value):
    """
    Parse the quantity on a component edge.

    A quantity is only usable when it is finite and strictly positive;
    anything else (zero, negative, blank, garbage) yields None.
    """
    return positive_number(value)
