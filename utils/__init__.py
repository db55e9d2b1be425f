# Utility modules for the kitchen costing app
from .sanitizer import sanitize_text, sanitize_multiline, sanitize_item_name, sanitize_labels
from .payload import PayloadError, parse_item_payload, parse_components_payload
