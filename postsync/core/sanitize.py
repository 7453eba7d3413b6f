"""Strip service-assigned identifiers from downloaded documents."""

from typing import Any

# Synonyms: an object carrying either has both removed
ID_FIELDS = ("id", "_postman_id")
VALUE_FIELD = "value"


def sanitize(doc: Any, strip_values: bool = False) -> Any:
    """Return a copy of a JSON tree with identifiers removed at every depth.

    Args:
        doc: Any JSON value (dict, list or scalar)
        strip_values: If True, every object with a 'value' field has it set to ""
            (used for environments so secrets never reach disk)

    Returns:
        New tree; the input is not modified
    """
    if isinstance(doc, list):
        return [sanitize(item, strip_values) for item in doc]

    if not isinstance(doc, dict):
        return doc

    has_id = any(key in doc for key in ID_FIELDS)
    result: dict[str, Any] = {}
    for key, value in doc.items():
        if has_id and key in ID_FIELDS:
            continue
        if strip_values and key == VALUE_FIELD:
            result[key] = ""
            continue
        result[key] = sanitize(value, strip_values)
    return result
