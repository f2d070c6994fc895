"""Component schema adjustments."""

import copy


def apply_schema_nullability(schemas: dict[str, dict]) -> dict[str, dict]:
    """Mark every optional property ``nullable: false``.

    Optional here means "may be omitted", not "may be null". Returns a new
    mapping; ``schemas`` is left as it was.
    """
    result = copy.deepcopy(schemas)
    for schema in result.values():
        properties = schema.get("properties")
        if not properties:
            continue
        required = set(schema.get("required") or ())
        for name, prop in properties.items():
            if name not in required and isinstance(prop, dict):
                prop["nullable"] = False
    return result
