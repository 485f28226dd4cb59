from typing import Any, Dict

import jsonschema

from swimport.errors import ConfigError

MAPPING_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": {
        "anyOf": [
            {"type": "null"},
            {"type": ["string", "number", "boolean"]},
            {"type": "array", "items": {"type": ["string", "number"]}},
        ]
    },
}

COUNTRIES_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["countryname", "id"],
        "properties": {
            "countryname": {"type": "string"},
            "id": {"type": ["integer", "string"]},
        },
    },
}

OBJECT_SCHEMA: Dict[str, Any] = {"type": "object"}


def validate_doc(doc: Any, schema: Dict[str, Any], source: str) -> None:
    """Raise ConfigError naming `source` if `doc` does not match `schema`."""
    try:
        jsonschema.validate(instance=doc, schema=schema)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"{source}: invalid document at {where}: {e.message}") from e
