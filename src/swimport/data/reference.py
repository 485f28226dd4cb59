from __future__ import annotations
import json
import pathlib
from typing import Any, Dict

import yaml

from swimport.csvpipe.types import CountryMap
from swimport.csvpipe.validate import COUNTRIES_SCHEMA, OBJECT_SCHEMA, validate_doc
from swimport.errors import ConfigError


def _open_readable(path) -> pathlib.Path:
    p = pathlib.Path(path).expanduser()
    if not p.is_file():
        raise ConfigError(f"Failed to open `{path}`")
    return p


def read_json(path) -> Any:
    p = _open_readable(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ConfigError(f"Failed to open `{path}`: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON: {e}") from e


def load_country_map(path) -> CountryMap:
    """
    Build countryname -> id from an export of the shop's s_core_countries table.

    Later rows win when a name appears twice.
    """
    rows = read_json(path)
    validate_doc(rows, COUNTRIES_SCHEMA, str(path))
    out: CountryMap = {}
    for row in rows:
        try:
            out[row["countryname"]] = int(row["id"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{path}: bad id for {row['countryname']!r}: {row['id']!r}") from e
    return out


def load_fake_order(path) -> Dict[str, Any]:
    """Order payload posted after each customer creation; read verbatim."""
    doc = read_json(path)
    validate_doc(doc, OBJECT_SCHEMA, str(path))
    return doc


def load_defaults(path) -> Dict[str, Any]:
    """Default customer fields from a YAML (or JSON) document."""
    p = _open_readable(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            doc = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Failed to open `{path}`: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    validate_doc(doc, OBJECT_SCHEMA, str(path))
    return doc
