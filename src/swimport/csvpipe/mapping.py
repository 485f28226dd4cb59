from __future__ import annotations
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List

import yaml

from swimport.errors import ConfigError
from .types import ColumnMapping
from .validate import MAPPING_SCHEMA, validate_doc


def _split_path(path: str) -> List[str]:
    # "billing.country" -> ["billing", "country"]
    return [p for p in path.split(".") if p]


def deep_set(doc: Dict[str, Any], path: str, value: Any) -> None:
    """
    Set `value` at a dot-path, creating intermediate dicts as needed.

    Examples:
      deep_set(doc, "email", "a@b.com")
      deep_set(doc, "billing.country", 3)        # doc["billing"]["country"] = 3
    """
    parts = _split_path(path)
    if not parts:
        raise ValueError(f"Empty target path: {path!r}")
    head, rest = parts[0], parts[1:]
    if not rest:
        doc[head] = value
        return
    child = doc.get(head)
    if not isinstance(child, dict):
        # a scalar already sitting on the path is replaced by a subtree
        child = {}
        doc[head] = child
    deep_set(child, ".".join(rest), value)


def deep_get(doc: Dict[str, Any], path: str, default=None):
    cur: Any = doc
    for key in _split_path(path):
        if isinstance(cur, dict) and key in cur:
            cur = cur[key]
        else:
            return default
    return cur


def has_path(doc: Dict[str, Any], path: str) -> bool:
    missing = object()
    return deep_get(doc, path, missing) is not missing


def merge_defaults(defaults: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively lay `data` over `defaults`.

    A default survives only where `data` has nothing at the same nested path;
    nested dicts are merged key by key, never replaced wholesale. Neither
    argument is modified.
    """
    out = deepcopy(defaults)
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = merge_defaults(out[key], value)
        else:
            out[key] = deepcopy(value)
    return out


def normalize_columns(value: Any) -> List[str]:
    """list -> list of str, truthy scalar -> [scalar], falsy scalar -> []."""
    if isinstance(value, list):
        return [str(v) for v in value]
    if not value:
        return []
    return [str(value)]


def normalize_mapping(doc: Dict[str, Any]) -> ColumnMapping:
    return {str(target): normalize_columns(cols) for target, cols in doc.items()}


def load_mapping(path: Path) -> ColumnMapping:
    """
    Load the column mapping YAML.

    Expected shape (target path -> source column or list of columns):

        email: E-Mail
        billing.name: [Vorname, Nachname]
        billing.country: Land
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Column mapping not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            doc = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Failed to open `{path}`: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e

    if not doc:
        raise ConfigError(f"{path}: column mapping is empty")
    validate_doc(doc, MAPPING_SCHEMA, str(path))

    return normalize_mapping(doc)
