from __future__ import annotations
import re
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .mapping import deep_get, deep_set, has_path, merge_defaults
from .types import ColumnMapping, CountryMap, CustomerRecord, RawRow

COUNTRY_PATH = "billing.country"

DEFAULT_CUSTOMER: Dict[str, Any] = {
    "salutation": "mr",
    "billing": {
        "salutation": "mr",
    },
}

_NUMERIC_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

# ids are database integers; anything wider than a signed 64 bit int is not one
_MAX_ID_DIGITS = 19

# cells treated as "no value"; a lone "0" counts as empty too
EMPTY_CELLS = (None, "", "0")


def _as_country_id(value: Any) -> Optional[int]:
    """Integer id for a numeric token (fraction truncated), None if it is not one."""
    s = str(value).strip()
    if not _NUMERIC_RE.match(s):
        return None
    d = Decimal(s)
    if d.adjusted() >= _MAX_ID_DIGITS:
        return None
    return int(d)


def join_columns(row: RawRow, columns: List[str]) -> str:
    """Space-join the non-empty cells of `columns` (missing columns count as empty)."""
    values = [row.get(col) for col in columns]
    values = [str(v) for v in values if v not in EMPTY_CELLS]
    return " ".join(values).strip()


def resolve_country(value: Any, country_map: CountryMap) -> Optional[int]:
    """
    Numeric values are taken as the Shopware country id, anything else is
    looked up by name. Unknown names resolve to None.
    """
    if value is None:
        return None
    country_id = _as_country_id(value)
    if country_id is not None:
        return country_id
    return country_map.get(str(value).strip())


class CustomerTransformer:
    """
    Turns one raw CSV row into a Shopware customer payload.

    Holds only read-only lookup data, so the same instance can be reused for
    every row; `transform` copies everything it returns.
    """

    def __init__(
        self,
        mapping: ColumnMapping,
        country_map: Optional[CountryMap] = None,
        defaults: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.mapping = mapping
        self.country_map = country_map or {}
        self.defaults = DEFAULT_CUSTOMER if defaults is None else defaults

    def map_record(self, row: RawRow) -> CustomerRecord:
        data: CustomerRecord = {}
        for target, columns in self.mapping.items():
            value = join_columns(row, columns)
            if value:
                deep_set(data, target, value)
        return data

    def transform(self, row: RawRow, group_key: Optional[str] = None) -> CustomerRecord:
        data = self.map_record(row)

        if has_path(data, COUNTRY_PATH):
            deep_set(data, COUNTRY_PATH, resolve_country(deep_get(data, COUNTRY_PATH), self.country_map))

        record = merge_defaults(self.defaults, data)

        if group_key:
            record["groupKey"] = group_key

        return record
