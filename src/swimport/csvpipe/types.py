from typing import Any, Dict, List

# target dot-path -> ordered source column names, e.g. {"billing.name": ["FirstName", "LastName"]}
ColumnMapping = Dict[str, List[str]]

# s_core_countries.countryname -> s_core_countries.id
CountryMap = Dict[str, int]

# one header-keyed row as produced by csv.DictReader
RawRow = Dict[str, Any]

# nested customer payload as sent to /api/customers
CustomerRecord = Dict[str, Any]
