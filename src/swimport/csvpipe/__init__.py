from . import types
from . import delimiter
from . import mapping
from . import textio
from . import loader
from . import transform
from . import validate

__all__ = [
    "types",
    "delimiter",
    "mapping",
    "textio",
    "loader",
    "transform",
    "validate",
]
