"""
Import customers from delimited text files into a Shopware shop.

Exports the public API:
- CustomerTransformer
- CustomerImporter
- ShopwareApi
"""
from .csvpipe.transform import CustomerTransformer
from .sync.engine import CustomerImporter
from .shopware.client import ShopwareApi

__version__ = "0.1.0"
