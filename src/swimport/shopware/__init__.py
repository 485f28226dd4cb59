from .client import ShopwareApi

__all__ = ["ShopwareApi"]
