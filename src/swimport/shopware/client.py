from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import requests
from requests.auth import HTTPDigestAuth

from swimport.config import ShopwareSettings
from swimport.errors import RemoteError, RemoteNotFound

logger = logging.getLogger(__name__)

USER_AGENT = "sw-customer-import/0.1"


def _excerpt(text: str, limit: int = 200) -> str:
    text = (text or "").strip().replace("\n", " ")
    return text if len(text) <= limit else text[:limit] + "..."


class ShopwareApi:
    """
    Thin client for the Shopware 5 REST API (customers + orders resources).

    Every call raises RemoteNotFound on HTTP 404 and RemoteError on any other
    failure, so callers can tell "no such resource" apart from a broken call.
    """

    def __init__(self, settings: ShopwareSettings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()
        self.session.auth = HTTPDigestAuth(settings.user, settings.api_key)
        self.session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _url(self, path: str) -> str:
        return f"{self.settings.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            resp = self.session.request(method, self._url(path), timeout=self.settings.timeout, **kwargs)
        except requests.RequestException as e:
            raise RemoteError(f"{method} {path} failed: {e}") from e

        if resp.status_code == 404:
            raise RemoteNotFound(f"{method} {path} -> 404", status_code=404)
        if resp.status_code >= 400:
            raise RemoteError(
                f"{method} {path} -> {resp.status_code}: {_excerpt(resp.text)}",
                status_code=resp.status_code,
            )

        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteError(f"{method} {path}: response is not JSON: {_excerpt(resp.text)}") from e
        if not isinstance(data, dict):
            raise RemoteError(f"{method} {path}: unexpected response payload {type(data).__name__}")
        return data

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------
    def find_customer_id_by_email(self, email: str) -> Optional[int]:
        """
        Id of the customer registered with `email`, None if there is none.

        If the shop returns several matches the first one is used.
        """
        params = {
            "filter[0][property]": "email",
            "filter[0][expression]": "=",
            "filter[0][value]": email,
        }
        data = self._request("GET", "/api/customers", params=params)
        matches = data.get("data") or []
        if not matches:
            return None
        if len(matches) > 1:
            logger.debug("%d customers match %s, using the first", len(matches), email)
        return matches[0].get("id")

    def create_customer(self, customer_data: Dict[str, Any]) -> Optional[int]:
        data = self._request("POST", "/api/customers", json=customer_data)
        return (data.get("data") or {}).get("id")

    def update_customer(self, customer_id: int, customer_data: Dict[str, Any]) -> None:
        self._request("PUT", f"/api/customers/{customer_id}", json=customer_data)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def create_order(self, order_data: Dict[str, Any]) -> Optional[int]:
        data = self._request("POST", "/api/orders", json=order_data)
        order_id = data.get("id")
        if order_id is None:
            order_id = (data.get("data") or {}).get("id")
        if order_id is None:
            logger.debug("order response without id: %s", data)
        return order_id
