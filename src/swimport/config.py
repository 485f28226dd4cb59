from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from swimport.errors import ConfigError

# environment variables the CLI options fall back to
ENV_URL = "SHOPWARE_API_URL"
ENV_USER = "SHOPWARE_API_USER"
ENV_KEY = "SHOPWARE_API_KEY"
ENV_TIMEOUT = "SHOPWARE_API_TIMEOUT"

DEFAULT_TIMEOUT = 30.0


@dataclass
class ShopwareSettings:
    """
    Connection settings for the Shopware REST API.

    The API authenticates with HTTP digest auth using an API user name and
    that user's API key (Settings > User administration in the backend).
    """

    base_url: str
    user: str
    api_key: str
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        missing = [
            name for name, value in (("api url", self.base_url), ("api user", self.user), ("api key", self.api_key))
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing Shopware settings: {', '.join(missing)}")

        self.base_url = self.base_url.strip().rstrip("/")
        try:
            self.timeout = float(self.timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout: {self.timeout!r}") from e

    def summary(self) -> Dict[str, Any]:
        """Loggable view; never includes the key."""
        return {"base_url": self.base_url, "user": self.user, "timeout": self.timeout}
