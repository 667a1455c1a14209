from __future__ import annotations

"""Base HTTP client with timeout and retry logic."""

import logging
import time
from typing import Any, Dict

import requests

from terrasignal.core.config import ConfigManager
from terrasignal.core.logger import Logger


class ProviderError(RuntimeError):
    """Raised when an upstream data provider fails or returns unusable data."""

    def __init__(self, provider: str, message: str, status: int | None = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status = status


class MissingDataError(RuntimeError):
    """Raised when an assessment lacks one of its required inputs."""


class BaseClient:
    """Shared plumbing for provider clients.

    Transport errors and 5xx responses are retried with exponential backoff
    (1 s, 2 s, ...); 4xx responses fail immediately.
    """

    provider: str = "provider"
    url_key: str = ""

    def __init__(
        self,
        config: ConfigManager | None = None,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or ConfigManager()
        self.session = session or requests.Session()
        self.timeout = (
            timeout if timeout is not None else float(self.config.get("http_timeout", 30))
        )
        self.max_retries = max(
            1,
            max_retries
            if max_retries is not None
            else int(self.config.get("max_retries", 3)),
        )
        self.logger = logger or Logger.get_logger(__name__)

    @property
    def base_url(self) -> str:
        return self.config.provider_url(self.url_key)

    def get_json(self, url: str, params: Dict[str, Any] | None = None) -> Any:
        """GET ``url`` and return the decoded JSON body."""
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = self.session.get(url, params=params, timeout=self.timeout)
            except requests.RequestException as err:
                reason: str = str(err)
                status = None
            else:
                if resp.ok:
                    try:
                        return resp.json()
                    except ValueError as err:
                        raise ProviderError(
                            self.provider, f"invalid JSON response: {err}"
                        ) from err
                status = resp.status_code
                reason = f"HTTP {resp.status_code} {resp.reason}"
                if status < 500:
                    raise ProviderError(self.provider, reason, status)

            if attempt == self.max_retries:
                self.logger.warning(
                    "Request failed after %d attempts: %s",
                    attempt,
                    reason,
                    extra={"provider": self.provider, "attempt": attempt},
                )
                raise ProviderError(self.provider, reason, status)
            backoff = 2 ** (attempt - 1)
            self.logger.warning(
                "Request failed (attempt %d/%d): %s; retrying in %d s",
                attempt,
                self.max_retries,
                reason,
                backoff,
                extra={"provider": self.provider, "attempt": attempt},
            )
            time.sleep(backoff)
        raise ProviderError(self.provider, "no attempts made")  # pragma: no cover
