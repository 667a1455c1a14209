from __future__ import annotations

"""Minimal service base class providing a logger and configuration."""

import logging

from terrasignal.core.config import ConfigManager
from terrasignal.core.logger import Logger


class BaseService:
    """Base class for service helpers."""

    def __init__(
        self,
        config: ConfigManager | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or ConfigManager()
        self.logger = logger or Logger.get_logger(__name__)
