"""Runtime settings loaded from YAML and environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from schemeguard.context import ValidationContext

logger = logging.getLogger(__name__)

CONFIG_FILE = os.environ.get("SCHEMEGUARD_CONFIG", "config/schemeguard.yaml")

_TRUE_VALUES = ("1", "true", "yes", "on")


def load_config_file(file_path: str = CONFIG_FILE) -> Dict[str, Any]:
    if not os.path.exists(file_path):
        return {}
    try:
        with open(file_path, "r") as file:
            data = yaml.safe_load(file) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Error loading config file %s: %s", file_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Config file %s must contain a mapping", file_path)
        return {}
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass
class Settings:
    """Validator settings.

    Attributes:
        log_level: Root log level used by the CLI
        fetch_timeout: Seconds to wait when fetching a document by URL
        deadline_seconds: Time limit for validating one document (None = none)
        stop_on_first_error: Stop a document run at the first rejected scheme
    """

    log_level: str = "INFO"
    fetch_timeout: float = 10.0
    deadline_seconds: Optional[float] = None
    stop_on_first_error: bool = False

    def new_context(self) -> ValidationContext:
        return ValidationContext(timeout=self.deadline_seconds)

    @classmethod
    def load(
        cls, file_path: str = CONFIG_FILE, environ: Optional[Mapping[str, str]] = None
    ) -> "Settings":
        """Build settings from the config file, then apply env overrides."""
        environ = os.environ if environ is None else environ
        data = load_config_file(file_path)

        log_level = environ.get("SCHEMEGUARD_LOG_LEVEL", data.get("log_level", cls.log_level))
        fetch_timeout = environ.get(
            "SCHEMEGUARD_FETCH_TIMEOUT", data.get("fetch_timeout", cls.fetch_timeout)
        )
        deadline = environ.get("SCHEMEGUARD_DEADLINE_SECONDS", data.get("deadline_seconds"))
        stop = environ.get(
            "SCHEMEGUARD_STOP_ON_FIRST_ERROR", data.get("stop_on_first_error", False)
        )

        try:
            return cls(
                log_level=str(log_level).upper(),
                fetch_timeout=float(fetch_timeout),
                deadline_seconds=float(deadline) if deadline not in (None, "") else None,
                stop_on_first_error=_as_bool(stop),
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid schemeguard settings: {exc}") from exc
