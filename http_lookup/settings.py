"""Environment-driven configuration for the HTTP lookup client."""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from dotenv import load_dotenv

HEADER_PREFIX = "http.lookup.header."
SUCCESS_CODES_PREFIX = "http.lookup.success-codes"
ERROR_CODES_PREFIX = "http.lookup.error-codes"

DEFAULT_TIMEOUT_SECONDS = 120.0

_ENV_HEADER_PREFIX = "LOOKUP_HEADER_"


class ConfigurationError(ValueError):
    """Raised when the lookup client is configured inconsistently."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for lookup client configuration."""

    url: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    properties: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so a local .env file can hold the endpoint,
        status rules and headers without exporting them globally.
        """
        load_dotenv()

        url = os.getenv("LOOKUP_URL", "").strip()
        if not url:
            raise ConfigurationError("LOOKUP_URL is required but was not provided.")

        timeout_raw = os.getenv("LOOKUP_TIMEOUT", "").strip() or str(DEFAULT_TIMEOUT_SECONDS)
        try:
            timeout = float(timeout_raw)
        except ValueError as exc:
            raise ConfigurationError("LOOKUP_TIMEOUT must be a numeric value.") from exc
        if timeout <= 0:
            raise ConfigurationError("LOOKUP_TIMEOUT must be greater than zero.")

        properties: dict[str, str] = {}
        success_codes = os.getenv("LOOKUP_SUCCESS_CODES", "").strip()
        if success_codes:
            properties[SUCCESS_CODES_PREFIX] = success_codes
        error_codes = os.getenv("LOOKUP_ERROR_CODES", "").strip()
        if error_codes:
            properties[ERROR_CODES_PREFIX] = error_codes

        for key in sorted(os.environ):
            if key.startswith(_ENV_HEADER_PREFIX) and len(key) > len(_ENV_HEADER_PREFIX):
                properties[HEADER_PREFIX + _env_to_header_name(key)] = os.environ[key]

        return cls(url=url, timeout=timeout, properties=properties)


def _env_to_header_name(env_key: str) -> str:
    """LOOKUP_HEADER_X_API_KEY -> X-Api-Key."""
    return env_key[len(_ENV_HEADER_PREFIX):].replace("_", "-").title()


def properties_with_prefix(properties: Mapping[str, str], prefix: str) -> list[tuple[str, str]]:
    """Return the (key, value) entries whose key starts with prefix, in mapping order."""
    return [(key, value) for key, value in properties.items() if key.startswith(prefix)]
