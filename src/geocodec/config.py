"""geocodec configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files. Every variable carries the ``GEOCODEC_`` prefix (for example
``GEOCODEC_WKB_BYTE_ORDER``); unrelated keys in a host project's ``.env``
are ignored.
"""

from collections.abc import Sequence
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "GEOCODEC_"

BYTE_ORDERS = ("little", "big")


class ConfigError(Exception):
    """Raised when a configuration value cannot be used.

    Example:
        >>> resolve_byte_order("middle")  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        ConfigError: WKB byte order 'middle' is invalid. Set GEOCODEC_WKB_BYTE_ORDER to one of: 'little', 'big'.
    """

    def __init__(
        self,
        key_name: str,
        env_var: str,
        value: object,
        allowed: Sequence[str] = (),
    ) -> None:
        """Initialize configuration error.

        Args:
            key_name: Human-readable name of the offending setting.
            env_var: Environment variable name to set.
            value: The rejected value.
            allowed: Accepted values, listed in the message when given.
        """
        self.key_name = key_name
        self.env_var = env_var
        self.value = value
        self.allowed = tuple(allowed)
        message = f"{key_name} {value!r} is invalid. Set {env_var}"
        if self.allowed:
            choices = ", ".join(repr(choice) for choice in self.allowed)
            message += f" to one of: {choices}"
        super().__init__(message + ".")


class Settings(BaseSettings):
    """Library settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix=ENV_PREFIX,
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Well-known binary
    WKB_BYTE_ORDER: Literal["little", "big"] = "little"

    # Well-known text; None writes the shortest repr that round-trips
    WKT_DECIMALS: int | None = None


def resolve_byte_order(byte_order: str | None) -> str:
    """Return a validated WKB byte order, falling back to settings.

    Args:
        byte_order: "little", "big", or None for the configured default.

    Returns:
        The byte order name.

    Raises:
        ConfigError: If the value is neither "little" nor "big".
    """
    value = byte_order if byte_order is not None else settings.WKB_BYTE_ORDER
    if value not in BYTE_ORDERS:
        raise ConfigError(
            "WKB byte order", f"{ENV_PREFIX}WKB_BYTE_ORDER", value, BYTE_ORDERS
        )
    return value


# Singleton instance for import convenience
settings = Settings()
