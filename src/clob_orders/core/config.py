"""Configuration management for the order signing engine."""

import os
import re
from pathlib import Path
from typing import Any, cast

import yaml
from dotenv import load_dotenv

_SIGNATURE_TYPES = (0, 1, 2)


class ConfigError(Exception):
    """Raise when configuration loading or validation fails."""


class ConfigLoader:
    """Load and manage configuration from YAML files with environment variable substitution."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config loader.

        Load environment variables from a ``.env`` file (if present) and
        then read YAML configuration from the given directory.

        Args:
            config_dir: Directory containing config files. Defaults to src/clob_orders/config.

        """
        load_dotenv()
        if config_dir is None:
            config_dir = Path(__file__).parent.parent / "config"
        self.config_dir = Path(config_dir)
        self._config: dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML files."""
        settings_file = self.config_dir / "settings.yaml"
        if settings_file.exists():
            with settings_file.open() as f:
                self._config = yaml.safe_load(f) or {}

        # Override with local settings if exists
        local_settings = self.config_dir / "settings.local.yaml"
        if local_settings.exists():
            with local_settings.open() as f:
                local_config = cast("dict[str, Any]", yaml.safe_load(f) or {})
                self._deep_merge(self._config, local_config)

        self._config = self._substitute_env_vars(self._config)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> None:
        """Deep merge override dict into base dict.

        Args:
            base: Base dictionary to merge into (modified in place).
            override: Dictionary with values to override.

        """
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], cast("dict[str, Any]", value))
            else:
                base[key] = value

    def _substitute_env_vars(self, config: Any) -> Any:
        """Recursively substitute environment variables in config.

        Supports format: ${VAR_NAME:default_value} or ${VAR_NAME}.  An empty
        default (``${VAR_NAME:}``) resolves to an empty string.

        Args:
            config: Configuration value (dict, list, or str).

        Returns:
            Configuration with environment variables substituted.

        """
        if isinstance(config, dict):
            return {
                k: self._substitute_env_vars(v)
                for k, v in config.items()  # pyright: ignore[reportUnknownVariableType]
            }
        if isinstance(config, list):
            return [
                self._substitute_env_vars(item)
                for item in config  # pyright: ignore[reportUnknownVariableType]
            ]
        if isinstance(config, str) and config.startswith("${") and config.endswith("}"):
            var_expr = config[2:-1]
            if ":" in var_expr:
                var_name, default = var_expr.split(":", 1)
            else:
                var_name, default = var_expr, None

            value = os.getenv(var_name, default)
            if value is None:
                msg = f"Required environment variable ${{{var_name}}} is not set and has no default"
                raise ConfigError(msg)
            return value

        if isinstance(config, str) and re.search(r"\$\{[^}]+\}", config):
            msg = f"Unresolved environment variable reference in: {config}"
            raise ConfigError(msg)

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-notation key.

        Args:
            key: Configuration key in dot notation (e.g., 'clob.host').
            default: Default value if key not found.

        Returns:
            Configuration value.

        """
        keys = key.split(".")
        current: Any = self._config
        for k in keys:
            if isinstance(current, dict):
                current = cast("dict[str, Any]", current).get(k)
                if current is None:
                    return default
            else:
                return default
        return current  # pyright: ignore[reportReturnType]

    def _get_section(self, name: str) -> dict[str, Any]:
        result: Any = self.get(name, {})
        if isinstance(result, dict):
            return cast("dict[str, Any]", result)
        msg = f"{name} config must be a dict, got {type(result).__name__}"
        raise ConfigError(msg)

    def get_clob_config(self) -> dict[str, Any]:
        """Get CLOB API configuration.

        Returns:
            Dictionary with ``host`` and ``timeout`` settings.

        Raises:
            ConfigError: If the clob config value is not a dictionary.

        """
        return self._get_section("clob")

    def get_signing_config(self) -> dict[str, Any]:
        """Get signing account configuration.

        Returns:
            Dictionary with ``private_key``, ``funder_address``, and
            ``signature_type`` settings.

        Raises:
            ConfigError: If the signing config value is not a dictionary.

        """
        return self._get_section("signing")

    def get_chain_id(self) -> int:
        """Return the configured EVM chain ID.

        Raises:
            ConfigError: If the chain ID is not an integer.

        """
        raw = self.get("chain_id", 137)
        try:
            return int(raw)
        except (TypeError, ValueError) as exc:
            msg = f"chain_id must be an integer, got {raw!r}"
            raise ConfigError(msg) from exc

    def get_cache_ttl(self) -> float:
        """Return the market-data cache TTL in seconds.

        Raises:
            ConfigError: If the TTL is not a non-negative number.

        """
        raw = self.get("cache.ttl_seconds", 300)
        try:
            ttl = float(raw)
        except (TypeError, ValueError) as exc:
            msg = f"cache.ttl_seconds must be a number, got {raw!r}"
            raise ConfigError(msg) from exc
        if ttl < 0:
            msg = f"cache.ttl_seconds must not be negative, got {ttl}"
            raise ConfigError(msg)
        return ttl

    def get_signature_type(self) -> int:
        """Return the configured signature type (0 EOA, 1 proxy, 2 Gnosis Safe).

        Raises:
            ConfigError: If the value is not one of the supported types.

        """
        raw = self.get("signing.signature_type", 0)
        try:
            signature_type = int(raw)
        except (TypeError, ValueError) as exc:
            msg = f"signing.signature_type must be an integer, got {raw!r}"
            raise ConfigError(msg) from exc
        if signature_type not in _SIGNATURE_TYPES:
            msg = f"signing.signature_type must be one of {_SIGNATURE_TYPES}, got {signature_type}"
            raise ConfigError(msg)
        return signature_type

    def get_private_key(self) -> str:
        """Return the signing private key.

        Returns:
            Hex-encoded private key.

        Raises:
            ValueError: If the private key is not configured.

        """
        key = self.get("signing.private_key")
        if not key:
            raise ValueError("signing.private_key is not configured")
        return str(key)


_config: ConfigLoader | None = None


def get_config() -> ConfigLoader:
    """Return the global ``ConfigLoader`` singleton, creating it on first use.

    Lazy initialisation avoids side effects (file I/O, ``load_dotenv``)
    at import time and makes testing easier.

    Returns:
        The shared ``ConfigLoader`` instance.

    """
    global _config  # noqa: PLW0603
    if _config is None:
        _config = ConfigLoader()
    return _config
