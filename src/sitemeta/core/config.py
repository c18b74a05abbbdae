"""Settings for structured data resolution."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sitemeta.core.exceptions import ConfigError
from sitemeta.core.filters import DEFAULT_FILTERS, FilterRegistry
from sitemeta.core.resolver import DEFAULT_MAX_DEPTH, Resolver
from sitemeta.core.serialize import DEFAULT_CONTEXT
from sitemeta.core.urls import SiteUrlBuilder

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".sitemeta.toml"


def _deep_merge(destination: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(destination.get(key), Mapping):
            destination[key] = _deep_merge(dict(destination[key]), value)
        else:
            destination[key] = value
    return destination


class SitemetaSettings(BaseSettings):
    """Site-wide settings.

    Supports environment variable overrides with the pattern
    SITEMETA_<FIELD> (e.g., SITEMETA_LOCATION).
    """

    location: str = Field(default="http://localhost/", description="Public base URL of the site")
    context: str = Field(default=DEFAULT_CONTEXT, description="Value of the JSON-LD @context key")
    max_reference_depth: int = Field(
        default=DEFAULT_MAX_DEPTH, ge=1, description="Limit for data references resolving to references"
    )
    log_level: str = Field(default="INFO", description="Logging level for the command line")

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="SITEMETA_",
    )

    @field_validator("location")
    @classmethod
    def _check_location(cls, value: str) -> str:
        SiteUrlBuilder(value)
        return value

    @classmethod
    def load(cls, site_root: Path | None = None) -> SitemetaSettings:
        """Loads settings from .sitemeta.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (SITEMETA_FIELD)
        2. Config file (.sitemeta.toml in site_root)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise ConfigError(str(config_file), str(exc)) from exc
            logger.debug("Loaded settings from %s", config_file)

        try:
            env_settings = cls().model_dump(exclude_unset=True)
            return cls.model_validate(_deep_merge(file_settings, env_settings))
        except ValidationError as exc:
            raise ConfigError(str(config_file), str(exc)) from exc

    def url_builder(self) -> SiteUrlBuilder:
        return SiteUrlBuilder(self.location)


def build_resolver(settings: SitemetaSettings, filters: FilterRegistry = DEFAULT_FILTERS) -> Resolver:
    """Create a resolver configured from ``settings``."""
    return Resolver(filters=filters, max_depth=settings.max_reference_depth)
