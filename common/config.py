"""
load the config from config.yaml and .env
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Literal, Optional

from pydantic import BaseModel, Field


class PreviewSettings(BaseModel):
    """Where the announcement preview comes from and how it is assembled."""

    url: str = "https://blck-b.github.io/announcements.html"
    budget: int = Field(default=135, ge=0)
    title_marker: str = "antitle"
    date_marker: str = "andate"
    text_marker: str = "antext"
    mount_marker: str = "announcements"
    container_tag: str = "p"
    container_class: str = "antext"


class FetcherSettings(BaseModel):
    # None leaves the request unbounded
    timeout: Optional[float] = Field(default=None, gt=0)
    max_response_size: int = Field(default=10 * 1024 * 1024, gt=0)


class ScrollSettings(BaseModel):
    variant: Literal["mobile", "desktop"] = "mobile"
    breakpoint: int = Field(default=768, gt=0)
    fade_target: str = "topimg"
    scale_target: str = "mobilecont-image"
    height_target: str = "mobilecont-content"


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to config.yaml file. If None, looks for config.yaml
                        in the project root next to main.py.
        """
        if config_path is None:
            config_path = Path(__file__).resolve().parent.parent / "config.yaml"

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'PREVIEW_URL': ('preview', 'url'),
            'PREVIEW_BUDGET': ('preview', 'budget'),
            'FETCHER_TIMEOUT': ('fetcher', 'timeout'),
            'SCROLL_VARIANT': ('scroll', 'variant'),
            'SCROLL_BREAKPOINT': ('scroll', 'breakpoint'),
            'LOG_LEVEL': ('logging', 'level'),
            'LOG_FORMAT': ('logging', 'format'),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                current = config
                for key in config_path[:-1]:
                    if not isinstance(current.get(key), dict):
                        current[key] = {}
                    current = current[key]

                current[config_path[-1]] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get configuration value using dot notation.

        Args:
            *keys: Configuration keys (e.g., 'preview', 'url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def preview(self) -> Dict[str, Any]:
        """Get announcement preview configuration."""
        return self.get('preview', default={}) or {}

    @property
    def fetcher(self) -> Dict[str, Any]:
        """Get HTTP fetcher configuration."""
        return self.get('fetcher', default={}) or {}

    @property
    def scroll(self) -> Dict[str, Any]:
        """Get scroll transform configuration."""
        return self.get('scroll', default={}) or {}

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={}) or {}

    def preview_settings(self) -> PreviewSettings:
        return PreviewSettings(**self.preview)

    def fetcher_settings(self) -> FetcherSettings:
        return FetcherSettings(**self.fetcher)

    def scroll_settings(self) -> ScrollSettings:
        return ScrollSettings(**self.scroll)
