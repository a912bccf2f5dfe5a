"""Settings loading and content-directory helpers for the Datalab environment."""

from __future__ import annotations

from .log import get_logger, setup_logging  # noqa: F401
from .paths import ensure_dir_exists  # noqa: F401
from .settings import ResolverConfig, SettingsResolver, get_content_dir, load_app_settings  # noqa: F401
