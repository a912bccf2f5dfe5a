from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field

from .log import LoggerProvider, SettingsLog, get_logger
from .paths import ensure_dir_exists, join_content_dir

SETTINGS_FILE = "settings.json"
OVERRIDES_ENV = "DATALAB_SETTINGS_OVERRIDES"
DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent / "config" / SETTINGS_FILE


class ResolverConfig(BaseModel):
    settings_path: Path = Field(
        default=DEFAULT_SETTINGS_PATH,
        description="JSON (or YAML) document holding the application settings.",
    )
    overrides_env: str = Field(
        default=OVERRIDES_ENV,
        min_length=1,
        description="Environment variable carrying a JSON object of setting overrides.",
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _parse_document(path: Path, text: str) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = _loads(text or "{}")
    if not isinstance(data, dict):
        raise ValueError(f"Settings root must be a mapping: {path}")
    return data


def _parse_overrides(raw: str) -> Dict[str, Any]:
    overrides = _loads(raw)
    if not isinstance(overrides, dict):
        raise ValueError("Settings overrides must be a JSON object")
    return overrides


class SettingsResolver:
    """Loads the settings document and answers path queries derived from it.

    Nothing is cached: every call re-reads the file and the environment.
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        logger_provider: LoggerProvider = get_logger,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.config = config or ResolverConfig()
        self.log = SettingsLog(logger_provider)
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def load_app_settings(self) -> Optional[Dict[str, Any]]:
        """Return the settings merged with environment overrides, or None on failure."""

        settings_path = self.config.settings_path
        if not settings_path.exists():
            self.log.error("App settings file %s not found.", settings_path)
            return None

        try:
            settings = _parse_document(settings_path, settings_path.read_text(encoding="utf-8"))
            raw_overrides = self.environ.get(self.config.overrides_env)
            if raw_overrides:
                for key, value in _parse_overrides(raw_overrides).items():
                    settings[key] = value
            return settings
        except (OSError, ValueError, yaml.YAMLError) as exc:
            self.log.error(exc)
            return None

    def get_content_dir(self) -> str:
        """Base directory for local content.

        A failed load is not checked for: subscripting the None result raises TypeError.
        """

        app_settings = self.load_app_settings()
        return join_content_dir(app_settings["datalabRoot"], app_settings["contentDir"])  # type: ignore[index]

    def ensure_dir_exists(self, full_path: Path | str) -> bool:
        return ensure_dir_exists(full_path, self.log)


def load_app_settings(settings_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    config = ResolverConfig(settings_path=settings_path) if settings_path else None
    return SettingsResolver(config).load_app_settings()


def get_content_dir(settings_path: Optional[Path] = None) -> str:
    config = ResolverConfig(settings_path=settings_path) if settings_path else None
    return SettingsResolver(config).get_content_dir()
