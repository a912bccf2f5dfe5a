"""Shared fixtures for the settings tests."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from datalab_settings.log import reset_logger  # noqa: E402
from datalab_settings.settings import OVERRIDES_ENV  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(OVERRIDES_ENV, raising=False)
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def write_settings(tmp_path: Path) -> Callable[..., Path]:
    def _write(payload: Dict[str, Any] | str, name: str = "settings.json") -> Path:
        target = tmp_path / "config" / name
        target.parent.mkdir(parents=True, exist_ok=True)
        text = payload if isinstance(payload, str) else json.dumps(payload)
        target.write_text(text, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def test_logger() -> logging.Logger:
    logger = logging.getLogger("datalab_settings.tests")
    logger.setLevel(logging.DEBUG)
    return logger
