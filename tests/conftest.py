"""Shared pytest fixtures for SwitchBack tests.

This module provides reusable fixtures for:
- An isolated data directory (SWITCHBACK_HOME) with test settings
- Sample configuration documents and backup files
- A scriptable fake backend and a mock notifier for the controller
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from switchback.config import DEFAULT_CONFIG, clear_config_cache, save_config
from tests.helpers import FakeBackend


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def data_home(tmp_path, monkeypatch) -> Path:
    """Point SWITCHBACK_HOME at a temporary directory.

    Returns:
        Path to the (not yet created) data directory.
    """
    home = tmp_path / "switchback-home"
    monkeypatch.setenv("SWITCHBACK_HOME", str(home))
    clear_config_cache()
    yield home
    clear_config_cache()


@pytest.fixture
def live_dir(tmp_path) -> Path:
    """Directory receiving live settings files."""
    return tmp_path / "live"


@pytest.fixture
def test_config(live_dir) -> dict[str, Any]:
    """Create test settings: toasts off, live files under tmp, codex disabled.

    Returns:
        Settings dict with sensible test values.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["backup"]["max_backups"] = 3
    config["notifications"]["enabled"] = False
    config["live"] = {
        "claude": str(live_dir / "claude" / "settings.json"),
        "codex": "",
        "gemini": str(live_dir / "gemini" / "settings.json"),
    }
    return config


@pytest.fixture
def app_settings(data_home, test_config) -> dict[str, Any]:
    """Write test settings to the isolated data directory.

    Returns:
        The settings that were written.
    """
    save_config(test_config, data_home / "settings.toml")
    return test_config


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Create a valid multi-app configuration document.

    Returns:
        Document with a current provider for claude and gemini only.
    """
    return {
        "version": 2,
        "claude": {
            "providers": {
                "p1": {
                    "id": "p1",
                    "name": "Official",
                    "settingsConfig": {"env": {"ANTHROPIC_BASE_URL": "https://api.example.com"}},
                },
                "p2": {
                    "id": "p2",
                    "name": "Mirror",
                    "settingsConfig": {"env": {"ANTHROPIC_BASE_URL": "https://mirror.example.com"}},
                },
            },
            "current": "p1",
        },
        "codex": {"providers": {}, "current": ""},
        "gemini": {
            "providers": {
                "g1": {
                    "id": "g1",
                    "name": "Gemini",
                    "settingsConfig": {
                        "env": {"GEMINI_API_KEY": "g-key"},
                        "config": {"model": "gemini-pro"},
                    },
                },
            },
            "current": "g1",
        },
    }


@pytest.fixture
def backup_file(tmp_path, sample_document) -> Path:
    """Write the sample document as an exported backup file.

    Returns:
        Path to the backup file.
    """
    path = tmp_path / "exports" / "switchback-export-20260101_120000.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


@pytest.fixture
def corrupt_backup_file(tmp_path) -> Path:
    """Write a backup file that is not valid JSON."""
    path = tmp_path / "exports" / "broken.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{not json", encoding="utf-8")
    return path


@pytest.fixture
def existing_document(tmp_path) -> Path:
    """Write a previously persisted document to replace during import.

    Returns:
        Path to the document.
    """
    path = tmp_path / "data" / "config.json"
    path.parent.mkdir(parents=True)
    path.write_text(
        json.dumps({"version": 2, "claude": {"providers": {}, "current": ""}}),
        encoding="utf-8",
    )
    return path


# ============================================================================
# Controller Fixtures
# ============================================================================


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Scriptable backend; succeeds with backup id "b1" by default."""
    return FakeBackend()


@pytest.fixture
def mock_notifier() -> MagicMock:
    """Notifier mock exposing success/warning/error."""
    return MagicMock(spec=["success", "warning", "error"])
