"""Shared pytest fixtures for configuration-focused tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a temporary repository root for portable path detection."""

    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")

    import mediarestore.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    monkeypatch.delenv("MEDIARESTORE_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def fresh_config(portable_repo_root: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Reset the configuration singleton; returns the expected config file path."""

    from mediarestore.config.config import Config

    monkeypatch.setattr(Config, "_instance", None)
    monkeypatch.setattr(Config, "_loaded_from", None)
    return portable_repo_root / "config" / "config.toml"
