"""Shared fixtures for docsite tests."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from docsite.config import (
    SiteConfig,
    SiteConfigBuilder,
    dropdown,
    leaf,
    link,
    section,
)
from docsite.config.models import ComputedLabel

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def sample_config_path() -> Path:
    """Return the checked-in canonical site declaration."""
    return REPO_ROOT / "config" / "site.yaml"


@pytest.fixture
def write_config(tmp_path: Path) -> typ.Callable[[str], Path]:
    """Return a helper that writes YAML text to ``site.yaml`` under ``tmp_path``."""

    def _write(text: str) -> Path:
        path = tmp_path / "site.yaml"
        path.write_text(text.strip() + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def guide_site() -> SiteConfig:
    """Build a small site with nested guide prefixes and a version dropdown."""
    return (
        SiteConfigBuilder("SilentCast", description="Hotkey task runner")
        .nav(
            link("Guide", "/guide/"),
            dropdown(
                ComputedLabel(template="v{value}"),
                link("Changelog", "https://github.com/example/silentcast/releases"),
                link("Contributing", "/contributing"),
            ),
        )
        .sidebar(
            "/guide/",
            section("Section A", leaf("Installation", "/guide/installation")),
        )
        .sidebar(
            "/guide/advanced/",
            section(
                "Section B",
                leaf("Logging", "/guide/advanced/logging"),
                collapsed=True,
            ),
        )
        .build(signals={"version": "1.4.0"})
    )
