"""Pytest configuration and shared fixtures for excut tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from excut.domain import Cutout, CuttingConfig


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI or REST API"
    )


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def bar_config() -> CuttingConfig:
    """6 m aluminium bar cut with a 3 mm blade."""
    return CuttingConfig(stock_size=6000, kerf=3)


@pytest.fixture
def frame_cutouts() -> list[Cutout]:
    """Pieces for a small window frame, in parts list order."""
    return [
        Cutout("Rail", 1200),
        Cutout("Rail", 1200),
        Cutout("Stile", 2100),
        Cutout("Stile", 2100),
        Cutout("Mullion", 1680),
        Cutout("Bead", 850),
        Cutout("Bead", 850),
        Cutout("Bead", 850),
        Cutout("Bead", 850),
    ]


@pytest.fixture
def parts_csv(tmp_path: Path) -> Path:
    """CSV cutting table on disk with a header row."""
    path = tmp_path / "parts.csv"
    path.write_text(
        "label,count,size\n"
        "Rail,2,1200\n"
        "Stile,2,2100\n"
        "Mullion,1,1680\n"
        "Bead,4,850\n",
        encoding="utf-8",
    )
    return path
