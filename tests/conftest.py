"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsite.config import SiteConfig
from helpers import FakeRunner


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    """Site configuration rooted in a per-test temporary directory."""
    return SiteConfig().with_root(tmp_path)


@pytest.fixture
def fake_runner(site_config: SiteConfig) -> FakeRunner:
    return FakeRunner(config=site_config)
