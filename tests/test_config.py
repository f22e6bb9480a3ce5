from pathlib import Path

import pytest

from docsite.config import SiteConfig, parse_config, read_config
from docsite.errors import ConfigError, ValidationError


def test_site_config_defaults() -> None:
    config = SiteConfig()

    assert config.host == "github.com"
    assert config.owner == "voidvoxel"
    assert config.packages_dir == Path("packages")
    assert config.output_root == Path("dist")
    assert config.template_path is None
    assert config.release_channel == "channel/release"
    assert config.already_exists_exit_code == 128
    assert config.staging_path("foo") == Path("packages/foo")


@pytest.mark.parametrize("field_name", ["host", "owner", "release_channel", "git_executable"])
def test_site_config_rejects_empty_strings(field_name: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        SiteConfig(**{field_name: ""})

    assert excinfo.value.context["field"] == field_name


def test_site_config_rejects_non_positive_sentinel() -> None:
    with pytest.raises(ValidationError):
        SiteConfig(already_exists_exit_code=0)


def test_with_root_resolves_relative_directories(tmp_path: Path) -> None:
    config = SiteConfig(template_path=Path("templates/page.html")).with_root(tmp_path)

    assert config.packages_dir == tmp_path / "packages"
    assert config.output_root == tmp_path / "dist"
    assert config.source_root == tmp_path / "src"
    assert config.template_path == tmp_path / "templates" / "page.html"


def test_parse_config_applies_overrides() -> None:
    config = parse_config(
        '{"owner": "someone", "output_root": "public", "already_exists_exit_code": 3}'
    )

    assert config.owner == "someone"
    assert config.output_root == Path("public")
    assert config.already_exists_exit_code == 3
    assert config.host == "github.com"


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        '{"unknown": "x"}',
        '{"host": 1}',
        '{"already_exists_exit_code": "128"}',
        '{"already_exists_exit_code": true}',
        '{"host": ""}',
    ],
)
def test_parse_config_rejects_malformed_payloads(raw: str) -> None:
    with pytest.raises(ConfigError) as excinfo:
        parse_config(raw)

    assert excinfo.value.code == "E_CONFIG"


def test_read_config_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        read_config(tmp_path / "missing.json")

    assert excinfo.value.hint is not None
    assert excinfo.value.context["path"].endswith("missing.json")
