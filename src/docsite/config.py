"""Site build configuration and loading helpers."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docsite.errors import ConfigError, ValidationError

DEFAULT_TEMPLATE_NAME = "docs-rel-link.html"


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Where packages come from and where the assembled site goes.

    Relative directories are interpreted against the current working directory
    unless the config was produced by :meth:`with_root`.

    ``host`` and ``owner`` only shape the clone URL. The bundled redirect
    template links to ``github.com/voidvoxel``; sites hosted elsewhere should set
    ``template_path`` to a template with their own base URL.
    """

    host: str = "github.com"
    owner: str = "voidvoxel"
    packages_dir: Path = Path("packages")
    output_root: Path = Path("dist")
    source_root: Path = Path("src")
    template_path: Path | None = None
    release_channel: str = "channel/release"
    git_executable: str = "git"
    # git exits with 128 when the clone destination already exists.
    already_exists_exit_code: int = 128

    def __post_init__(self) -> None:
        for name in ("host", "owner", "release_channel", "git_executable"):
            if not getattr(self, name):
                raise ValidationError(
                    f"SiteConfig.{name} must not be empty.",
                    context={"field": name},
                )
        if self.already_exists_exit_code <= 0:
            raise ValidationError(
                "SiteConfig.already_exists_exit_code must be a positive exit code.",
                context={"value": str(self.already_exists_exit_code)},
            )

    def with_root(self, root: str | Path) -> SiteConfig:
        base = Path(root)
        template_path = self.template_path
        if template_path is not None and not template_path.is_absolute():
            template_path = base / template_path
        return dataclasses.replace(
            self,
            packages_dir=base / self.packages_dir,
            output_root=base / self.output_root,
            source_root=base / self.source_root,
            template_path=template_path,
        )

    def staging_path(self, package_name: str) -> Path:
        return self.packages_dir / package_name


_STR_FIELDS = ("host", "owner", "release_channel", "git_executable")
_PATH_FIELDS = ("packages_dir", "output_root", "source_root", "template_path")
_INT_FIELDS = ("already_exists_exit_code",)


def parse_config(raw: str) -> SiteConfig:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError("Invalid config JSON.", hint=str(exc)) from exc

    if not isinstance(payload, dict):
        raise ConfigError("Invalid config payload type.", hint="Expected a JSON object.")

    known = set(_STR_FIELDS) | set(_PATH_FIELDS) | set(_INT_FIELDS)
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ConfigError(
            "Unknown config keys.",
            hint=f"Supported keys: {', '.join(sorted(known))}.",
            context={"keys": ", ".join(unknown)},
        )

    overrides: dict[str, Any] = {}
    for key, value in payload.items():
        if key in _INT_FIELDS:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"Config key `{key}` must be an integer.")
            overrides[key] = value
        elif not isinstance(value, str):
            raise ConfigError(f"Config key `{key}` must be a string.")
        elif key in _PATH_FIELDS:
            overrides[key] = Path(value)
        else:
            overrides[key] = value

    try:
        return SiteConfig(**overrides)
    except ValidationError as exc:
        raise ConfigError(exc.message, context=exc.context) from exc


def read_config(path: str | Path) -> SiteConfig:
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(
            "Config file does not exist.",
            hint="Pass an existing JSON file to --config or omit the option.",
            context={"path": str(config_path)},
        ) from exc
    return parse_config(raw)
