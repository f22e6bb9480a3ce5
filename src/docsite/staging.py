"""Staging tree handling: artifact relocation, site sources, and cleanup."""

from __future__ import annotations

import shutil
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from docsite.config import SiteConfig
from docsite.errors import FilesystemError, ValidationError
from docsite.observability import StructuredLogger


def ensure_directory(path: str | Path) -> Path:
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def relocate(source: Path, destination: Path) -> Path:
    """Move *source* to *destination*, renaming in place when the filesystem allows."""
    if not source.exists():
        raise FilesystemError(
            "Expected staging path does not exist.",
            hint="Check that the package repository ships generated docs and examples.",
            context={"operation": "relocate", "source": str(source)},
        )
    if destination.exists():
        raise FilesystemError(
            "Relocation destination already exists.",
            hint="Run `docsite clean` before rebuilding the module.",
            context={"operation": "relocate", "destination": str(destination)},
        )
    ensure_directory(destination.parent)
    try:
        shutil.move(str(source), str(destination))
    except OSError as exc:
        raise FilesystemError(
            "Failed to move staging path.",
            hint=str(exc),
            context={
                "operation": "relocate",
                "source": str(source),
                "destination": str(destination),
            },
        ) from exc
    return destination


def relocate_docs(
    module: str,
    config: SiteConfig,
    logger: StructuredLogger | None = None,
) -> Path:
    source = config.staging_path(module) / "docs" / "html"
    destination = config.output_root / "docs" / module
    return _relocate_step(module, "docs", source, destination, logger)


def relocate_examples(
    module: str,
    config: SiteConfig,
    logger: StructuredLogger | None = None,
) -> Path:
    source = config.staging_path(module) / "examples"
    destination = config.output_root / "examples" / module
    return _relocate_step(module, "examples", source, destination, logger)


def _relocate_step(
    module: str,
    step: str,
    source: Path,
    destination: Path,
    logger: StructuredLogger | None,
) -> Path:
    moved = relocate(source, destination)
    if logger is not None:
        logger.log(
            operation="relocate",
            module=module,
            step=step,
            message=f"Moved {source} to {destination}.",
        )
    return moved


@contextmanager
def staging_directory(
    module: str,
    config: SiteConfig,
    logger: StructuredLogger | None = None,
) -> Iterator[Path]:
    """Yield the module's staging path and remove it on every exit path.

    Removal is best effort; a failure to delete is never raised. Paths that
    are not a direct child of ``packages_dir`` are refused up front.
    """
    path = config.staging_path(module)
    packages_root = config.packages_dir.resolve()
    if path.resolve().parent != packages_root:
        raise ValidationError(
            "Staging path escapes the packages directory.",
            hint="Use the bare repository name as the module identifier.",
            context={
                "operation": "cleanup",
                "path": str(path),
                "packages_dir": str(packages_root),
            },
        )
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        if logger is not None:
            logger.log(
                operation="cleanup",
                module=module,
                step="staging",
                message=f"Removed staging directory {path}.",
                level="info" if not path.exists() else "warning",
            )


def copy_site_sources(
    config: SiteConfig,
    patterns: Sequence[str] = ("**/*.html",),
    logger: StructuredLogger | None = None,
) -> list[Path]:
    """Copy files under ``source_root`` matching *patterns* into ``output_root``."""
    copied: list[Path] = []
    if not config.source_root.is_dir():
        return copied

    sources: set[Path] = set()
    for pattern in patterns:
        sources.update(path for path in config.source_root.glob(pattern) if path.is_file())

    for source in sorted(sources):
        target = config.output_root / source.relative_to(config.source_root)
        ensure_directory(target.parent)
        try:
            shutil.copy2(source, target)
        except OSError as exc:
            raise FilesystemError(
                "Failed to copy site source.",
                hint=str(exc),
                context={"operation": "copy_site_sources", "source": str(source)},
            ) from exc
        copied.append(target)

    if logger is not None:
        logger.log(
            operation="copy_site_sources",
            module=None,
            step=None,
            message=f"Copied {len(copied)} site source file(s).",
        )
    return copied
