"""Per-module site build pipeline and output cleaning."""

from __future__ import annotations

import shutil
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from docsite.config import SiteConfig
from docsite.errors import ValidationError
from docsite.fetch import FetchRequest, fetch_package
from docsite.observability import StructuredLogger
from docsite.process import Runner, require_success
from docsite.redirect import MODULE_REDIRECTS
from docsite.staging import (
    copy_site_sources,
    ensure_directory,
    relocate_docs,
    relocate_examples,
    staging_directory,
)

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def module_identifier(raw: str) -> str:
    """Return *raw* percent-encoded as a single URI/path component."""
    if not raw:
        raise ValidationError(
            "A module identifier is required.",
            hint="Pass the package repository name, e.g. `docsite build my-package`.",
        )
    encoded = quote(raw, safe=_URI_COMPONENT_SAFE)
    if encoded in (".", ".."):
        raise ValidationError(
            f"Module identifier `{raw}` is not a package name.",
            hint="Pass the package repository name, e.g. `docsite build my-package`.",
            context={"module": raw},
        )
    return encoded


@dataclass(frozen=True, slots=True)
class BuildResult:
    module: str
    docs_path: Path
    examples_path: Path
    redirect_pages: tuple[Path, ...] = ()
    site_sources: tuple[Path, ...] = ()


def docs_rel_links_command(module: str, cli_options: Sequence[str] = ()) -> list[str]:
    return [sys.executable, "-m", "docsite", *cli_options, "docs-rel-links", module]


def build_module(
    module: str,
    *,
    config: SiteConfig,
    runner: Runner,
    logger: StructuredLogger | None = None,
    cli_options: Sequence[str] = (),
) -> BuildResult:
    """Fetch *module*, move its docs and examples into the output tree, and link them.

    The staging clone is removed whether or not the build succeeds.
    *cli_options* are forwarded to the ``docs-rel-links`` child process so it
    resolves the same configuration.
    """
    logger = logger if logger is not None else StructuredLogger()
    request = FetchRequest(package_name=module, repository_name=module)
    ensure_directory(config.output_root / "docs")
    ensure_directory(config.output_root / "examples")

    with staging_directory(module, config, logger):
        outcome = fetch_package(request, config=config, runner=runner, logger=logger)
        require_success(outcome, operation="fetch", command=[config.git_executable, "clone"])

        docs_path = relocate_docs(module, config, logger)

        command = docs_rel_links_command(module, cli_options)
        outcome = runner.run(command[0], command[1:])
        require_success(outcome, operation="docs-rel-links", command=command)
        redirect_pages = tuple(
            config.output_root / "docs" / module / name / "index.html"
            for name in MODULE_REDIRECTS
        )

        examples_path = relocate_examples(module, config, logger)

    site_sources = tuple(copy_site_sources(config, logger=logger))
    logger.log(
        operation="build",
        module=module,
        step=None,
        message="Module build finished.",
    )
    return BuildResult(
        module=module,
        docs_path=docs_path,
        examples_path=examples_path,
        redirect_pages=redirect_pages,
        site_sources=site_sources,
    )


def clean(config: SiteConfig, logger: StructuredLogger | None = None) -> None:
    """Remove the output and staging trees; missing directories are ignored."""
    for directory in (config.output_root, config.packages_dir):
        shutil.rmtree(directory, ignore_errors=True)
        if logger is not None:
            logger.log(
                operation="clean",
                module=None,
                step=None,
                message=f"Removed {directory}.",
            )


__all__ = [
    "BuildResult",
    "build_module",
    "clean",
    "docs_rel_links_command",
    "module_identifier",
]
