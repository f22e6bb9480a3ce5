"""Redirect page generation from the ``docs-rel-link`` HTML template.

Placeholders are replaced with JSON-encoded strings. That keeps quotes from
breaking out of the surrounding script literal; it does not make arbitrary
values safe to embed in HTML.
"""

from __future__ import annotations

import json
import re
from importlib import resources
from pathlib import Path

from docsite.config import DEFAULT_TEMPLATE_NAME, SiteConfig
from docsite.errors import FilesystemError
from docsite.observability import StructuredLogger
from docsite.staging import ensure_directory

MODULE_BASE_NAME = "$_MODULE_BASE_NAME"
LINK_DIRECTORY_NAME = "$_LINK_DIRECTORY_NAME"
GIT_REPOSITORY_TAG = "$_GIT_REPOSITORY_TAG"
DIRECTORY_NAME = "$_DIRECTORY_NAME"

# `$_DIRECTORY_NAME` is a suffix of `$_LINK_DIRECTORY_NAME`, so all tokens are
# matched in one left-to-right pass instead of sequential replaces.
PLACEHOLDER_PATTERN = re.compile(
    "|".join(
        re.escape(token)
        for token in (MODULE_BASE_NAME, LINK_DIRECTORY_NAME, GIT_REPOSITORY_TAG, DIRECTORY_NAME)
    )
)

# Redirect pages written for every module: directory name -> link target.
MODULE_REDIRECTS: dict[str, str] = {
    "docs": "docs/md",
    "examples": "examples",
}


def load_template(config: SiteConfig) -> str:
    if config.template_path is None:
        template = resources.files("docsite").joinpath("templates", DEFAULT_TEMPLATE_NAME)
        return template.read_text(encoding="utf-8")
    try:
        return config.template_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FilesystemError(
            "Redirect template does not exist.",
            hint="Point `template_path` at an existing HTML template.",
            context={"operation": "load_template", "path": str(config.template_path)},
        ) from exc
    except OSError as exc:
        raise FilesystemError(
            "Redirect template could not be read.",
            hint=str(exc),
            context={"operation": "load_template", "path": str(config.template_path)},
        ) from exc


def render_redirect(
    template: str,
    *,
    module_base_name: str,
    directory_name: str,
    release_channel: str,
    link_directory_name: str | None = None,
) -> str:
    values = {
        MODULE_BASE_NAME: module_base_name,
        LINK_DIRECTORY_NAME: link_directory_name or directory_name,
        GIT_REPOSITORY_TAG: release_channel,
        DIRECTORY_NAME: directory_name,
    }
    return PLACEHOLDER_PATTERN.sub(lambda match: json.dumps(values[match.group(0)]), template)


def generate_redirect_page(
    module_base_name: str,
    directory_name: str,
    output_dir: str | Path,
    *,
    config: SiteConfig,
    link_directory_name: str | None = None,
    logger: StructuredLogger | None = None,
) -> Path:
    """Write ``<output_dir>/<directory_name>/index.html`` and return its path."""
    html = render_redirect(
        load_template(config),
        module_base_name=module_base_name,
        directory_name=directory_name,
        release_channel=config.release_channel,
        link_directory_name=link_directory_name,
    )
    page_path = Path(output_dir) / directory_name / "index.html"
    try:
        ensure_directory(page_path.parent)
        page_path.write_text(html, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(
            "Failed to write redirect page.",
            hint=str(exc),
            context={"operation": "docs-rel-links", "path": str(page_path)},
        ) from exc
    if logger is not None:
        logger.log(
            operation="docs-rel-links",
            module=module_base_name,
            step=directory_name,
            message=f"Wrote redirect page {page_path}.",
        )
    return page_path


def generate_module_redirects(
    module_base_name: str,
    config: SiteConfig,
    logger: StructuredLogger | None = None,
) -> list[Path]:
    output_dir = config.output_root / "docs" / module_base_name
    return [
        generate_redirect_page(
            module_base_name,
            directory_name,
            output_dir,
            config=config,
            link_directory_name=link_directory_name,
            logger=logger,
        )
        for directory_name, link_directory_name in MODULE_REDIRECTS.items()
    ]
