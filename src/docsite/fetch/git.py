"""Git clone of package repositories into the staging tree."""

from __future__ import annotations

from urllib.parse import urlsplit

from docsite.config import SiteConfig
from docsite.errors import ValidationError
from docsite.fetch.request import FetchRequest
from docsite.observability import StructuredLogger
from docsite.process import ProcessOutcome, Runner, Success


def source_url(request: FetchRequest, config: SiteConfig) -> str:
    """Return the canonical repository URL, with ``#<tag>`` when a ref is set."""
    url = f"https://{config.host}/{config.owner}/{request.repository_name}"
    ref = request.ref
    if ref is not None:
        url += f"#{ref}"
    _validate_url(url)
    return url


def clone_command(request: FetchRequest, config: SiteConfig) -> list[str]:
    """Return git arguments (without the executable) for cloning *request*."""
    parts = urlsplit(source_url(request, config))
    argv = ["clone", parts._replace(fragment="").geturl()]
    if parts.fragment:
        # git has no notion of URL fragments; the tag travels as --branch.
        argv.extend(["--branch", parts.fragment])
    argv.append(str(config.staging_path(request.package_name)))
    return argv


def fetch_package(
    request: FetchRequest,
    *,
    config: SiteConfig,
    runner: Runner,
    logger: StructuredLogger | None = None,
) -> ProcessOutcome:
    """Clone *request* into the staging tree.

    The configured "already exists" exit code is reported as success, so
    fetching into a populated staging directory is a no-op.
    """
    logger = logger if logger is not None else StructuredLogger()
    argv = clone_command(request, config)
    logger.log(
        operation="fetch",
        module=request.package_name,
        step="clone",
        message=f"Cloning {source_url(request, config)}.",
        extra={"argv": argv},
    )
    outcome = runner.run(
        config.git_executable,
        argv,
        accept_exit_codes=(config.already_exists_exit_code,),
    )
    if isinstance(outcome, Success) and outcome.exit_code == config.already_exists_exit_code:
        logger.log(
            operation="fetch",
            module=request.package_name,
            step="clone",
            message="Clone destination already exists; treating as fetched.",
            level="warning",
            extra={"exit_code": outcome.exit_code},
        )
    return outcome


def _validate_url(url: str) -> None:
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError as exc:
        raise ValidationError(
            "Invalid repository URL.",
            hint=str(exc),
            context={"operation": "fetch", "url": url},
        ) from exc
    if parts.scheme not in ("http", "https") or not hostname or any(ch.isspace() for ch in url):
        raise ValidationError(
            "Invalid repository URL.",
            hint="Check the configured host/owner and the repository name.",
            context={"operation": "fetch", "url": url},
        )
