"""Build scripts for assembling a documentation site from package repositories."""

from .build import BuildResult, build_module, clean, module_identifier
from .config import SiteConfig, read_config
from .errors import (
    ConfigError,
    DocsiteError,
    ErrorCode,
    FilesystemError,
    ProcessError,
    ValidationError,
)
from .fetch import FetchRequest, fetch_package, source_url
from .observability import StructuredLogger
from .process import Failure, ProcessOutcome, ProcessRunner, Success
from .redirect import generate_module_redirects, generate_redirect_page, render_redirect
from .staging import relocate_docs, relocate_examples, staging_directory

__all__ = [
    "BuildResult",
    "ConfigError",
    "DocsiteError",
    "ErrorCode",
    "Failure",
    "FetchRequest",
    "FilesystemError",
    "ProcessError",
    "ProcessOutcome",
    "ProcessRunner",
    "SiteConfig",
    "StructuredLogger",
    "Success",
    "ValidationError",
    "build_module",
    "clean",
    "fetch_package",
    "generate_module_redirects",
    "generate_redirect_page",
    "module_identifier",
    "read_config",
    "relocate_docs",
    "relocate_examples",
    "render_redirect",
    "source_url",
    "staging_directory",
]
