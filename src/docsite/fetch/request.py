"""Fetch request model with argument validation."""

from __future__ import annotations

import re
from dataclasses import dataclass

from docsite.errors import ValidationError

# Semantic Versioning 2.0.0 grammar, without a leading "v".
SEMVER_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def is_semver(version: str) -> bool:
    return SEMVER_PATTERN.fullmatch(version) is not None


@dataclass(frozen=True, slots=True)
class FetchRequest:
    package_name: str
    repository_name: str
    tag: str | None = None
    version: str | None = None

    def __post_init__(self) -> None:
        if not self.package_name:
            raise ValidationError("Option `package_name` must be provided.")
        if not self.repository_name:
            raise ValidationError("Option `repository_name` must be provided.")
        for name in ("package_name", "repository_name"):
            _require_path_component(name, getattr(self, name))
        if self.tag and self.version:
            raise ValidationError(
                "Options `tag` and `version` are incompatible.",
                hint="Choose one option to keep and remove the other.",
                context={"tag": self.tag, "version": self.version},
            )
        if self.version and not is_semver(self.version):
            raise ValidationError(
                f'Invalid version "{self.version}".',
                hint="Use a semantic version such as 1.2.3 (without a leading `v`).",
                context={"version": self.version},
            )

    @property
    def ref(self) -> str | None:
        """Git tag to check out, derived from ``version`` when one was given."""
        if self.version:
            return f"v{self.version}"
        return self.tag or None


def _require_path_component(field_name: str, value: str) -> None:
    # Names become `packages/<name>`, which is removed after every build.
    if value in (".", "..") or any(sep in value for sep in ("/", "\\", "\0")):
        raise ValidationError(
            f"Option `{field_name}` must be a single path component.",
            hint="Use the bare repository name, without `.`, `..` or path separators.",
            context={field_name: value},
        )
