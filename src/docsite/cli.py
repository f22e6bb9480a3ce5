"""Command-line entrypoint for the site build scripts.

Usage:
    docsite build <module>
    docsite docs-rel-links <module>
    docsite clean
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from docsite.build import build_module, clean, module_identifier
from docsite.config import SiteConfig, read_config
from docsite.errors import DocsiteError, ValidationError
from docsite.observability import StructuredLogger
from docsite.process import ProcessRunner
from docsite.redirect import generate_module_redirects


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docsite", description="Documentation site builder")
    parser.add_argument("--config", help="JSON file with SiteConfig overrides")
    parser.add_argument("--root", help="Directory that relative site paths resolve against")
    parser.add_argument(
        "--log-file",
        help="Write structured log records here (JSON lines, or CBOR for a .cbor suffix)",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not echo log records to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    build_p = sub.add_parser("build", help="Fetch a package and assemble its docs and examples")
    build_p.add_argument("module", help="Package repository name")

    links_p = sub.add_parser("docs-rel-links", help="Generate redirect pages for a module")
    links_p.add_argument("module", help="Package repository name")

    sub.add_parser("clean", help="Remove the output and staging trees")
    return parser


def load_site_config(args: argparse.Namespace) -> SiteConfig:
    config = read_config(args.config) if args.config else SiteConfig()
    if args.root:
        config = config.with_root(args.root)
    return config


def forwarded_options(args: argparse.Namespace) -> list[str]:
    options: list[str] = []
    if args.config:
        options.extend(["--config", str(Path(args.config).resolve())])
    if args.root:
        options.extend(["--root", str(Path(args.root).resolve())])
    if args.quiet:
        options.append("--quiet")
    return options


def cmd_build(args: argparse.Namespace, config: SiteConfig, logger: StructuredLogger) -> None:
    module = module_identifier(args.module)
    result = build_module(
        module,
        config=config,
        runner=ProcessRunner(logger=logger),
        logger=logger,
        cli_options=forwarded_options(args),
    )
    print(f"Built {result.module} into {config.output_root}")


def cmd_docs_rel_links(
    args: argparse.Namespace,
    config: SiteConfig,
    logger: StructuredLogger,
) -> None:
    # Called by `build` with an identifier that is already encoded.
    if args.module in ("", ".", "..") or "/" in args.module:
        raise ValidationError(
            "A package name is required as the module identifier.",
            context={"module": args.module},
        )
    module = args.module
    for page in generate_module_redirects(module, config, logger):
        print(f"Wrote {page}")


def cmd_clean(args: argparse.Namespace, config: SiteConfig, logger: StructuredLogger) -> None:
    clean(config, logger)


COMMANDS = {
    "build": cmd_build,
    "docs-rel-links": cmd_docs_rel_links,
    "clean": cmd_clean,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = StructuredLogger(stream=None if args.quiet else sys.stderr)

    try:
        config = load_site_config(args)
        COMMANDS[args.command](args, config, logger)
    except DocsiteError as exc:
        logger.log(
            operation=args.command,
            module=getattr(args, "module", None),
            step=None,
            message=exc.message,
            level="error",
            extra=exc.to_dict(),
        )
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        if args.log_file:
            logger.write(args.log_file)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
