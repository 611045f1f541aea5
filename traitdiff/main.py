"""Command-line entry points for traitdiff."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.markup import escape

from .analyzers.base import ConfigurationError, Dialect, SourceDocument, TraitDiffError
from .analyzers.registry import create_default_registry
from .compare.engine import compare_files
from .extractors.service_block import extract_service_block
from .store.output import ReportRenderer, render_canonical_document

console = Console()
logger = logging.getLogger(__name__)


class _Parser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stdout)
        console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
        raise SystemExit(1)


def load_config(config_path: Path | None) -> dict:
    """Load configuration from YAML file; no path means built-in defaults."""
    if config_path is None:
        return {}

    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        config = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read config {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Config {config_path} must be a mapping")
    return config


def resolve_dialect(config_path: str | None, dialect_name: str | None) -> Dialect:
    config = load_config(Path(config_path) if config_path else None)
    registry = create_default_registry(config)
    dialect = registry.select(config, override=dialect_name)
    logger.debug("Using dialect %s (marker %s)", dialect.name, dialect.marker)
    return dialect


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        help="Path to a YAML configuration file defining dialects",
    )
    parser.add_argument(
        "--dialect", "-d",
        help="Dialect to use (default: tarpc, or the config's 'dialect' key)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log extraction details to stderr",
    )


def _fail(error: TraitDiffError) -> int:
    console.print(f"[red]Error:[/red] {escape(str(error))}", soft_wrap=True)
    return 1


def run_generate(path: str, dialect: Dialect, output: str | None = None) -> None:
    """Print (or write) the canonical document for the service trait in ``path``."""
    document = SourceDocument.load(path)
    block = extract_service_block(document.lines, dialect, document.name)
    rendered = render_canonical_document(block, dialect)

    if output:
        Path(output).write_text(rendered, encoding="utf-8")
        console.print(f"[green]✓[/green] Wrote {escape(output)}", soft_wrap=True)
    else:
        sys.stdout.write(rendered)


def run_diff(path1: str, path2: str, dialect: Dialect, output_format: str = "text") -> None:
    """Print the difference report between the service traits of two files."""
    result = compare_files(path1, path2, dialect)
    renderer = ReportRenderer(result)
    rendered = renderer.render_json() if output_format == "json" else renderer.render_text()
    sys.stdout.write(rendered)


def generate_main(argv: list[str] | None = None) -> int:
    """Canonicalizer entry point: ``traitdiff-generate <path>``."""
    parser = _Parser(
        prog="traitdiff-generate",
        description="Extract the service trait of a file as a canonical document",
    )
    parser.add_argument("path", help="Source file containing the service trait")
    parser.add_argument("--output", "-o", help="Write the document here instead of stdout")
    _add_common_arguments(parser)
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        dialect = resolve_dialect(args.config, args.dialect)
        run_generate(args.path, dialect, args.output)
    except TraitDiffError as e:
        return _fail(e)
    except OSError as e:
        console.print(
            f"[red]Error:[/red] Could not write {escape(str(args.output))}: {escape(str(e))}",
            soft_wrap=True,
        )
        return 1
    return 0


def diff_main(argv: list[str] | None = None) -> int:
    """Differ entry point: ``traitdiff-diff <path1> <path2>``."""
    parser = _Parser(
        prog="traitdiff-diff",
        description="Report method signature differences between two service traits",
    )
    parser.add_argument("path1", help="First file (its extra methods are new or missing)")
    parser.add_argument("path2", help="Second file (its extra methods are removed)")
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )
    _add_common_arguments(parser)
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        dialect = resolve_dialect(args.config, args.dialect)
        run_diff(args.path1, args.path2, dialect, args.format)
    except TraitDiffError as e:
        return _fail(e)
    return 0


COMMANDS = {
    "generate": generate_main,
    "diff": diff_main,
}


def main(argv: list[str] | None = None) -> int:
    """Dispatch ``generate`` or ``diff`` when run as a module."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in COMMANDS:
        console.print(f"Usage: python -m traitdiff.main {{{'|'.join(COMMANDS)}}} ...")
        return 1
    return COMMANDS[argv[0]](argv[1:])


if __name__ == "__main__":
    sys.exit(main())
