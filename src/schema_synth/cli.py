"""Command-line interface for schema_synth.

Sub-commands
------------
generate   Generate one or more values from a JSON/YAML schema file
dataset    Generate, validate and save a dataset
selftest   Run the randomized self-test suite
env        Print dependency versions
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config.random_state import create_rng
from .config.settings import Settings
from .core.generator import SchemaGenerator
from .exceptions import SchemaSynthError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".json", ".yml", ".yaml"}


def _setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure root logger to log to stderr and optionally a log file.

    Args:
        verbose: If ``True`` set console log level to ``DEBUG`` else ``INFO``.
        log_file: Optional path to a log file, always written at ``DEBUG``.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers = []

    # stdout is reserved for generated JSON
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(log_format))
    handlers.append(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    logging.debug("Logging initialised. Log file: %s", log_file)


def _load_schema(schema_path: Path | str) -> Dict[str, Any]:
    """Load a JSON or YAML schema document.

    Args:
        schema_path: Path to a ``.json``, ``.yml`` or ``.yaml`` file.

    Returns:
        Parsed schema.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file extension is unsupported or the content is malformed.
    """
    path = Path(schema_path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported schema format: {path.suffix}")

    if path.suffix.lower() == ".json":
        return json.loads(path.read_text(encoding="utf-8"))

    try:
        import yaml  # type: ignore
    except ModuleNotFoundError as exc:
        raise ModuleNotFoundError(
            "PyYAML is required for YAML schema files. Install with 'pip install PyYAML'"
        ) from exc
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Malformed YAML in {path}: {exc}") from exc


def _load_settings(args: argparse.Namespace) -> Settings:
    if getattr(args, "config", None):
        settings = Settings.from_toml(args.config)
    else:
        settings = Settings.from_preset(getattr(args, "preset", None) or "standard")
    if getattr(args, "seed", None) is not None:
        settings = settings.update(random_seed=args.seed)
    return settings


# -----------------------------------------------------------------------------
# Sub-command implementations
# -----------------------------------------------------------------------------

def _cmd_generate(args: argparse.Namespace) -> int:
    """Entry point for the ``generate`` sub-command."""
    try:
        schema = _load_schema(args.schema)
        settings = _load_settings(args)
    except (OSError, ValueError, TypeError, ImportError) as exc:
        logger.error("Failed to load input: %s", exc)
        return 1

    generator = SchemaGenerator(rng=create_rng(settings.random_seed),
                                defaults=settings.to_defaults())
    try:
        if args.count is None:
            result = generator.generate(schema)
        else:
            result = generator.generate_many(schema, args.count)
    except (SchemaSynthError, KeyError, ValueError, AttributeError) as exc:
        logger.error("Generation failed: %s", exc)
        return 1

    text = json.dumps(result, indent=args.indent)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote output to %s", args.output)
    else:
        sys.stdout.write(text + "\n")
    return 0


def _cmd_dataset(args: argparse.Namespace) -> int:
    """Entry point for the ``dataset`` sub-command."""
    from .data.dataset_builder import DatasetBuilder

    try:
        schema = _load_schema(args.schema)
        settings = _load_settings(args)
    except (OSError, ValueError, TypeError, ImportError) as exc:
        logger.error("Failed to load input: %s", exc)
        return 1

    builder = DatasetBuilder(args.output_dir, settings=settings)
    try:
        dataset = builder.create_dataset(schema, n_values=args.count, name=args.name)
    except (SchemaSynthError, KeyError, ValueError, AttributeError) as exc:
        logger.error("Generation failed: %s", exc)
        return 1

    path = builder.save_dataset(dataset, format=args.format)
    validation = dataset.metadata.validation_results
    quality = validation['quality_assessment']
    logger.info("Dataset %s: %d value(s), validation rate %.3f, quality %s",
                dataset.metadata.name, validation['n_values'],
                validation['validation_rate'], quality['overall_quality'])
    for warning in quality['warnings']:
        logger.warning(warning)
    for issue in quality['issues']:
        logger.error(issue)
    sys.stdout.write(f"{path}\n")
    return 0 if not quality['issues'] else 2


def _cmd_selftest(args: argparse.Namespace) -> int:
    """Entry point for the ``selftest`` sub-command."""
    from .data.self_test import format_report, run_random_tests

    report = run_random_tests(SchemaGenerator(rng=create_rng(args.seed)))
    for line in format_report(report):
        logger.info(line)

    if report.all_passed:
        return 0
    logger.error("Failed checks: %s", ", ".join(report.failures))
    return 2


def _cmd_env(args: argparse.Namespace) -> int:
    """Entry point for the ``env`` sub-command."""
    from .config.validate import check_environment, print_environment_info

    print_environment_info()
    try:
        check_environment()
    except RuntimeError as exc:
        logger.error("%s", exc)
        return 1
    return 0


# -----------------------------------------------------------------------------
# Argument parsing
# -----------------------------------------------------------------------------

def _add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("schema", type=str, help="Path to JSON/YAML schema file.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--config", type=str, default=None,
                        help="Path to TOML settings file.")
    source.add_argument("--preset", choices=["standard", "minimal", "large"], default=None,
                        help="Generation defaults preset.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-synth",
        description="Generate synthetic data from JSON Schema descriptions",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging output.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG logs to this file.",
    )

    sub_parsers = parser.add_subparsers(dest="command", required=True)

    # generate ----------------------------------------------------------------
    gen_parser = sub_parsers.add_parser("generate", help="Generate values from a schema")
    _add_settings_arguments(gen_parser)
    gen_parser.add_argument("--count", "-n", type=int, default=None,
                            help="Generate a list of this many values.")
    gen_parser.add_argument("--indent", type=int, default=2, help="JSON indentation.")
    gen_parser.add_argument("--output", "-o", type=str, default=None,
                            help="Write JSON here instead of stdout.")
    gen_parser.set_defaults(func=_cmd_generate)

    # dataset -----------------------------------------------------------------
    ds_parser = sub_parsers.add_parser("dataset", help="Generate and save a validated dataset")
    _add_settings_arguments(ds_parser)
    ds_parser.add_argument("--count", "-n", type=int, required=True,
                           help="Number of values to generate.")
    ds_parser.add_argument("--name", type=str, default=None, help="Dataset name.")
    ds_parser.add_argument("--output-dir", type=str, default=None,
                           help="Directory for saved datasets (defaults to the configured output_dir).")
    ds_parser.add_argument("--format", choices=["json", "jsonl"], default="json",
                           help="Output format.")
    ds_parser.set_defaults(func=_cmd_dataset)

    # selftest ----------------------------------------------------------------
    st_parser = sub_parsers.add_parser("selftest", help="Run the randomized self-test suite")
    st_parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    st_parser.set_defaults(func=_cmd_selftest)

    # env ---------------------------------------------------------------------
    env_parser = sub_parsers.add_parser("env", help="Show dependency versions")
    env_parser.set_defaults(func=_cmd_env)

    return parser


# -----------------------------------------------------------------------------
# Main entry point
# -----------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point. Parse ``argv`` and dispatch to sub-command implementation."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Logging must be set up *after* parsing to respect --verbose flag.
    _setup_logging(verbose=args.verbose, log_file=args.log_file)

    return args.func(args)  # type: ignore[attr-defined]


if __name__ == "__main__":
    sys.exit(main())
