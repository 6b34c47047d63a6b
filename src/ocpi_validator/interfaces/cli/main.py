import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import colorlog

from ocpi_validator.core.enums import ObjectType

# Object type choices for argparse - used across all commands
OBJECT_TYPE_CHOICES = [t.value for t in ObjectType]

try:
    # Prefer package-defined version
    from ocpi_validator import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = None  # type: ignore[assignment]
    try:
        # Fallback to installed package metadata
        from importlib.metadata import version as _pkg_version, PackageNotFoundError

        _PACKAGE_VERSION = _pkg_version("ocpi-validator")  # type: ignore[assignment]
    except PackageNotFoundError:
        _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]

# Exit codes
EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2
EXIT_IO = 3


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _load_overrides(profile: Optional[str]) -> Dict[str, Tuple[str, ...]]:
    """Load required-field overrides from ``--profile`` (empty when not given).

    Raises:
        FileNotFoundError: If the profile does not exist.
        ValueError: If the profile is invalid.
    """
    if not profile:
        return {}
    from ocpi_validator.validation.config import load_profile

    return load_profile(Path(profile))


def _report_path(option, first_file: Path, object_type: ObjectType, suffix: str) -> Path:
    """Resolve a ``--report``/``--report-json`` target file.

    ``option`` is True (flag given without a directory: write next to the
    first payload) or a directory path.
    """
    if option is True:
        report_dir = first_file.resolve().parent
    else:
        report_dir = Path(option)
        report_dir.mkdir(parents=True, exist_ok=True)
    return report_dir / f"ocpi_{object_type.value}_validation.{suffix}"


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate one or more OCPI payload files.

    Every file is validated as the same object type. For each file the
    outcome is printed as ``Validation successful`` or ``Validation failed``
    followed by one line per error.

    Returns:
        0 if all payloads are valid
        1 if any payload is invalid
        2 on usage or configuration errors (unknown type, bad profile)
        3 on I/O errors (missing or unreadable file)
    """
    from ocpi_validator.core.schemas import build_schemas
    from ocpi_validator.validation.registry import build_validators, validate_files

    # Parse object type
    try:
        object_type = ObjectType.parse(args.type)
    except ValueError as e:
        logging.error("%s", e)
        return EXIT_USAGE

    # Resolve validators for the requested profile
    try:
        overrides = _load_overrides(getattr(args, "profile", None))
        validators = build_validators(build_schemas(overrides)) if overrides else None
    except FileNotFoundError as e:
        logging.error("Profile error: %s", e)
        return EXIT_USAGE
    except ValueError as e:
        logging.error("Invalid profile: %s", e)
        return EXIT_USAGE

    files: List[Path] = [Path(f) for f in args.files]
    logging.debug("Validating %d file(s) as %s", len(files), object_type.value)

    try:
        report = validate_files(files, object_type, validators)
    except FileNotFoundError as e:
        logging.error("Could not read file: %s", e)
        return EXIT_IO
    except OSError as e:
        logging.error("Error reading payload: %s", e)
        return EXIT_IO

    # Per-file outcome
    multiple = len(report.results) > 1
    for item in report.results:
        prefix = f"{item.source}: " if multiple else ""
        if item.is_valid:
            print(f"{prefix}✅ Validation successful")
        else:
            print(f"{prefix}❌ Validation failed")
            for error in item.result.errors:
                print(f"- {error.message}")

    if multiple:
        failed = len(report.get_failed())
        logging.info(
            "Validated %d payloads: %d valid, %d invalid",
            len(report.results),
            len(report.results) - failed,
            failed,
        )

    try:
        # Generate markdown report if requested
        if getattr(args, "report", False):
            report_path = _report_path(args.report, files[0], object_type, "md")
            with open(report_path, "w", encoding="utf-8") as f:
                f.write(report.to_markdown())
            logging.info("Markdown report saved: %s", report_path)

        # Generate JSON report if requested
        if getattr(args, "report_json", False):
            report_path = _report_path(args.report_json, files[0], object_type, "json")
            with open(report_path, "w", encoding="utf-8") as f:
                f.write(report.to_json())
            logging.info("JSON report saved: %s", report_path)

        # Flat per-error table
        if getattr(args, "summary_csv", None):
            csv_path = Path(args.summary_csv)
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            report.to_dataframe().to_csv(csv_path, index=False)
            logging.info("Summary CSV saved: %s", csv_path)
    except OSError as e:
        logging.error("Failed to write report: %s", e)
        return EXIT_IO

    if report.has_errors():
        logging.debug("Validation found %d errors", report.get_error_count())
        return EXIT_INVALID
    return EXIT_OK


def cmd_profile(args: argparse.Namespace) -> int:
    """Print the effective required-field profile as YAML."""
    from ocpi_validator.validation.config import dump_profile

    try:
        overrides = _load_overrides(getattr(args, "profile", None))
    except FileNotFoundError as e:
        logging.error("Profile error: %s", e)
        return EXIT_USAGE
    except ValueError as e:
        logging.error("Invalid profile: %s", e)
        return EXIT_USAGE

    print(dump_profile(overrides), end="")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ocpi-validator",
        description=f"OCPI Validator (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Validate OCPI JSON payload files")
    p_validate.add_argument(
        "files",
        nargs="+",
        help="Path(s) to JSON files, each holding one OCPI object",
    )
    p_validate.add_argument(
        "-t",
        "--type",
        default=ObjectType.LOCATION.value,
        type=str.lower,
        choices=OBJECT_TYPE_CHOICES,
        help="Type of OCPI object to validate (case insensitive). Defaults to location.",
    )
    p_validate.add_argument(
        "--profile",
        default=None,
        help="Path to a YAML required-field profile (see config/default_profile.yaml)",
    )
    p_validate.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Generate detailed Markdown report. Optionally specify custom directory path.",
    )
    p_validate.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Generate detailed JSON report. Optionally specify custom directory path.",
    )
    p_validate.add_argument(
        "--summary-csv",
        default=None,
        help="Write a CSV with one row per error (one row per valid payload)",
    )
    p_validate.set_defaults(func=cmd_validate)

    p_profile = sub.add_parser("profile", help="Print the effective required-field profile")
    p_profile.add_argument(
        "--profile",
        default=None,
        help="Path to a YAML profile to merge over the defaults",
    )
    p_profile.set_defaults(func=cmd_profile)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
