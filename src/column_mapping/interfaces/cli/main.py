import argparse
import logging
from pathlib import Path
from typing import Optional, List
import colorlog
from tqdm import tqdm

try:
    # Prefer package-defined version
    from column_mapping import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


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


def _report_path(report_arg, default_dir: Path, suffix: str) -> Path:
    """Resolve the report file location from a `--report[-json] [DIR]` argument."""
    out_dir = default_dir if report_arg is True else Path(report_arg)
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir / f"column_mapping_report{suffix}"


def cmd_infer(args: argparse.Namespace) -> int:
    """Infer the column mapping of one or more document files.

    All inputs are read into a single sample (capped by --limit) before the
    mapping is generated, so columns spread over several files are unified.

    Returns:
        0 if columns were inferred
        1 if the sample contained no columns
        2 if an input or the configuration could not be read
    """
    from column_mapping.ingestion.readers import read_documents
    from column_mapping.mapping import build_report
    from column_mapping.mapping.config import DEFAULT_CONFIG, load_config

    # Load configuration
    config = DEFAULT_CONFIG
    if getattr(args, "config", None):
        try:
            config = load_config(Path(args.config))
        except (FileNotFoundError, ValueError) as e:
            logging.error("Invalid configuration: %s", e)
            return 2

    limit: Optional[int] = getattr(args, "limit", None)
    if limit is not None and limit <= 0:
        logging.error("--limit must be a positive number, got %s", limit)
        return 2

    # Read the sample
    documents: List[dict] = []
    inputs = [Path(p) for p in args.inputs]
    for path in tqdm(inputs, desc="Reading", unit="file", disable=len(inputs) < 2):
        remaining = None if limit is None else limit - len(documents)
        if remaining is not None and remaining <= 0:
            logging.info("Sample limit of %d documents reached, skipping %s", limit, path)
            continue
        try:
            documents.extend(read_documents(path, limit=remaining))
        except (FileNotFoundError, ValueError) as e:
            logging.error("%s", e)
            return 2

    locale = getattr(args, "locale", None) or config.default_locale
    report = build_report(
        documents, locale=locale, config=config, sources=[p.name for p in inputs]
    )

    if not report.columns:
        logging.error("No columns found in %d documents.", report.document_count)
        return 1

    for column in report.get_warnings():
        logging.warning("Column '%s': %s", column.name, column.warning)

    print(report.to_console_summary())

    default_dir = inputs[0].resolve().parent
    if getattr(args, "report", False):
        report_path = None
        try:
            report_path = _report_path(args.report, default_dir, ".md")
            report_path.write_text(report.to_markdown(), encoding="utf-8")
            logging.info("Saved Markdown report: %s", report_path)
        except OSError as e:
            logging.error("Failed to write report %s: %s", report_path or args.report, e)
            return 2
    if getattr(args, "report_json", False):
        report_path = None
        try:
            report_path = _report_path(args.report_json, default_dir, ".json")
            report_path.write_text(report.to_json(), encoding="utf-8")
            logging.info("Saved JSON report: %s", report_path)
        except OSError as e:
            logging.error("Failed to write report %s: %s", report_path or args.report_json, e)
            return 2

    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="column-mapping", description="Infer column schemas of semi-structured documents"
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_PACKAGE_VERSION}")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only", action="store_true", help="Only show warnings and errors"
    )
    p.add_argument("--errors-only", action="store_true", help="Only show errors")
    sub = p.add_subparsers(dest="command", required=True)

    p_infer = sub.add_parser("infer", help="Infer the column mapping of document files")
    p_infer.add_argument(
        "inputs",
        nargs="+",
        help="Input files (.json, .jsonl, .ndjson, .csv, optionally .gz)",
    )
    p_infer.add_argument(
        "--locale",
        default=None,
        help="Locale for number and date parsing (e.g., en-US, de-CH). Defaults to en-US",
    )
    p_infer.add_argument(
        "--config",
        default=None,
        help="YAML file overriding mapping limits (see column_mapping.mapping.config)",
    )
    p_infer.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of documents to sample across all inputs",
    )
    p_infer.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Generate a Markdown report. Optionally specify custom directory path.",
    )
    p_infer.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Generate a JSON report. Optionally specify custom directory path.",
    )
    p_infer.set_defaults(func=cmd_infer)

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
