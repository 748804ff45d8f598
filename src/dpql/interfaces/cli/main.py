import argparse
import logging
from pathlib import Path
from typing import List, Optional
import importlib
import colorlog

from dpql.config import Settings, load_settings
from dpql.core.enums import Operation
from dpql.core.errors import DPQLError, InputError
from dpql.core.registry import DatasetRegistry

# Operation choices for argparse
OPERATION_CHOICES = [op.value for op in Operation]
FORMAT_CHOICES = ["text", "json", "markdown"]

try:
    from dpql import __version__ as _PACKAGE_VERSION
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


def _settings(args: argparse.Namespace) -> Settings:
    return load_settings(getattr(args, "config", None))


def _load_registry(args: argparse.Namespace, settings: Settings) -> DatasetRegistry:
    """Load every --csv file into a fresh registry.

    Names come from --name (positionally matched to --csv), else the file stem.

    Raises:
        InputError: If no files are given, a name is duplicated, or a file
            cannot be parsed.
    """
    from dpql.ingestion import load_csv_file

    paths: List[str] = list(getattr(args, "csv", None) or [])
    names: List[str] = list(getattr(args, "name", None) or [])
    if not paths:
        raise InputError("At least one --csv file is required")
    if len(names) > len(paths):
        raise InputError("More --name values than --csv files")

    registry = DatasetRegistry()
    for i, path in enumerate(paths):
        name = names[i] if i < len(names) else None
        dataset = load_csv_file(
            path,
            name=name,
            delimiter=settings.csv_delimiter,
            encoding=settings.csv_encoding,
        )
        if dataset.name in registry:
            raise InputError(
                f"Duplicate dataset name '{dataset.name}'; use --name to disambiguate"
            )
        registry.add(dataset.name, dataset)
    return registry


def _render(result, fmt: str) -> str:
    if fmt == "json":
        return result.to_json()
    if fmt == "markdown":
        return result.to_markdown()
    return result.to_console()


def _emit(content: str, output: Optional[str]) -> None:
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(content)
        logging.info("Result saved: %s", out_path)
    else:
        print(content)


def cmd_query(args: argparse.Namespace) -> int:
    """Run a DPQL query over the given CSV files.

    The operation comes from --operation when given, otherwise from
    classifying the query text.

    Returns:
        0 on success (including an empty result)
        2 on input errors
    """
    runner = importlib.import_module("dpql.discovery.runner")
    from dpql.core.query import classify_query

    try:
        settings = _settings(args)
        registry = _load_registry(args, settings)
        if getattr(args, "operation", None):
            operation = Operation(args.operation)
        else:
            operation = classify_query(args.query or "").operation
    except (DPQLError, FileNotFoundError, ValueError) as e:
        logging.error("%s", e)
        return 2

    logging.info("Executing %s over %d datasets", operation.value, len(registry))
    result = runner.execute_query(operation, registry.snapshot())
    for msg in result.warnings:
        logging.warning(msg)
    _emit(_render(result, args.format), getattr(args, "output", None))
    return 0


def cmd_ucc(args: argparse.Namespace) -> int:
    """Find unique column combinations in the given CSV files."""
    args.operation = Operation.FIND_UNIQUE_KEYS.value
    args.query = None
    return cmd_query(args)


def cmd_classify(args: argparse.Namespace) -> int:
    """Print the operation a query would run."""
    from dpql.core.query import classify_query

    try:
        parsed = classify_query(args.query)
    except InputError as e:
        logging.error("%s", e)
        return 2
    print(f"operation: {parsed.operation.value}")
    print(f"select: {', '.join(parsed.select_columns)}")
    return 0


def cmd_datasets(args: argparse.Namespace) -> int:
    """Print metadata for the given CSV files."""
    try:
        registry = _load_registry(args, _settings(args))
    except (DPQLError, FileNotFoundError, ValueError) as e:
        logging.error("%s", e)
        return 2
    for meta in registry.list_metadata():
        print(
            f"{meta['name']}: {meta['rowCount']} rows, "
            f"columns [{', '.join(meta['columns'])}] (source: {meta['source']})"
        )
    return 0


def cmd_mcp_server(args: argparse.Namespace) -> int:
    """Start the MCP server.

    Default: stdio. If --port is set, run HTTP transport at host:port.
    """
    try:
        mcp_server = importlib.import_module("dpql.interfaces.mcp.server")
    except (ModuleNotFoundError, AttributeError, ImportError) as e:
        logging.error(
            "Failed to import MCP server. Ensure 'mcp' is installed. Error: %s",
            e,
        )
        return 3
    try:
        settings = _settings(args)
    except (FileNotFoundError, ValueError) as e:
        logging.error("%s", e)
        return 2
    port = getattr(args, "port", None)
    host = getattr(args, "host", None) or settings.server_host
    try:
        if port:
            logging.info("Starting MCP HTTP server on %s:%s", host, port)
            mcp_server.run_http(settings, host=host, port=int(port))
        else:
            logging.info("Starting MCP stdio server")
            mcp_server.run(settings)
    except KeyboardInterrupt:
        pass
    return 0


def _add_csv_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--csv",
        action="append",
        required=True,
        help="CSV file to load (repeatable). Dataset name defaults to the file name without extension.",
    )
    p.add_argument(
        "--name",
        action="append",
        help="Dataset name for the matching --csv (repeatable, positional)",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dpql", description="Discover keys, foreign keys and dependencies in CSV data"
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_PACKAGE_VERSION}")
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
    p.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (defaults to $DPQL_CONFIG, then config/dpql.yaml)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_query = sub.add_parser("query", help="Run a DPQL query over CSV files")
    p_query.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Query text, e.g. \"SELECT X, Y FROM IND(X, Y), UCC(Y)\"",
    )
    _add_csv_args(p_query)
    p_query.add_argument(
        "--operation",
        type=str.lower,
        choices=OPERATION_CHOICES,
        help="Run this operation directly instead of classifying the query text",
    )
    p_query.add_argument("--format", choices=FORMAT_CHOICES, default="text", help="Output format")
    p_query.add_argument("--output", default=None, help="Write the result to this file")
    p_query.set_defaults(func=cmd_query)

    p_ucc = sub.add_parser("ucc", help="Find unique column combinations")
    _add_csv_args(p_ucc)
    p_ucc.add_argument("--format", choices=FORMAT_CHOICES, default="text", help="Output format")
    p_ucc.add_argument("--output", default=None, help="Write the result to this file")
    p_ucc.set_defaults(func=cmd_ucc)

    p_classify = sub.add_parser("classify", help="Show which operation a query maps to")
    p_classify.add_argument("query", help="Query text")
    p_classify.set_defaults(func=cmd_classify)

    p_datasets = sub.add_parser("datasets", help="List columns and row counts of CSV files")
    _add_csv_args(p_datasets)
    p_datasets.set_defaults(func=cmd_datasets)

    p_mcp = sub.add_parser("mcp-server", help="Run the MCP tool server (stdio or HTTP)")
    p_mcp.add_argument(
        "--port",
        default=None,
        help="If set, run HTTP transport on the given port",
    )
    p_mcp.add_argument(
        "--host",
        default=None,
        help="Host to bind for HTTP transport (default from settings, 127.0.0.1)",
    )
    p_mcp.set_defaults(func=cmd_mcp_server)

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
