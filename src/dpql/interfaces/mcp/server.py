"""
MCP server exposing dataset management and discovery tools.

Tools:
 - health
 - upload_dataset
 - list_datasets
 - delete_dataset
 - delete_all_datasets
 - execute_query
 - find_unique_keys

Every tool returns a JSON-serializable dict with an ``ok`` flag; failures carry
an ``error`` message instead of raising through the transport.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Dict, Optional

from dpql.config import Settings, load_settings
from dpql.core.enums import Operation
from dpql.core.errors import DatasetNotFoundError, InputError
from dpql.core.registry import DatasetRegistry
from dpql.discovery.runner import execute_query, run_query
from dpql.ingestion import dataset_name_from_filename, parse_csv

try:
    from mcp.server.fastmcp import FastMCP
except ImportError as exc:
    raise RuntimeError(
        "The 'mcp' package is required for the MCP server. Install with: pip install mcp"
    ) from exc


# Server state: one registry per process, cleared by reset_registry()
_SETTINGS: Settings = Settings()
_REGISTRY = DatasetRegistry()
_SERVER = FastMCP("dpql-tools")

# Configure logging for MCP server
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr)  # MCP uses stdout for protocol
    ],
)
logger = logging.getLogger(__name__)


def get_registry() -> DatasetRegistry:
    return _REGISTRY


def reset_registry() -> None:
    """Drop every uploaded dataset (server shutdown, tests)."""
    _REGISTRY.remove_all()


def configure(settings: Settings) -> None:
    global _SETTINGS
    _SETTINGS = settings


def _error(message: str) -> Dict[str, Any]:
    return {"ok": False, "error": message}


def _resolve_dataset_name(name: Optional[str], filename: Optional[str]) -> str:
    """Trimmed explicit name, else file name without extension, else 'dataset'."""
    if name and name.strip():
        return name.strip()
    return dataset_name_from_filename(filename)


@_SERVER.tool("health")
async def health() -> Dict[str, Any]:
    """Report that the server is running."""
    return {"ok": True, "message": "DPQL backend is running!"}


@_SERVER.tool("upload_dataset")
async def upload_dataset(
    csv: str, name: Optional[str] = None, filename: Optional[str] = None
) -> Dict[str, Any]:
    """Parse CSV text and register it, replacing any dataset with the same name."""
    try:
        if not csv:
            raise InputError("No CSV content provided")
        size = len(csv.encode("utf-8"))
        if size > _SETTINGS.max_upload_bytes:
            raise InputError(
                f"CSV content too large: {size} bytes (limit {_SETTINGS.max_upload_bytes})"
            )
        dataset_name = _resolve_dataset_name(name, filename)
        source = filename or (name.strip() if name and name.strip() else None) or dataset_name
        dataset = parse_csv(
            csv, dataset_name, delimiter=_SETTINGS.csv_delimiter, source=source
        )
        _REGISTRY.add(dataset_name, dataset)
    except InputError as e:
        logger.error("Error in upload_dataset: %s", e)
        return _error(str(e))

    return {
        "ok": True,
        "dataset": {
            "name": dataset.name,
            "columns": list(dataset.columns),
            "rows": dataset.row_count,
            "source": dataset.source,
        },
    }


@_SERVER.tool("list_datasets")
async def list_datasets() -> Dict[str, Any]:
    """List uploaded datasets with columns and row counts."""
    return {"ok": True, "datasets": _REGISTRY.list_metadata()}


@_SERVER.tool("delete_dataset")
async def delete_dataset(name: str) -> Dict[str, Any]:
    """Remove one dataset by name."""
    if not name or not name.strip():
        return _error("Dataset name is required")
    try:
        _REGISTRY.remove(name)
    except DatasetNotFoundError as e:
        return _error(str(e))
    return {"ok": True, "deleted": name}


@_SERVER.tool("delete_all_datasets")
async def delete_all_datasets() -> Dict[str, Any]:
    """Remove every dataset."""
    return {"ok": True, "deleted": _REGISTRY.remove_all()}


@_SERVER.tool("execute_query")
async def execute_dpql_query(query: str) -> Dict[str, Any]:
    """Classify a DPQL query and run it over the uploaded datasets.

    Recognized forms: ``IND(...)`` with ``UCC(...)`` (foreign keys), ``UCC(...)``
    alone (unique keys), ``FD(...)`` (functional dependencies). Anything else
    runs foreign-key discovery.
    """
    try:
        parsed, result = run_query(query, _REGISTRY)
    except InputError as e:
        return _error(str(e))
    return {"ok": True, "parsed": parsed.to_dict(), "result": result.to_dict()}


@_SERVER.tool("find_unique_keys")
async def find_unique_keys() -> Dict[str, Any]:
    """Run unique-key discovery over the uploaded datasets.

    With nothing uploaded the result has no tables and a "No datasets loaded"
    warning.
    """
    result = execute_query(Operation.FIND_UNIQUE_KEYS, _REGISTRY.snapshot())
    return {"ok": True, "result": result.to_dict()}


# Transport functions
def run(settings: Optional[Settings] = None) -> None:
    """Run MCP server over stdio."""
    configure(settings or load_settings())
    logger.info("Starting MCP server (stdio)")
    try:
        asyncio.run(_SERVER.run_stdio_async())
    finally:
        reset_registry()


async def _run_http(host: str, port: int) -> None:
    """Start HTTP server with explicit uvicorn configuration."""
    import uvicorn

    app = _SERVER.streamable_http_app()
    config = uvicorn.Config(
        app,
        host=host,
        port=int(port),
        log_level="info",
    )
    server = uvicorn.Server(config)
    await server.serve()


def run_http(
    settings: Optional[Settings] = None,
    *,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """Run MCP server over HTTP."""
    configure(settings or load_settings())
    host = host or _SETTINGS.server_host
    port = int(port or _SETTINGS.server_port)

    logger.info("Starting HTTP MCP server on %s:%d", host, port)
    try:
        asyncio.run(_run_http(host, port))
    finally:
        reset_registry()
