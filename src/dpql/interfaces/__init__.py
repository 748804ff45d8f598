"""User-facing entry points: command line and MCP tool server."""
