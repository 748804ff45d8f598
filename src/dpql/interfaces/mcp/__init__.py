"""MCP tool server over the in-memory dataset registry."""
