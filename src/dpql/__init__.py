"""DPQL tools: dependency discovery over in-memory tabular datasets.

Given several named CSV datasets, finds candidate keys, candidate foreign keys
and single-column functional dependencies. The engine lives in
`dpql.discovery`; `dpql.interfaces` holds the CLI and the MCP tool server.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
