"""
Moonshine - MCP server for the Moonshine knowledge store.

Mashes (knowledge entries) and the edges between them live in a local
SQLite database; this package exposes CRUD, graph views, keyword search
and semantic search over it.
"""

__version__ = "0.1.0"
