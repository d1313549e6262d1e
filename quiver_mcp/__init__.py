"""
Quiver MCP Gateway

Exposes QuiverQuant financial-data endpoints as MCP tools with a
response-shaping pipeline (mode, format, field selection, pagination)
tuned for LLM token budgets.
"""

__version__ = "1.0.0"

SERVER_NAME = "quiver-mcp-server"
