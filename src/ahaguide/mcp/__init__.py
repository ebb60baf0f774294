"""MCP host and the query façade it serves."""
