"""leguy-mcp: MCP server for Uruguayan legislation published by IMPO."""
