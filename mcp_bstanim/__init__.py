"""MCP server exposing the bstanim engine."""
