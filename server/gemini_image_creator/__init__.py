"""MCP stdio server exposing Google Gemini image generation as a tool."""

__version__ = "0.1.0"
