"""
Water Balance MCP Server Tools

This package contains the charge balance validator and calculator and the
MCP tool implementations built on them.
"""

# Tools are imported directly in server.py to maintain independence
# This file is kept minimal to prevent circular imports

__all__ = []
