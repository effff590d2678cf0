"""
API Routes
==========

Plain HTTP endpoints served next to the MCP transport.
"""
