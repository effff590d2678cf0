"""
Dynamic Mockups MCP Server
==========================

A Model Context Protocol (MCP) server exposing the Dynamic Mockups API
(catalogs, collections, mockup templates, renders, print files and PSD
uploads) as tools that AI assistants can call.

This package provides:
- MCP tool catalog and router with uniform credential and error handling
- aiohttp client for the upstream Dynamic Mockups REST API
- stdio transport for desktop MCP clients
- FastAPI application serving the Streamable HTTP transport with sessions
"""

__version__ = "1.0.0"
__author__ = "Dynamic Mockups MCP Team"
