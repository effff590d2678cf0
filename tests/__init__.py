"""
Test Suite
==========

Test suite matching the mockup_mcp/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: MCP protocol and HTTP transport tests
"""
