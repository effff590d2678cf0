"""
Data Models
===========

Pydantic models for tool definitions, invocations, upstream requests and results.
"""
