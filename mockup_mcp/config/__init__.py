"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Process-wide settings (fallback API key, upstream, transport, CORS)
- logging: Structured logging configuration
"""
