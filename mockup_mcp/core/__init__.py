"""
Core Logic
==========

Credential resolution, upstream client, field projection, response
normalization and usage tracking.
"""
