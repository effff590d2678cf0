"""
Credential Resolution
=====================

Determines which upstream API key applies to an invocation.

Priority: ``Authorization: Bearer <key>`` header, then ``x-api-key`` header,
then the process-wide fallback key. Header names are case-insensitive; the
``Bearer `` prefix is not.
"""

from typing import Mapping, Optional

from mockup_mcp.models.schemas import Credential

BEARER_PREFIX = "Bearer "
AUTHORIZATION_HEADER = "authorization"
API_KEY_HEADER = "x-api-key"


def _lower_keys(headers: Optional[Mapping[str, str]]) -> dict:
    if not headers:
        return {}
    return {str(name).lower(): value for name, value in headers.items()}


def resolve_credential(
    headers: Optional[Mapping[str, str]], fallback_api_key: Optional[str] = None
) -> Credential:
    """
    Resolve the API key for one invocation.

    Args:
        headers: Transport request headers, or None for stdio
        fallback_api_key: Process-wide key from configuration

    Returns:
        Credential, with ``api_key`` None when nothing applies
    """
    normalized = _lower_keys(headers)

    authorization = normalized.get(AUTHORIZATION_HEADER)
    if authorization and authorization.startswith(BEARER_PREFIX):
        return Credential(api_key=authorization[len(BEARER_PREFIX):], source="authorization")

    api_key = normalized.get(API_KEY_HEADER)
    if api_key:
        return Credential(api_key=api_key, source=API_KEY_HEADER)

    if fallback_api_key:
        return Credential(api_key=fallback_api_key, source="fallback")

    return Credential()
