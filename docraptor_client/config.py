"""
Credential and endpoint resolution.

The API key is looked up in this order: an explicit argument, the value
cached by a previous explicit call, then the DOCRAPTOR_API_KEY environment
variable.
"""
import os
from typing import Optional

from .exceptions import NoApiKeyProvided

API_KEY_ENV = "DOCRAPTOR_API_KEY"
BASE_URL_ENV = "DOCRAPTOR_URL"
DEFAULT_BASE_URL = "https://docraptor.com/"

_cached_api_key: Optional[str] = None


def api_key(key: Optional[str] = None) -> str:
    global _cached_api_key
    if key:
        _cached_api_key = key
    resolved = _cached_api_key or os.getenv(API_KEY_ENV)
    if not resolved:
        raise NoApiKeyProvided("No API key provided")
    return resolved


def reset_api_key() -> None:
    """Forget the process-wide cached key."""
    global _cached_api_key
    _cached_api_key = None


def base_url() -> str:
    return os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL
