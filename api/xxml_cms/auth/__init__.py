"""Caller identification for the XXML CMS API."""

from xxml_cms.auth.api_key import create_api_key, generate_api_key, get_key_prefix, hash_api_key

__all__ = [
    "create_api_key",
    "generate_api_key",
    "hash_api_key",
    "get_key_prefix",
]
