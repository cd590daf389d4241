"""Request signing and URL building for the REST API."""

from __future__ import annotations

import hashlib
import hmac
import time
from collections.abc import Mapping
from urllib.parse import quote


def _to_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def sha512_hex(payload: str | bytes) -> str:
    """Return the lowercase hex SHA-512 digest of the payload."""
    return hashlib.sha512(_to_bytes(payload)).hexdigest()


def hmac_sha512_hex(secret: str | bytes, payload: str | bytes) -> str:
    """Return the lowercase hex HMAC-SHA512 of the payload keyed by secret."""
    return hmac.new(_to_bytes(secret), _to_bytes(payload), hashlib.sha512).hexdigest()


def join_url_path(prefix: str, path: str) -> str:
    """Join the API prefix and request path into an absolute URL path."""
    return f"/{prefix.lstrip('/')}/{path.lstrip('/')}"


def canonical_query(params: Mapping[str, str]) -> str:
    """Build the unencoded, key-sorted query string used in the signature."""
    return "&".join(f"{key}={params[key]}" for key in sorted(params))


def build_sign_string(
    method: str, url_path: str, query_string: str, payload_hash: str, timestamp: str
) -> str:
    """Assemble the newline-separated string that gets signed."""
    return "\n".join((method, url_path, query_string, payload_hash, timestamp))


def build_headers(api_key: str, sign: str, timestamp: str) -> dict[str, str]:
    """Return the headers carried by every signed request."""
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "SIGN": sign,
        "Timestamp": timestamp,
        "KEY": api_key,
    }


def build_full_url(domain: str, prefix: str, path: str, params: Mapping[str, str]) -> str:
    """Build the full request URL with percent-encoded, key-sorted query parameters."""
    base = f"{domain.rstrip('/')}/{prefix.lstrip('/')}/{path.lstrip('/')}"
    if not params:
        return base
    query = "&".join(
        f"{quote(key, safe='')}={quote(params[key], safe='')}" for key in sorted(params)
    )
    return f"{base}?{query}"


def current_timestamp() -> str:
    """Return the current Unix time in whole seconds, as a string."""
    return str(int(time.time()))