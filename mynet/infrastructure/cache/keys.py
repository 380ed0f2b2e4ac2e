"""Cache key builders. Single place for key format (DRY).

HTTP response keys look like::

    tenders:http:GET:/api/tenders:{"page":"2"}

The leading resource family lets write invalidation (``tenders:*``)
reach cached responses. Key components must not contain CACHE_KEY_SEP
except the path and query, which are always the last two parts.
"""

import json
from urllib.parse import parse_qsl

from mynet.core.constants import (
    CACHE_FAMILY_DEFAULT,
    CACHE_KEY_KIND_HTTP,
    CACHE_KEY_SEP,
    KEY_FAMILIES,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def resource_family_for_path(path: str) -> str:
    """Return the first resource family whose keyword occurs in path, else 'http'."""
    for family, keywords in KEY_FAMILIES:
        if any(keyword in path for keyword in keywords):
            return family
    return CACHE_FAMILY_DEFAULT


def family_pattern(family: str) -> str:
    """Glob pattern matching every key of a resource family (e.g. tenders:*)."""
    _validate_key_component(family, "family")
    return f"{family}{CACHE_KEY_SEP}*"


def serialize_query(query_string: bytes | str) -> str:
    """Serialize a raw query string as compact JSON with sorted keys.

    Repeated parameters become lists; blank values are kept so that
    ``?q=`` and no query are distinct keys.
    """
    if isinstance(query_string, bytes):
        query_string = query_string.decode("latin-1")
    params: dict[str, str | list[str]] = {}
    for name, value in parse_qsl(query_string, keep_blank_values=True):
        current = params.get(name)
        if current is None:
            params[name] = value
        elif isinstance(current, list):
            current.append(value)
        else:
            params[name] = [current, value]
    return json.dumps(params, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def http_cache_key(method: str, path: str, query_string: bytes | str = b"") -> str:
    """Cache key for an HTTP response (family + method + path + query)."""
    method = method.upper()
    _validate_key_component(method, "method")
    family = resource_family_for_path(path)
    return CACHE_KEY_SEP.join(
        (family, CACHE_KEY_KIND_HTTP, method, path, serialize_query(query_string))
    )
