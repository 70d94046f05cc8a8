"""URL construction and sanitization.

Turns a base URL and optional query parameters into a single URL string that
is safe(r) to hand to a platform opener. Forbidden characters are removed,
not escaped. The pipeline is: validate the raw base, filter it, validate the
filtered base again, then append the filtered query pairs.
"""

from collections.abc import Collection, Iterable, Mapping
from typing import Any, Union
from urllib.parse import SplitResult, urlsplit

from .constants import ALLOWED_SCHEMES
from .errors import KeyCollisionError, MalformedURLError
from .platforms import LaunchMode, Platform, detect_platform, forbidden_characters, query_separator

QueryParams = Union[Mapping[Any, Any], Iterable[tuple[Any, Any]]]


def filter_characters(value: Any, forbidden: Collection[str]) -> str:
    """Convert value to text and drop every character contained in forbidden.

    None becomes the empty string. Filtering an already filtered string
    returns it unchanged.
    """
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)
    return "".join(char for char in text if char not in forbidden)


def validate_url(url: str) -> SplitResult:
    """
    Check that url is an absolute http or https URI.

    Args:
        url: The URL to check.

    Returns:
        The parsed URL.

    Raises:
        MalformedURLError: If the URL is empty, fails to parse, has no host, or uses another scheme.
    """
    if not url:
        raise MalformedURLError("URL must not be empty.", suggestion="Pass an absolute URL, e.g. 'https://www.example.com'")

    try:
        parts = urlsplit(url)
        # Port parsing is lazy in urllib and raises on garbage such as 'host:abc'
        parts.port
    except ValueError as e:
        raise MalformedURLError(f"Malformed URL {url!r}: {e}") from e

    if not parts.scheme or not parts.hostname:
        raise MalformedURLError(
            f"Malformed URL {url!r}: expected an absolute URL with a host.",
            suggestion="Include the scheme and host, e.g. 'https://www.example.com'",
        )

    if parts.scheme not in ALLOWED_SCHEMES:
        raise MalformedURLError(f"Expected an http(s) URL, got scheme {parts.scheme!r}.")

    return parts


def _iter_pairs(query_params: QueryParams) -> Iterable[tuple[Any, Any]]:
    if isinstance(query_params, Mapping):
        return query_params.items()
    return query_params


def sanitize_query(query_params: QueryParams | None, forbidden: Collection[str]) -> dict[str, str]:
    """
    Convert and filter query parameters, rejecting keys that coincide.

    Keys and values are converted to text and filtered. Every pair is kept,
    including one whose key filters down to the empty string.

    Args:
        query_params: A mapping, or an iterable of (key, value) pairs.
        forbidden: Characters to remove from every key and value.

    Returns:
        The filtered pairs in input order.

    Raises:
        KeyCollisionError: If two keys are equal after conversion and filtering.
    """
    sanitized: dict[str, str] = {}
    if not query_params:
        return sanitized

    for key, value in _iter_pairs(query_params):
        filtered_key = filter_characters(key, forbidden)
        if filtered_key in sanitized:
            raise KeyCollisionError(filtered_key)
        sanitized[filtered_key] = filter_characters(value, forbidden)

    return sanitized


def form_url(
    url: str,
    query_params: QueryParams | None = None,
    *,
    platform: Platform | None = None,
    mode: LaunchMode = LaunchMode.DIRECT,
) -> str:
    """
    Build the final URL from a base URL and optional query parameters.

    Args:
        url: The base URL. Must be an absolute http(s) URL.
        query_params: Optional query parameters, appended as key=value pairs.
        platform: Platform whose forbidden characters and separator apply. Detected when omitted.
        mode: Launch mode, which decides the separator placed between query pairs.

    Returns:
        The sanitized URL, e.g. 'https://www.example.com?q=hello world'.

    Raises:
        MalformedURLError: If the base URL is not a valid http(s) URL before or after filtering.
        KeyCollisionError: If two query keys coincide after conversion and filtering.
        UnsupportedPlatformError: If platform is omitted and the running OS is unsupported.
    """
    platform = detect_platform() if platform is None else platform
    forbidden = forbidden_characters(platform)

    validate_url(url)
    base = filter_characters(url, forbidden)
    validate_url(base)

    pairs = sanitize_query(query_params, forbidden)
    if not pairs:
        return base

    separator = query_separator(platform, mode)
    query = separator.join(f"{key}={value}" for key, value in pairs.items())

    # Query goes before any fragment
    base, hash_mark, fragment = base.partition("#")
    if "?" not in base:
        joiner = "?"
    elif base.endswith("?"):
        joiner = ""
    else:
        joiner = separator

    return f"{base}{joiner}{query}{hash_mark}{fragment}"
