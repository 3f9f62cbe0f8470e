"""Request classification.

Decides which path a request takes through the transform middleware.
Ignored requests are recognized from the raw URL before any decoding;
everything else is classified on the normalized URL.
"""

from enum import Enum

from sluice.urls.normalize import normalize
from sluice.urls.predicates import (
    clean_url,
    is_css_request,
    is_html_proxy,
    is_import_request,
    is_js_request,
)

IGNORED_URLS = frozenset({"/", "/favicon.ico"})


class RequestKind(Enum):
    IGNORED = "ignored"
    SOURCE_MAP = "source-map"
    MODULE = "module"
    UNHANDLED = "unhandled"


def is_ignored(method: str, raw_url: str) -> bool:
    """Non-GET requests and a few well-known page URLs are never modules."""
    return method != "GET" or raw_url in IGNORED_URLS


def is_module_url(url: str) -> bool:
    """True for anything served as a transformed module."""
    return is_js_request(url) or is_import_request(url) or is_css_request(url) or is_html_proxy(url)


def classify(method: str, raw_url: str) -> tuple[RequestKind, str | None]:
    """Classify a request, normalizing its URL along the way.

    Returns the kind and the normalized URL (``None`` for ignored
    requests, which are never decoded).

    Raises:
        MalformedURL: If the URL cannot be percent-decoded.
    """
    if is_ignored(method, raw_url):
        return RequestKind.IGNORED, None

    url = normalize(raw_url)
    if clean_url(url).endswith(".map"):
        return RequestKind.SOURCE_MAP, url
    if is_module_url(url):
        return RequestKind.MODULE, url
    return RequestKind.UNHANDLED, url


def public_path_advice(public_prefix: str | None, url: str) -> str | None:
    """The root-relative URL to use instead of an explicit public-dir URL.

    Files in the public directory are served at the root, so
    ``/public/logo.svg`` should be requested as ``/logo.svg``. Returns
    None when *url* does not start with *public_prefix*.
    """
    if public_prefix is None or not url.startswith(public_prefix):
        return None
    return url.replace(public_prefix, "/", 1)
