"""URL handling for module requests.

Two halves:

- ``sluice.urls.normalize``: pure ``str -> str`` steps that turn a raw
  request URL into the canonical form the module graph is keyed by.
- ``sluice.urls.predicates``: pure classifiers over URL strings
  (is this a script? a stylesheet? an ``?import``? a versioned dep?).

Nothing here performs I/O.
"""

from sluice.urls.normalize import (
    canonical_module_url,
    decode_uri,
    inject_query,
    normalize,
    prettify_url,
    remove_import_query,
    remove_timestamp_query,
    restore_null_byte,
    unwrap_id,
)
from sluice.urls.predicates import (
    clean_url,
    has_dep_version,
    is_css_request,
    is_direct_css_request,
    is_direct_request,
    is_html_proxy,
    is_import_request,
    is_js_request,
)

__all__ = [
    "canonical_module_url",
    "clean_url",
    "decode_uri",
    "has_dep_version",
    "inject_query",
    "is_css_request",
    "is_direct_css_request",
    "is_direct_request",
    "is_html_proxy",
    "is_import_request",
    "is_js_request",
    "normalize",
    "prettify_url",
    "remove_import_query",
    "remove_timestamp_query",
    "restore_null_byte",
    "unwrap_id",
]
