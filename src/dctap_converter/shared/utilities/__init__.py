"""
Shared utilities for namespace resolution and multi-value field encoding.
"""

from .multivalue import (
    decode,
    decode_lines,
    encode,
    encode_or_none,
    flatten,
    newlines_to_pipes,
    pair_defaults,
    split_defaults,
)
from .namespaces import (
    DEFAULT_NAMESPACES,
    DEFAULT_PREFIXES,
    NamespaceResolver,
    compress,
    expand,
    placeholder_uri,
    prefix_of,
)

__all__ = [
    # Multi-value codec
    "decode",
    "decode_lines",
    "encode",
    "encode_or_none",
    "flatten",
    "newlines_to_pipes",
    "pair_defaults",
    "split_defaults",
    # Namespaces
    "DEFAULT_NAMESPACES",
    "DEFAULT_PREFIXES",
    "NamespaceResolver",
    "compress",
    "expand",
    "placeholder_uri",
    "prefix_of",
]
