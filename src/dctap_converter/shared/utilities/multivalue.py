"""
Multi-value text field codec.

Several DCTap cells (valueShape, valueConstraint, the LC default columns)
hold a list of values inside a single text field. The canonical stored
form is newline-joined; on read, comma, pipe and newline are accepted
interchangeably because different writers used different separators.

Usage:
    from dctap_converter.shared.utilities.multivalue import encode, decode

    encode(["A", " B ", ""])      # "A\\nB"
    decode("A,B|C\\nD")            # ["A", "B", "C", "D"]
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

CANONICAL_SEPARATOR = "\n"
PIPE_SEPARATOR = " | "

_ANY_SEPARATOR = re.compile(r"[,|\n]")
_LINE_SEPARATOR = re.compile(r"\r?\n")


def _clean(values: Iterable[str]) -> List[str]:
    return [v.strip() for v in values if v is not None and v.strip()]


def encode(values: Iterable[str]) -> str:
    """Join values with newlines after trimming and dropping empties."""
    return CANONICAL_SEPARATOR.join(_clean(values))


def encode_or_none(values: Iterable[str]) -> Optional[str]:
    """Like encode() but returns None instead of an empty string."""
    return encode(values) or None


def decode(text: Optional[str]) -> List[str]:
    """Split on comma, pipe or newline; trim and drop empty elements."""
    if not text:
        return []
    return _clean(_ANY_SEPARATOR.split(text))


def decode_lines(text: Optional[str]) -> List[str]:
    """Split on newlines only.

    Used for fields whose elements are free text (literal defaults, remarks)
    and may legitimately contain commas.
    """
    if not text:
        return []
    return _clean(_LINE_SEPARATOR.split(text))


def flatten(values: Iterable[str]) -> List[str]:
    """Split every element on commas and flatten into one list."""
    result: List[str] = []
    for value in values or []:
        if not isinstance(value, str):
            continue
        result.extend(_clean(value.split(",")))
    return result


def newlines_to_pipes(text: Optional[str]) -> Optional[str]:
    """Render embedded newlines as ' | ' for single-line cells."""
    if text is None:
        return None
    return text.replace("\n", PIPE_SEPARATOR)


def split_defaults(defaults: Iterable[Dict[str, str]]) -> Tuple[Optional[str], Optional[str]]:
    """Split default objects into (literal list, URI list) encoded fields.

    Each list only includes the entries where that side was present, so the
    two lists are independent and may differ in length.
    """
    literals: List[str] = []
    uris: List[str] = []
    for item in defaults or []:
        if not isinstance(item, dict):
            continue
        if item.get("defaultLiteral"):
            literals.append(item["defaultLiteral"])
        if item.get("defaultURI"):
            uris.append(item["defaultURI"])
    return encode_or_none(literals), encode_or_none(uris)


def pair_defaults(literal_text: Optional[str], uri_text: Optional[str]) -> List[Dict[str, str]]:
    """Pair literal and URI lists positionally into default objects.

    Index i of the literals pairs with index i of the URIs. When one list is
    shorter the missing side is omitted from that object, never padded.
    """
    literals = decode_lines(literal_text)
    uris = decode_lines(uri_text)
    defaults: List[Dict[str, str]] = []
    for i in range(max(len(literals), len(uris))):
        item: Dict[str, str] = {}
        if i < len(uris):
            item["defaultURI"] = uris[i]
        if i < len(literals):
            item["defaultLiteral"] = literals[i]
        if item:
            defaults.append(item)
    return defaults
