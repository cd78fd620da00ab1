"""Field projection for document parts parsed with xmltodict.

This module turns a parsed document part into a flat result mapping using
a declarative field table (see ``docprops.mappings``).

Key features:
- Structural path lookup over nested dicts and lists
- Handle XML attribute conventions (@attr, #text)
- Type coercion with the same rules used for custom properties
- Empty string suppression (missing metadata is not an error)
"""

import math
import re
from typing import Any, Dict, Iterable, Tuple

from docprops.core.models import FieldMapping, FieldType

PATH_SEPARATOR = "."
TEXT_KEY = "#text"

_MISSING = object()

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)(e[+-]?\d+)?$", re.IGNORECASE | re.ASCII)
_INTEGER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_RADIX_PREFIXES = {"0x": 16, "0b": 2, "0o": 8}
_RADIX_RE = {
    16: re.compile(r"^[0-9a-f]+$", re.IGNORECASE),
    2: re.compile(r"^[01]+$"),
    8: re.compile(r"^[0-7]+$"),
}
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def split_path(path: str) -> list:
    return path.split(PATH_SEPARATOR)


def resolve_path(data: Any, path: str) -> Tuple[bool, Any]:
    """Look up a dotted path in a parsed tree.

    Dict keys are matched exactly; numeric segments index into lists.
    Any absent intermediate key means the path is not found. A ``#text``
    segment applied to a plain string resolves to the string itself,
    since xmltodict only produces ``#text`` for elements with attributes.

    Args:
        data: The parsed tree (dicts, lists and scalars).
        path: Dotted key path, e.g. ``"cp:coreProperties.dc:title"``.

    Returns:
        Tuple of (found, value). ``value`` is None when not found.

    Examples:
        >>> resolve_path({"a": {"b": "x"}}, "a.b")
        (True, 'x')
        >>> resolve_path({"a": {"b": None}}, "a.b")
        (True, None)
        >>> resolve_path({"a": [{"b": 1}, {"b": 2}]}, "a.1.b")
        (True, 2)
        >>> resolve_path({"a": {}}, "a.b.c")
        (False, None)
    """
    current = data

    for key in split_path(path):
        if isinstance(current, dict):
            current = current.get(key, _MISSING)
        elif isinstance(current, list) and key.isdigit():
            index = int(key)
            current = current[index] if index < len(current) else _MISSING
        elif isinstance(current, str) and key == TEXT_KEY:
            continue
        else:
            return False, None

        if current is _MISSING:
            return False, None

    return True, current


def element_text(value: Any) -> Any:
    """Reduce an xmltodict element value to its scalar content.

    Elements with attributes are dicts holding their text under ``#text``;
    repeated elements are lists, of which the first one is used.

    Examples:
        >>> element_text({"@xsi:type": "dcterms:W3CDTF", "#text": "2024-01-15T10:30:00Z"})
        '2024-01-15T10:30:00Z'
        >>> element_text(["first", "second"])
        'first'
        >>> element_text({"@attr": "value"}) is None
        True
    """
    if isinstance(value, list):
        return element_text(value[0]) if value else None
    if isinstance(value, dict):
        return value.get(TEXT_KEY)
    return value


def to_number(value: Any) -> Any:
    """Convert a raw value to a number.

    Follows ECMAScript ``Number()`` string conversion: blank input is 0,
    decimal, exponent, ``0x``/``0b``/``0o`` and Infinity literals parse,
    and anything else becomes NaN.

    Examples:
        >>> to_number("42")
        42
        >>> to_number(" 1.5e3 ")
        1500.0
        >>> to_number("")
        0
        >>> to_number("0x1A")
        26
        >>> math.isnan(to_number("n/a"))
        True
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value

    text = str(value).strip()
    if not text:
        return 0

    if _INTEGER_RE.match(text):
        return int(text)
    if _DECIMAL_RE.match(text):
        return float(text)

    if text in _INFINITY:
        return _INFINITY[text]

    lowered = text.lower()
    base = _RADIX_PREFIXES.get(lowered[:2])
    if base is not None and _RADIX_RE[base].match(lowered[2:]):
        return int(lowered[2:], base)

    return math.nan


def to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce(value: Any, field_type: FieldType) -> Tuple[Any, bool]:
    """Coerce a raw value to the mapped type.

    Args:
        value: Raw scalar from the document part.
        field_type: Target type of the mapping entry.

    Returns:
        Tuple of (coerced_value, suppress). Only empty strings are
        suppressed; numbers are always kept, including 0 and NaN.

    Examples:
        >>> coerce("", FieldType.STRING)
        ('', True)
        >>> coerce("0", FieldType.NUMBER)
        (0, False)
        >>> coerce("Word", FieldType.STRING)
        ('Word', False)
    """
    if field_type is FieldType.NUMBER:
        return to_number(value), False

    text = to_string(value)
    return text, text == ""


def set_path(target: Dict[str, Any], path: str, value: Any) -> None:
    """Set a value at a dotted path, creating intermediate dicts.

    A non-dict value found on the way is replaced by a dict.

    Examples:
        >>> out = {}
        >>> set_path(out, "stats.pages", 3)
        >>> out
        {'stats': {'pages': 3}}
    """
    head, _, rest = path.partition(PATH_SEPARATOR)
    if not rest:
        target[head] = value
        return

    child = target.get(head)
    if not isinstance(child, dict):
        child = {}
        target[head] = child
    set_path(child, rest, value)


def project_fields(tree: Any, mappings: Iterable[FieldMapping]) -> Dict[str, Any]:
    """Project a parsed document part through a field table.

    Args:
        tree: Parsed part as produced by xmltodict.
        mappings: Field table for the part.

    Returns:
        Fresh dict holding only the fields that exist in the part and are
        not suppressed, keyed by each mapping's ``name``.
    """
    data: Dict[str, Any] = {}

    for mapping in mappings:
        found, raw = resolve_path(tree, mapping.path)
        if not found:
            continue

        value, suppress = coerce(element_text(raw), mapping.type)
        if suppress:
            continue

        set_path(data, mapping.name, value)

    return data
