"""Parse raw XML or JSON text into a list of row items (value trees)."""
from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Set

from . import config
from .detection import DataFormat
from .errors import EmptyInputError, InvalidFormatError, UnrecognizedFormatError
from .values import ValueKind, kind_of

logger = logging.getLogger(__name__)

REPEATED_TAG_MODES = ("collect", "last")


def _local_name(tag: str) -> str:
    # ElementTree spells namespaced names as '{uri}local'.
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def element_to_value(
    element: ET.Element,
    depth: int = 0,
    *,
    max_depth: Optional[int] = None,
    repeated_tags: Optional[str] = None,
) -> Any:
    """Convert one element into a value.

    - element with child elements -> mapping keyed by each child's tag
      (the element's own text is ignored)
    - leaf element with attributes -> mapping of attribute name to value
    - bare leaf element -> its text ('' when empty)
    """
    max_depth = config.MAX_DEPTH if max_depth is None else max_depth
    repeated_tags = repeated_tags or config.XML_REPEATED_TAGS
    if depth > max_depth:
        raise InvalidFormatError(
            "Invalid XML format",
            detail=f"nesting deeper than {max_depth} levels",
            data_format=DataFormat.XML,
        )

    children = list(element)
    if children:
        result: Dict[str, Any] = {}
        collected: Set[str] = set()
        for child in children:
            key = _local_name(child.tag)
            value = element_to_value(child, depth + 1, max_depth=max_depth, repeated_tags=repeated_tags)
            if key in result and repeated_tags == "collect":
                if key in collected:
                    result[key].append(value)
                else:
                    result[key] = [result[key], value]
                    collected.add(key)
            else:
                result[key] = value
        return result

    if element.attrib:
        return {_local_name(name): value for name, value in element.attrib.items()}

    return element.text or ""


def parse_xml_items(text: str, *, max_depth: Optional[int] = None, repeated_tags: Optional[str] = None) -> List[Any]:
    """Each direct child of the document root becomes one item."""
    repeated_tags = (repeated_tags or config.XML_REPEATED_TAGS).lower()
    if repeated_tags not in REPEATED_TAG_MODES:
        raise ValueError(f"repeated_tags must be one of {REPEATED_TAG_MODES}, got {repeated_tags!r}")

    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError as exc:
        logger.debug("XML parse error: %s", exc)
        raise InvalidFormatError("Invalid XML format", detail=str(exc), data_format=DataFormat.XML) from exc

    children = list(root)
    if not children:
        raise EmptyInputError("No data found in XML", detail=f"<{_local_name(root.tag)}> has no child elements",
                              data_format=DataFormat.XML)

    try:
        return [
            element_to_value(child, 1, max_depth=max_depth, repeated_tags=repeated_tags)
            for child in children
        ]
    except RecursionError as exc:
        raise InvalidFormatError(
            "Invalid XML format", detail="nesting too deep to convert", data_format=DataFormat.XML
        ) from exc


def _check_depth(value: Any, max_depth: int) -> None:
    stack = [(value, 0)]
    while stack:
        current, depth = stack.pop()
        if depth > max_depth:
            raise InvalidFormatError(
                "Invalid JSON format",
                detail=f"nesting deeper than {max_depth} levels",
                data_format=DataFormat.JSON,
            )
        kind = kind_of(current)
        if kind is ValueKind.MAPPING:
            stack.extend((v, depth + 1) for v in current.values())
        elif kind is ValueKind.SEQUENCE:
            stack.extend((v, depth + 1) for v in current)


def _reject_constant(name: str):
    # NaN and Infinity are not part of the JSON grammar.
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_json_items(text: str, *, max_depth: Optional[int] = None) -> List[Any]:
    """Resolve the row list of a JSON document.

    - array root -> its items
    - object root -> items of the first array-valued property, or the
      object itself when it has none
    """
    max_depth = config.MAX_DEPTH if max_depth is None else max_depth
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        logger.debug("JSON parse error: %s", exc)
        raise InvalidFormatError("Invalid JSON format", detail=str(exc), data_format=DataFormat.JSON) from exc

    _check_depth(parsed, max_depth)

    kind = kind_of(parsed)
    if kind is ValueKind.SEQUENCE:
        items = parsed
    elif kind is ValueKind.MAPPING:
        array_keys = [key for key, value in parsed.items() if kind_of(value) is ValueKind.SEQUENCE]
        if array_keys:
            logger.debug("Using array property %r as the row list", array_keys[0])
            items = parsed[array_keys[0]]
        else:
            items = [parsed]
    else:
        raise InvalidFormatError(
            "JSON must contain an array or object with array properties",
            detail=f"root value is {type(parsed).__name__}",
            data_format=DataFormat.JSON,
        )

    if not items:
        raise EmptyInputError(data_format=DataFormat.JSON)
    return items


def parse_tree(text: str, data_format: DataFormat, **options) -> List[Any]:
    if data_format is DataFormat.XML:
        return parse_xml_items(text, **options)
    if data_format is DataFormat.JSON:
        return parse_json_items(text, max_depth=options.get("max_depth"))
    raise UnrecognizedFormatError(data_format=data_format)
